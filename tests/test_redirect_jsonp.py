import pytest

from response_envelope import (
    REDIRECT_CODES,
    InvalidRedirectStatus,
    Redirect,
    callback_name,
    parse_redirect,
    redirect_body,
    sanitize_callback,
    wrap_jsonp,
)


def test_parse_redirect_default_status() -> None:
    assert parse_redirect("http://x") == Redirect(302, "http://x")


@pytest.mark.parametrize("status", sorted(REDIRECT_CODES))
def test_parse_redirect_accepts_every_redirect_code(status) -> None:
    assert parse_redirect(status, "http://x") == Redirect(status, "http://x")


@pytest.mark.parametrize("status", [299, 306, 309, 310, 200, "301", True, None])
def test_parse_redirect_rejects_invalid_status(status) -> None:
    with pytest.raises(InvalidRedirectStatus) as exc:
        parse_redirect(status, "http://x")
    assert str(exc.value) == f"{status} is an invalid redirect status code"


def test_redirect_codes_exclude_unassigned_306() -> None:
    assert REDIRECT_CODES == {300, 301, 302, 303, 304, 305, 307, 308}


def test_redirect_body_escapes_both_positions() -> None:
    assert redirect_body(301, 'http://x?a="b"') == '<p>301 Redirecting to <a href="http://x?a=&quot;b&quot;">http://x?a=&quot;b&quot;</a></p>'


def test_callback_name_follows_configured_order() -> None:
    query = {"callback": "first", "cb": "second"}
    assert callback_name(query, ("cb", "callback")) == "second"
    assert callback_name(query) == "first"
    assert callback_name({"cb": ""}, ("cb",)) == "callback"
    assert callback_name(None) == "callback"
    assert callback_name({"callback": ["multi", "other"]}) == "multi"


def test_sanitize_callback() -> None:
    assert sanitize_callback("foo bar") == "foo_bar"
    assert sanitize_callback("$jq_1.cb();alert(1)//") == "$jq_1_cb___alert_1___"


def test_wrap_jsonp_serializes_value() -> None:
    assert wrap_jsonp("cb", {"foo": "bar"}) == 'cb({"foo":"bar"})'
    assert wrap_jsonp("cb", None) == "cb(null)"
    assert wrap_jsonp("cb", "text") == 'cb("text")'
