import pytest

from response_envelope import ResponseSettings, finalizer_from_env, get_s3_signer_from_env, settings_from_env


def test_defaults(monkeypatch) -> None:
    for name in ("JSONP_CALLBACK_PARAMS", "SIGNED_URL_EXPIRES", "RESOLVE_TIMEOUT_SEC"):
        monkeypatch.delenv(name, raising=False)
    assert settings_from_env() == ResponseSettings(jsonp_callback_params=("callback",), signed_url_expires=900, resolve_timeout_sec=None)


def test_values_from_env(monkeypatch) -> None:
    monkeypatch.setenv("JSONP_CALLBACK_PARAMS", "cb, callback,")
    monkeypatch.setenv("SIGNED_URL_EXPIRES", "300")
    monkeypatch.setenv("RESOLVE_TIMEOUT_SEC", "2.5")
    settings = settings_from_env()
    assert settings.jsonp_callback_params == ("cb", "callback")
    assert settings.signed_url_expires == 300
    assert settings.resolve_timeout_sec == 2.5


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_bad_expiry_is_rejected(monkeypatch, raw) -> None:
    monkeypatch.setenv("SIGNED_URL_EXPIRES", raw)
    with pytest.raises(RuntimeError, match="SIGNED_URL_EXPIRES"):
        settings_from_env()


def test_signer_requires_key_pair(monkeypatch) -> None:
    monkeypatch.setenv("S3_KEY_ID", "AKIDEXAMPLE")
    monkeypatch.delenv("S3_SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError, match="S3_SECRET_KEY"):
        get_s3_signer_from_env()


def test_signer_is_cached(monkeypatch) -> None:
    monkeypatch.setenv("S3_ENDPOINT_URL", "https://storage.yandexcloud.net")
    monkeypatch.setenv("S3_REGION", "ru-central1")
    monkeypatch.setenv("S3_KEY_ID", "AKIDEXAMPLE")
    monkeypatch.setenv("S3_SECRET_KEY", "secret")
    assert get_s3_signer_from_env() is get_s3_signer_from_env()


def test_finalizer_from_env(monkeypatch) -> None:
    monkeypatch.setenv("JSONP_CALLBACK_PARAMS", "cb")
    monkeypatch.setenv("SIGNED_URL_EXPIRES", "120")
    monkeypatch.setenv("RESOLVE_TIMEOUT_SEC", "3")
    monkeypatch.setenv("S3_KEY_ID", "AKIDEXAMPLE")
    monkeypatch.setenv("S3_SECRET_KEY", "secret")
    finalizer = finalizer_from_env()
    assert finalizer.settings.jsonp_callback_params == ("cb",)
    assert finalizer.resolver.expires == 120
    assert finalizer.resolver.timeout_sec == 3.0
    assert finalizer.new_context({"queryStringParameters": {"cb": "x"}}).settings is finalizer.settings
