import json

import pytest

from response_envelope import Binary, Empty, Scalar, Structured, Text, classify, serialize


@pytest.mark.parametrize(
    "value, expected",
    [(None, Empty()), ("x", Text("x")), (1, Scalar(1)), (True, Scalar(True)), ({"a": 1}, Structured({"a": 1})), (b"\x00", Binary(b"\x00"))],
)
def test_classify(value, expected) -> None:
    assert classify(value) == expected


@pytest.mark.parametrize("value, text", [(123, "123"), (1.5, "1.5"), (True, "true"), (False, "false")])
def test_scalars_use_canonical_json(value, text) -> None:
    result = serialize(classify(value))
    assert result.text == text
    assert result.content_type == "application/json"
    assert result.is_base64 is False


def test_structured_preserves_key_order_and_unicode() -> None:
    value = {"z": 1, "a": [3, 2, 1], "имя": "значение"}
    text = serialize(classify(value)).text
    assert text == '{"z":1,"a":[3,2,1],"имя":"значение"}'
    assert json.loads(text) == value


def test_unsupported_values_degrade_instead_of_raising() -> None:
    class Opaque:
        def __str__(self) -> str:
            return "opaque"

    assert serialize(classify({"v": Opaque()})).text == '{"v":"opaque"}'
    loop = []
    loop.append(loop)
    assert serialize(classify(loop)).text == '"[[...]]"'


def test_binary_is_base64() -> None:
    result = serialize(classify(b"hello"))
    assert result == ("aGVsbG8=", "application/octet-stream", True)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_scalars_become_null(value) -> None:
    text = serialize(classify(value)).text
    assert text == "null"
    json.loads(text, parse_constant=lambda name: pytest.fail(f"non-JSON constant {name}"))


def test_non_finite_values_inside_structures_become_null() -> None:
    value = {"x": float("inf"), "ok": 1.5, "items": [float("nan"), 2, (float("-inf"),)]}
    text = serialize(classify(value)).text
    assert text == '{"x":null,"ok":1.5,"items":[null,2,[null]]}'
    json.loads(text, parse_constant=lambda name: pytest.fail(f"non-JSON constant {name}"))
