# util_http/body.py
from __future__ import annotations
import base64
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional, Union

from ..util_json.index import dumps_compact

JSON_CT = "application/json"
BINARY_CT = "application/octet-stream"


@dataclass(frozen=True)
class Empty:
    pass

@dataclass(frozen=True)
class Scalar:
    value: Union[int, float, bool]

@dataclass(frozen=True)
class Text:
    value: str

@dataclass(frozen=True)
class Structured:
    value: Any

@dataclass(frozen=True)
class Binary:
    value: bytes


Body = Union[Empty, Scalar, Text, Structured, Binary]


class SerializedBody(NamedTuple):
    text: str
    content_type: str       # используется только если content-type ещё не задан
    is_base64: bool = False


def classify(value: Any = None) -> Body:
    """Decide the body variant once, at the API boundary."""
    if value is None:
        return Empty()
    if isinstance(value, (Empty, Scalar, Text, Structured, Binary)):
        return value
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, (bool, int, float)):
        return Scalar(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Binary(bytes(value))
    return Structured(value)


def serialize(body: Body) -> SerializedBody:
    if isinstance(body, Empty):
        return SerializedBody("", JSON_CT)
    if isinstance(body, Text):
        return SerializedBody(body.value, JSON_CT)
    if isinstance(body, Binary):
        return SerializedBody(base64.b64encode(body.value).decode("ascii"), BINARY_CT, True)
    # Scalar и Structured: канонический JSON, порядок ключей как при построении
    return SerializedBody(dumps_compact(body.value), JSON_CT)


def to_json(value: Optional[Any]) -> str:
    """JSON path of the serializer; unlike ``serialize`` an absent value becomes ``null``."""
    return dumps_compact(value)
