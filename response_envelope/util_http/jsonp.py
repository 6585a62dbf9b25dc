# util_http/jsonp.py
from __future__ import annotations
import re
from typing import Any, Iterable, Mapping, Optional

from .body import to_json

DEFAULT_CALLBACK = "callback"
_UNSAFE_CALLBACK_CHARS = re.compile(r"[^A-Za-z0-9_$]")


def callback_name(query: Optional[Mapping[str, Any]], param_names: Iterable[str] = (DEFAULT_CALLBACK,)) -> str:
    """First configured query parameter that carries a value wins, otherwise the literal ``callback``."""
    query = query or {}
    for param in param_names:
        value = query.get(param)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value:
            return str(value)
    return DEFAULT_CALLBACK


def sanitize_callback(name: str) -> str:
    return _UNSAFE_CALLBACK_CHARS.sub("_", name)


def wrap_jsonp(callback: str, value: Any) -> str:
    return f"{sanitize_callback(callback)}({to_json(value)})"
