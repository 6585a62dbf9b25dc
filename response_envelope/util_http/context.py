# util_http/context.py
from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Union

from .body import JSON_CT, Body, Empty, Structured, Text, classify
from .cors import DEFAULT_ALLOW_HEADERS, DEFAULT_ALLOW_METHODS, cors_headers
from .headers import HeaderManager
from .jsonp import callback_name
from .redirect import HTML_CT, Redirect, parse_redirect, set_location
from ..util_config.settings import ResponseSettings
from ..util_errors.exceptions import FinalizeReuse, InvalidRedirectStatus, InvalidStatusCode, ResponseError

_TYPE_SHORTCUTS = {"json": JSON_CT, "html": HTML_CT, "text": "text/plain", "txt": "text/plain"}


class State(str, Enum):
    PENDING = "pending"
    RESOLVING = "resolving"
    SERIALIZED = "serialized"
    EMITTED = "emitted"


@dataclass(frozen=True)
class Jsonp:
    value: Any
    callback: str


@dataclass(frozen=True)
class Failure:
    error: ResponseError


Directive = Union[Body, Jsonp, Redirect, Failure]


def _query_from_event(event: Mapping[str, Any]) -> Dict[str, Any]:
    query = dict(event.get("queryStringParameters") or {})
    for k, values in (event.get("multiValueQueryStringParameters") or {}).items():
        query.setdefault(k, values)
    return query


def _correlation_id(event: Mapping[str, Any]) -> Optional[str]:
    headers = {(k or "").lower(): v for k, v in (event.get("headers") or {}).items()}
    return headers.get("x-correlation-id") or (event.get("requestContext") or {}).get("requestId")


class ResponseContext:
    """
    Mutable response state of a single handler invocation.

    Every operation returns the context so calls chain (``res.location(url).html("...")``).
    Data errors (bad status, bad redirect code) do not raise: the first one turns the
    whole response into a 500 JSON error and later body operations are ignored.
    Once finalization has started every mutating operation raises FinalizeReuse.
    """

    def __init__(self, *, query: Optional[Mapping[str, Any]] = None, settings: Optional[ResponseSettings] = None,
                 headers: Optional[Dict[str, Any]] = None, correlation_id: Optional[str] = None):
        self.settings = settings or ResponseSettings()
        self.query: Dict[str, Any] = dict(query or {})
        self.headers = HeaderManager(headers)
        self.status_code = 200
        self.directive: Directive = Empty()
        self.state = State.PENDING
        self.correlation_id = correlation_id

    @classmethod
    def from_event(cls, event: Optional[Mapping[str, Any]], settings: Optional[ResponseSettings] = None) -> "ResponseContext":
        event = event or {}
        return cls(query=_query_from_event(event), settings=settings, correlation_id=_correlation_id(event))

    # --- state ---

    def _check_open(self) -> None:
        if self.state is not State.PENDING:
            raise FinalizeReuse()

    @property
    def failed(self) -> bool:
        return isinstance(self.directive, Failure)

    def _set(self, directive: Directive) -> "ResponseContext":
        self._check_open()
        if not self.failed:
            self.directive = directive
        return self

    def fail(self, err: ResponseError) -> "ResponseContext":
        return self._set(Failure(err))

    # --- status & headers ---

    def status(self, code: int) -> "ResponseContext":
        self._check_open()
        if isinstance(code, bool) or not isinstance(code, int) or not 100 <= code <= 599:
            return self.fail(InvalidStatusCode(code))
        self.status_code = code
        return self

    def header(self, name: str, value: Any) -> "ResponseContext":
        self._check_open()
        self.headers.set(name, value)
        return self

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    def has_header(self, name: str) -> bool:
        return self.headers.has(name)

    def remove_header(self, name: str) -> "ResponseContext":
        self._check_open()
        self.headers.remove(name)
        return self

    def type(self, kind: str) -> "ResponseContext":
        """Set content-type from a shortcut (``json``, ``html``), a file extension or a full mime type."""
        self._check_open()
        if "/" in kind:
            ct = kind
        else:
            ct = _TYPE_SHORTCUTS.get(kind.lower().lstrip(".")) or mimetypes.guess_type(f"file.{kind.lstrip('.')}")[0]
        if ct:
            self.headers.set("content-type", ct)
        return self

    def cors(self, allow_origin: str = "*", allow_headers: str = DEFAULT_ALLOW_HEADERS, allow_methods: str = DEFAULT_ALLOW_METHODS,
             allow_credentials: bool = False, max_age: int = 0) -> "ResponseContext":
        self._check_open()
        for k, v in cors_headers(allow_origin, allow_headers, allow_methods, allow_credentials, max_age).items():
            self.headers.set(k, v)
        return self

    # --- body directives ---

    def send(self, value: Any = None) -> "ResponseContext":
        return self._set(classify(value))

    def json(self, value: Any) -> "ResponseContext":
        self._check_open()
        self.headers.set("content-type", JSON_CT)
        return self._set(Structured(value))

    def html(self, text: str) -> "ResponseContext":
        self._check_open()
        self.headers.set("content-type", HTML_CT)
        return self._set(Text(str(text)))

    def send_status(self, code: int) -> "ResponseContext":
        self.status(code)
        try: phrase = HTTPStatus(code).phrase
        except ValueError: phrase = str(code)
        return self.send(phrase)

    def jsonp(self, value: Any) -> "ResponseContext":
        return self._set(Jsonp(value, callback_name(self.query, self.settings.jsonp_callback_params)))

    def error(self, message: str, status: int = 500) -> "ResponseContext":
        if isinstance(status, bool) or not isinstance(status, int) or not 100 <= status <= 599:
            status = 500
        return self.fail(ResponseError("error", str(message), http_status=status))

    # --- redirects ---

    def location(self, url: str) -> "ResponseContext":
        self._check_open()
        set_location(self.headers, url)
        return self

    def redirect(self, status_or_url: Any, url: Optional[str] = None) -> "ResponseContext":
        self._check_open()
        try:
            target = parse_redirect(status_or_url, url)
        except InvalidRedirectStatus as e:
            return self.fail(e)
        return self._set(target)

    def __repr__(self) -> str:
        return f"ResponseContext(status={self.status_code}, state={self.state.value}, directive={self.directive!r})"
