# util_http/redirect.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from .escape import encode_url, escape_html
from .headers import HeaderManager
from ..util_errors.exceptions import InvalidRedirectStatus

HTML_CT = "text/html"
DEFAULT_REDIRECT_STATUS = 302
# 306 не назначен (RFC 9110, 15.4.7)
REDIRECT_CODES = frozenset({300, 301, 302, 303, 304, 305, 307, 308})


@dataclass(frozen=True)
class Redirect:
    status: int
    url: str


def is_redirect_status(status: Any) -> bool:
    return isinstance(status, int) and not isinstance(status, bool) and status in REDIRECT_CODES


def parse_redirect(status_or_url: Any, url: Optional[str] = None) -> Redirect:
    """
    Accepts both call forms: ``(url)`` with the default 302 and ``(status, url)``.
    Raises InvalidRedirectStatus before anything is written to the response.
    """
    if url is None:
        status, url = DEFAULT_REDIRECT_STATUS, status_or_url
    else:
        status = status_or_url
    if not isinstance(url, str):
        raise TypeError(f"redirect url must be a string, got {type(url).__name__}")
    if not is_redirect_status(status):
        raise InvalidRedirectStatus(status)
    return Redirect(status=status, url=url)


def redirect_body(status: int, url: str) -> str:
    esc = escape_html(url)
    return f'<p>{status} Redirecting to <a href="{esc}">{esc}</a></p>'


def set_location(headers: HeaderManager, url: str) -> None:
    headers.set("location", encode_url(url))


def apply_redirect(headers: HeaderManager, status: int, url: str) -> str:
    """Writes location and content-type for an already resolved target and returns the HTML body."""
    set_location(headers, url)
    headers.set("content-type", HTML_CT)
    return redirect_body(status, url)
