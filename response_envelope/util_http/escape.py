# util_http/escape.py
"""
Two deliberately different codecs.

The location header carries a URL, so it gets minimal structure-preserving
percent-encoding; generated HTML carries display text, so it gets full entity
escaping. A redirect renders the same raw URL through both.
"""
from __future__ import annotations
import re
from urllib.parse import quote

_HTML_ENTITIES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"})

# RFC 3986 reserved + sub-delims остаются как есть; буквы, цифры и "_.-~" quote не трогает сам
_URL_SAFE = "!#$&'()*+,/:;=?@[]"
_PCT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def escape_html(text: str) -> str:
    return str(text).translate(_HTML_ENTITIES)


def encode_url(url: str) -> str:
    """Percent-encode a URL for a header value; already valid %XX escapes are kept as-is."""
    # непарные суррогаты не кодируются в UTF-8: заменяем на U+FFFD
    url = _LONE_SURROGATE.sub("\ufffd", str(url))
    out, pos = [], 0
    for m in _PCT_ESCAPE.finditer(url):
        out.append(quote(url[pos:m.start()], safe=_URL_SAFE))
        out.append(m.group(0))
        pos = m.end()
    out.append(quote(url[pos:], safe=_URL_SAFE))
    return "".join(out)
