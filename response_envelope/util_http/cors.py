# util_http/cors.py
from typing import Dict

DEFAULT_ALLOW_HEADERS = "Content-Type,Authorization,X-Correlation-Id"
DEFAULT_ALLOW_METHODS = "GET,POST,OPTIONS"

def cors_headers(allow_origin: str = "*", allow_headers: str = DEFAULT_ALLOW_HEADERS, allow_methods: str = DEFAULT_ALLOW_METHODS, allow_credentials: bool = False, max_age: int = 0) -> Dict[str, str]:
    h = {"access-control-allow-origin": allow_origin, "access-control-allow-headers": allow_headers, "access-control-allow-methods": allow_methods}
    if allow_credentials: h["access-control-allow-credentials"] = "true"
    if max_age: h["access-control-max-age"] = str(max_age)
    return h
