# util_config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from ..util_storage.signer import DEFAULT_EXPIRES_SEC


@dataclass(frozen=True)
class ResponseSettings:
    jsonp_callback_params: Tuple[str, ...] = ("callback",)
    signed_url_expires: int = DEFAULT_EXPIRES_SEC
    resolve_timeout_sec: Optional[float] = None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable '{name}' must be an integer, got {raw!r}") from None
    if value <= 0:
        raise RuntimeError(f"Environment variable '{name}' must be positive, got {value}")
    return value


def _float_env(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable '{name}' must be a number, got {raw!r}") from None
    return value if value > 0 else None


def settings_from_env(
    callback_var: str = "JSONP_CALLBACK_PARAMS",
    expires_var: str = "SIGNED_URL_EXPIRES",
    timeout_var: str = "RESOLVE_TIMEOUT_SEC",
) -> ResponseSettings:
    params = tuple(p.strip() for p in (os.getenv(callback_var) or "").split(",") if p.strip())
    return ResponseSettings(
        jsonp_callback_params=params or ResponseSettings.jsonp_callback_params,
        signed_url_expires=_int_env(expires_var, DEFAULT_EXPIRES_SEC),
        resolve_timeout_sec=_float_env(timeout_var),
    )


__all__ = (
    "ResponseSettings",
    "settings_from_env",
)
