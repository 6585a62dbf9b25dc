# util_storage/resolver.py
from __future__ import annotations

import asyncio
import inspect
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Dict, Optional, Protocol, Union

from .signer import DEFAULT_EXPIRES_SEC
from ..util_config.settings import ResponseSettings
from ..util_errors.exceptions import ExternalResolutionFailure

STORAGE_SCHEME = "s3://"
_STORAGE_URI = re.compile(r"^s3://([^/]+)/(.+)$", re.IGNORECASE)


class SigningClient(Protocol):
    def get_signed_url(self, operation: str, params: Dict[str, Any]) -> Union[str, Awaitable[str]]: ...


class URLResolver(Protocol):
    def needs_resolution(self, uri: str) -> bool: ...
    async def resolve(self, uri: str) -> str: ...


@dataclass(frozen=True)
class StorageRef:
    bucket: str
    key: str


def parse_storage_uri(uri: str) -> Optional[StorageRef]:
    m = _STORAGE_URI.match(uri or "")
    return StorageRef(bucket=m.group(1), key=m.group(2)) if m else None


class PassthroughResolver:
    """Resolver for deployments without object storage: every url is already final."""

    def needs_resolution(self, uri: str) -> bool:
        return False

    async def resolve(self, uri: str) -> str:
        return uri


class S3URLResolver:
    """
    Turns ``s3://bucket/key`` into a time-limited signed https url.

    Anything else resolves to itself and never suspends. Failures of the signer,
    including a timeout, surface as ExternalResolutionFailure.
    """

    def __init__(self, signer: SigningClient, *, expires: int = DEFAULT_EXPIRES_SEC, timeout_sec: Optional[float] = None, operation: str = "getObject"):
        self._signer = signer
        self.expires = expires
        self.timeout_sec = timeout_sec
        self.operation = operation

    @classmethod
    def from_settings(cls, signer: SigningClient, settings: ResponseSettings) -> "S3URLResolver":
        return cls(signer, expires=settings.signed_url_expires, timeout_sec=settings.resolve_timeout_sec)

    def needs_resolution(self, uri: str) -> bool:
        return isinstance(uri, str) and uri[:len(STORAGE_SCHEME)].lower() == STORAGE_SCHEME

    async def resolve(self, uri: str) -> str:
        if not self.needs_resolution(uri):
            return uri
        ref = parse_storage_uri(uri)
        if ref is None:
            raise ExternalResolutionFailure(uri, "expected s3://bucket/key")

        params = {"Bucket": ref.bucket, "Key": ref.key, "Expires": self.expires}
        try:
            url = await asyncio.wait_for(self._sign(params), self.timeout_sec)
        except asyncio.TimeoutError:
            raise ExternalResolutionFailure(uri, f"signing timed out after {self.timeout_sec}s") from None
        except ExternalResolutionFailure:
            raise
        except Exception as e:
            raise ExternalResolutionFailure(uri, str(e) or type(e).__name__) from e

        if not isinstance(url, str) or not url:
            raise ExternalResolutionFailure(uri, "signer returned no url")
        return url

    async def _sign(self, params: Dict[str, Any]) -> Any:
        fn = self._signer.get_signed_url
        if inspect.iscoroutinefunction(fn):
            return await fn(self.operation, params)
        # синхронный клиент (boto3) уводим в поток, чтобы не блокировать цикл
        result = await asyncio.to_thread(fn, self.operation, params)
        if inspect.isawaitable(result):
            result = await result
        return result
