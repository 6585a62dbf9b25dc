# util_storage/signer.py
from __future__ import annotations

import os
import re
import threading
from typing import Any, Dict, Optional, Tuple

import boto3
from botocore.client import BaseClient
from botocore.config import Config

DEFAULT_EXPIRES_SEC = 900

_SIGNER_CACHE: Dict[Tuple[Optional[str], Optional[str], Optional[str]], "Boto3Signer"] = {}
_CACHE_LOCK = threading.Lock()
_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _client_method(operation: str) -> str:
    # "getObject" -> "get_object"; имена boto3 проходят без изменений
    return _CAMEL.sub("_", operation).lower()


class Boto3Signer:
    """
    Signing collaborator backed by an S3-compatible boto3 client.

    Speaks the ``get_signed_url(operation, {"Bucket", "Key", "Expires"})`` contract
    used by the resolver. Presigning is local (no network call) and is never retried here.
    """

    def __init__(self, client: BaseClient):
        self._client = client

    def get_signed_url(self, operation: str, params: Dict[str, Any]) -> str:
        params = dict(params)
        expires = int(params.pop("Expires", DEFAULT_EXPIRES_SEC))
        return self._client.generate_presigned_url(_client_method(operation), Params=params, ExpiresIn=expires)


def make_s3_client(
    *,
    endpoint_url: Optional[str] = None,
    region_name: Optional[str] = None,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
) -> BaseClient:
    """Without explicit keys boto3 falls back to its default credential chain."""
    return boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        region_name=region_name,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        config=Config(signature_version="s3v4"),
    )


def _optional_env(name: Optional[str]) -> Optional[str]:
    return (os.getenv(name) or None) if name else None


def get_s3_signer_from_env(
    endpoint_var: str = "S3_ENDPOINT_URL",
    region_var: str = "S3_REGION",
    *,
    key_id_var: str = "S3_KEY_ID",
    secret_var: str = "S3_SECRET_KEY",
) -> Boto3Signer:
    """
    Returns a cached signer for the endpoint/region/key id found in the environment.

    Key id and secret must be set together; if neither is set the default boto3
    credential chain is used.
    """
    endpoint = _optional_env(endpoint_var)
    region = _optional_env(region_var)
    key_id = _optional_env(key_id_var)
    secret = _optional_env(secret_var)
    if bool(key_id) != bool(secret):
        missing = secret_var if key_id else key_id_var
        raise RuntimeError(f"Environment variable '{missing}' is not set or empty")

    cache_key = (endpoint, region, key_id)
    signer = _SIGNER_CACHE.get(cache_key)
    if signer:
        return signer

    with _CACHE_LOCK:
        signer = _SIGNER_CACHE.get(cache_key)
        if signer:
            return signer
        client = make_s3_client(endpoint_url=endpoint, region_name=region, access_key_id=key_id, secret_access_key=secret)
        signer = Boto3Signer(client)
        _SIGNER_CACHE[cache_key] = signer
        return signer


__all__ = (
    "Boto3Signer",
    "make_s3_client",
    "get_s3_signer_from_env",
)
