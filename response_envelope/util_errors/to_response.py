# util_errors/to_response.py
from typing import Dict, Optional
from .exceptions import ResponseError
from ..util_json.index import dumps_compact
from ..util_types.envelope import Envelope

JSON_CT = "application/json"

def error_body(message: str) -> str:
    return dumps_compact({"error": message})

def error_to_envelope(err: ResponseError, headers: Optional[Dict[str, str]] = None) -> Envelope:
    # заголовки приложения сохраняются, кроме location; content-type всегда JSON
    h = {(k or "").lower(): v for k, v in (headers or {}).items()}
    h.pop("location", None)
    h["content-type"] = JSON_CT
    return {"headers": h, "statusCode": err.http_status, "body": error_body(err.message), "isBase64Encoded": False}
