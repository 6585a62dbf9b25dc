import json, sys, uuid, time
from typing import Any, Dict, Optional, TextIO

_DEFAULT_REDACTIONS = {"authorization","proxy-authorization","cookie","set-cookie","x-api-key"}

def _redact(h: Dict[str, Any], redactions=_DEFAULT_REDACTIONS) -> Dict[str, Any]:
    return {k: ("<redacted>" if isinstance(v, str) and k.lower() in redactions else v) for k,v in (h or {}).items()}

class JsonLogger:
    """One JSON object per line; the correlation id ties together all records of a single request."""

    def __init__(self, *, correlation_id: Optional[str] = None, redactions: Optional[set[str]] = None, stream: Optional[TextIO] = None):
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.redactions = redactions or set(_DEFAULT_REDACTIONS)
        self.stream = stream

    def log(self, level: str, msg: str, **fields: Any) -> None:
        rec = {"level": level.lower(), "msg": msg, "ts_ms": int(time.time()*1000), "correlation_id": self.correlation_id, **fields}
        out = self.stream or sys.stdout
        try:
            out.write(json.dumps(rec, ensure_ascii=False, default=str)+"\n"); out.flush()
        except (OSError, ValueError):
            print({"level": level, "msg": msg, **fields})

    def info(self, msg: str, **fields: Any): self.log("INFO", msg, **fields)
    def warn(self, msg: str, **fields: Any): self.log("WARN", msg, **fields)
    def error(self, msg: str, **fields: Any): self.log("ERROR", msg, **fields)

    def redact_headers(self, headers: Dict[str, Any]) -> Dict[str, Any]:
        return _redact(headers, self.redactions)
