from typing import Any, Dict, Optional

class ResponseError(Exception):
    def __init__(self, code: str, message: str, *, http_status: int = 500, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details or {}

class InvalidRedirectStatus(ResponseError):
    def __init__(self, status: Any, **kw):
        super().__init__("invalid_redirect_status", f"{status} is an invalid redirect status code", details={"status": status}, **kw)
        self.status = status

class InvalidStatusCode(ResponseError):
    def __init__(self, status: Any, **kw):
        super().__init__("invalid_status", f"{status} is an invalid status code", details={"status": status}, **kw)
        self.status = status

class ExternalResolutionFailure(ResponseError):
    def __init__(self, uri: str, reason: str = "resolution failed", **kw):
        super().__init__("resolution_failed", f"Unable to resolve '{uri}': {reason}", details={"uri": uri}, **kw)
        self.uri = uri
        self.reason = reason

class FinalizeReuse(RuntimeError):
    """Финализация уже началась; повторный вызов или изменение контекста - ошибка вызывающего кода."""
    def __init__(self, message: str = "response finalization has already started"):
        super().__init__(message)
