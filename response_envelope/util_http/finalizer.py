# util_http/finalizer.py
from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from .body import JSON_CT, serialize
from .context import Failure, Jsonp, ResponseContext, State
from .jsonp import wrap_jsonp
from .redirect import Redirect, apply_redirect
from ..util_config.settings import ResponseSettings, settings_from_env
from ..util_errors.exceptions import ExternalResolutionFailure, FinalizeReuse, InvalidRedirectStatus, ResponseError
from ..util_errors.to_response import error_to_envelope
from ..util_log.logger import JsonLogger
from ..util_storage.resolver import PassthroughResolver, S3URLResolver, URLResolver
from ..util_storage.signer import get_s3_signer_from_env
from ..util_types.envelope import Envelope

Callback = Callable[[Optional[BaseException], Optional[Envelope]], Any]
Handler = Callable[[Mapping[str, Any], ResponseContext], Union[None, Awaitable[Any]]]


class ResponseFinalizer:
    """
    Turns a ResponseContext into the envelope handed to the gateway.

    The resolver is the only suspension point: a redirect to ``s3://bucket/key`` waits
    for the signed url before anything is serialized. Every data error ends up as a JSON
    error envelope; only reuse of an emitted context raises.
    """

    def __init__(self, resolver: Optional[URLResolver] = None, *, settings: Optional[ResponseSettings] = None, logger: Optional[JsonLogger] = None):
        self.resolver = resolver or PassthroughResolver()
        self.settings = settings or ResponseSettings()
        self.logger = logger or JsonLogger()

    def new_context(self, event: Optional[Mapping[str, Any]] = None) -> ResponseContext:
        return ResponseContext.from_event(event, settings=self.settings)

    def _log_fields(self, ctx: ResponseContext) -> dict:
        return {"correlation_id": ctx.correlation_id} if ctx.correlation_id else {}

    async def finalize(self, ctx: ResponseContext, callback: Optional[Callback] = None) -> Envelope:
        if ctx.state is not State.PENDING:
            raise FinalizeReuse()

        directive = ctx.directive
        if isinstance(directive, Redirect) and self.resolver.needs_resolution(directive.url):
            ctx.state = State.RESOLVING
            try:
                url = await self.resolver.resolve(directive.url)
            except Exception as e:
                # любой сбой резолвера, не только S3URLResolver, превращается в 500
                failure = e if isinstance(e, ExternalResolutionFailure) else ExternalResolutionFailure(directive.url, str(e) or type(e).__name__)
                self.logger.error("redirect target resolution failed", uri=failure.uri, reason=failure.reason, **self._log_fields(ctx))
                directive = Failure(failure)
            else:
                directive = Redirect(status=directive.status, url=url)

        envelope = self._assemble(ctx, directive)
        ctx.state = State.SERIALIZED
        self.logger.info("response emitted", status_code=envelope["statusCode"], headers=self.logger.redact_headers(envelope["headers"]), **self._log_fields(ctx))
        ctx.state = State.EMITTED
        if callback is not None:
            callback(None, envelope)
        return envelope

    def _assemble(self, ctx: ResponseContext, directive: Any) -> Envelope:
        headers = ctx.headers

        if isinstance(directive, Failure):
            err = directive.error
            if isinstance(err, InvalidRedirectStatus):
                self.logger.warn("invalid redirect status", status=err.status, **self._log_fields(ctx))
            return error_to_envelope(err, headers.to_dict())

        status, is_base64 = ctx.status_code, False
        if isinstance(directive, Redirect):
            status = directive.status
            body = apply_redirect(headers, directive.status, directive.url)
        elif isinstance(directive, Jsonp):
            body = wrap_jsonp(directive.callback, directive.value)
        else:
            serialized = serialize(directive)
            body, is_base64 = serialized.text, serialized.is_base64
            headers.apply_default("content-type", serialized.content_type)

        headers.apply_default("content-type", JSON_CT)
        return {"headers": headers.to_dict(), "statusCode": status, "body": body, "isBase64Encoded": is_base64}

    async def run(self, handler: Handler, event: Optional[Mapping[str, Any]] = None, callback: Optional[Callback] = None) -> Optional[Envelope]:
        """
        Build a context for ``event``, run ``handler(event, res)`` (sync or async) and finalize.

        A ResponseError raised by the handler becomes its error envelope. Any other
        exception goes to ``callback(exc, None)`` when a callback is given and is
        re-raised otherwise.
        """
        ctx = self.new_context(event)
        try:
            result = handler(event or {}, ctx)
            if inspect.isawaitable(result):
                await result
        except FinalizeReuse:
            raise
        except ResponseError as e:
            ctx.fail(e)
        except Exception as e:
            self.logger.error("handler failed", error=repr(e), **self._log_fields(ctx))
            if callback is None:
                raise
            callback(e, None)
            return None
        return await self.finalize(ctx, callback)


def finalizer_from_env(*, logger: Optional[JsonLogger] = None) -> ResponseFinalizer:
    """Finalizer wired from environment: settings_from_env() plus a cached S3 signer."""
    settings = settings_from_env()
    resolver = S3URLResolver.from_settings(get_s3_signer_from_env(), settings)
    return ResponseFinalizer(resolver, settings=settings, logger=logger)
