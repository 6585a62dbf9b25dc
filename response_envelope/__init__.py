# response_envelope/__init__.py
from .util_http.headers import HeaderManager
from .util_http.body import Empty, Scalar, Text, Structured, Binary, SerializedBody, classify, serialize
from .util_http.escape import escape_html, encode_url
from .util_http.redirect import REDIRECT_CODES, DEFAULT_REDIRECT_STATUS, Redirect, parse_redirect, redirect_body
from .util_http.jsonp import callback_name, sanitize_callback, wrap_jsonp
from .util_http.cors import cors_headers
from .util_http.context import ResponseContext, State
from .util_http.finalizer import ResponseFinalizer, finalizer_from_env
from .util_storage.resolver import URLResolver, SigningClient, PassthroughResolver, S3URLResolver, parse_storage_uri
from .util_storage.signer import Boto3Signer, make_s3_client, get_s3_signer_from_env
from .util_config.settings import ResponseSettings, settings_from_env
from .util_errors.exceptions import ResponseError, InvalidRedirectStatus, InvalidStatusCode, ExternalResolutionFailure, FinalizeReuse
from .util_errors.to_response import error_to_envelope
from .util_log.logger import JsonLogger
from .util_types.envelope import Envelope
from .util_json.index import dumps_compact

__version__ = "0.1.0"
