from .client import GeminiClient
from .config import ClientConfig, TrustPolicy
from .errors import (
    GeminiError,
    TransportError,
    DnsFailureError,
    SocketConnectError,
    TlsHandshakeError,
    SocketWriteError,
    SocketReadError,
    ResponseTimeoutError,
    GeminiClientError,
    InvalidUrlError,
    InvalidRequestError,
    MalformedResponseError,
    ResponseTooLargeError,
)
from .navigator import InputPrompt, Navigator
from .parser import parse_response
from .redirects import RedirectResolver, Resolution
from .request import GeminiRequest, resolve_redirect_target, with_input
from .response import GeminiResponse, GeminiStatusCode, MediaType, StatusCategory

__all__ = [
    "GeminiClient",
    "ClientConfig",
    "TrustPolicy",
    "GeminiError",
    "TransportError",
    "DnsFailureError",
    "SocketConnectError",
    "TlsHandshakeError",
    "SocketWriteError",
    "SocketReadError",
    "ResponseTimeoutError",
    "GeminiClientError",
    "InvalidUrlError",
    "InvalidRequestError",
    "MalformedResponseError",
    "ResponseTooLargeError",
    "InputPrompt",
    "Navigator",
    "parse_response",
    "RedirectResolver",
    "Resolution",
    "GeminiRequest",
    "resolve_redirect_target",
    "with_input",
    "GeminiResponse",
    "GeminiStatusCode",
    "MediaType",
    "StatusCategory",
]
