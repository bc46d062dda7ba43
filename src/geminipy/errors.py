class GeminiError(Exception):
    """Base exception for the geminipy library."""
    pass

# --- Transport Errors ---

class TransportError(GeminiError):
    """A generic error occurred in the transport layer."""
    pass

class DnsFailureError(TransportError): pass
class SocketConnectError(TransportError): pass
class TlsHandshakeError(TransportError): pass
class SocketWriteError(TransportError): pass
class SocketReadError(TransportError): pass
class ResponseTimeoutError(TransportError): pass

# --- Gemini Client Errors ---

class GeminiClientError(GeminiError):
    """A generic error occurred in the Gemini client logic."""
    pass

class InvalidUrlError(GeminiClientError): pass
class InvalidRequestError(GeminiClientError): pass
class MalformedResponseError(GeminiClientError): pass
class ResponseTooLargeError(MalformedResponseError): pass
