import logging
from dataclasses import dataclass
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from .errors import InvalidRequestError, InvalidUrlError

logger = logging.getLogger(__name__)

GEMINI_PREFIX = "gemini://"
DEFAULT_PORT = 1965
MAX_REQUEST_LENGTH = 1024


@dataclass(frozen=True)
class GeminiRequest:
    url: str
    host: str
    port: int = DEFAULT_PORT

    @property
    def request_line(self) -> bytes:
        return self.url.encode("utf-8") + b"\r\n"

    @classmethod
    def from_url(cls, url: str, default_port: int = DEFAULT_PORT,
                 max_length: int = MAX_REQUEST_LENGTH) -> "GeminiRequest":
        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError as e:
            raise InvalidUrlError(f"Could not parse URL '{url}': {e}") from e

        if not parts.hostname:
            raise InvalidUrlError(f"URL '{url}' has no host.")

        encoded_length = len(url.encode("utf-8"))
        if encoded_length > max_length:
            raise InvalidRequestError(
                f"Request URL is {encoded_length} bytes, the limit is {max_length}."
            )

        return cls(url=url, host=parts.hostname, port=port if port is not None else default_port)


def resolve_redirect_target(current_url: str, meta: str) -> str:
    """
    Work out where a redirect reply points.

    An absolute gemini URL in `meta` is used verbatim. Anything else is
    resolved against `current_url`, falling back to `meta` itself when it
    cannot be resolved.
    """
    if meta.startswith(GEMINI_PREFIX):
        return meta
    try:
        return _join(current_url, meta)
    except ValueError:
        logger.debug("Could not resolve redirect %r against %r, using it literally", meta, current_url)
        return meta


def _join(base: str, reference: str) -> str:
    if urlsplit(reference).scheme:
        return reference

    # urljoin only resolves relative references for schemes it knows, so join
    # against an http base and put the original scheme back afterwards.
    base_parts = urlsplit(base)
    joined = urlsplit(urljoin(urlunsplit(("http",) + tuple(base_parts[1:])), reference))
    return urlunsplit((base_parts.scheme,) + tuple(joined[1:]))


def with_input(url: str, value: str) -> str:
    """Answer an input prompt by sending `value` as the URL's query."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, quote(value, safe=""), ""))
