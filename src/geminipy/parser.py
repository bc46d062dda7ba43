import logging

from .errors import MalformedResponseError
from .response import GeminiResponse, StatusCategory

logger = logging.getLogger(__name__)

_HEADER_SEPARATOR = b"\r\n"
_DIGITS = frozenset("0123456789")


def parse_response(data: bytes | bytearray | memoryview) -> GeminiResponse:
    """
    Frame a complete reply into a GeminiResponse.

    `data` must hold everything the server sent before closing the stream.
    The header is `<2-digit status><separator><meta>`; the meta starts after
    exactly one separator character, so a three character header has an
    empty meta. The body is whatever follows the first CRLF, or None when
    nothing does.
    """
    buffer = bytes(data)

    separator_pos = buffer.find(_HEADER_SEPARATOR)
    if separator_pos == -1:
        raise MalformedResponseError("Could not find header terminator in response.")

    try:
        header = buffer[:separator_pos].decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedResponseError("Response header is not valid UTF-8.") from e

    if len(header) < 2 or not set(header[:2]) <= _DIGITS:
        raise MalformedResponseError(f"Invalid status code in header {header[:16]!r}.")

    status_code = int(header[:2])
    # Raises MalformedResponseError for codes outside 10-69.
    StatusCategory.from_code(status_code)

    meta = header[3:] if len(header) > 3 else ""

    body_start = separator_pos + len(_HEADER_SEPARATOR)
    body = buffer[body_start:] if body_start < len(buffer) else None

    logger.debug("Parsed response status=%d meta=%r body=%s bytes",
                 status_code, meta, len(body) if body is not None else "no")

    return GeminiResponse(status_code=status_code, meta=meta, body=body)
