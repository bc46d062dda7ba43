import time
from dataclasses import dataclass
from enum import Enum, IntEnum
from urllib.parse import urlsplit

from .errors import MalformedResponseError


class StatusCategory(IntEnum):
    INPUT = 1
    SUCCESS = 2
    REDIRECT = 3
    TEMPORARY_FAILURE = 4
    PERMANENT_FAILURE = 5
    CLIENT_CERTIFICATE_REQUIRED = 6

    @classmethod
    def from_code(cls, status_code: int) -> "StatusCategory":
        if not 10 <= status_code <= 69:
            raise MalformedResponseError(f"Status code {status_code} is outside the range 10-69.")
        return cls(status_code // 10)


@dataclass(frozen=True)
class GeminiResponse:
    status_code: int
    meta: str = ""
    body: bytes | None = None

    @property
    def category(self) -> StatusCategory:
        return StatusCategory.from_code(self.status_code)

    @property
    def is_input(self) -> bool:
        return self.category is StatusCategory.INPUT

    @property
    def is_sensitive_input(self) -> bool:
        return self.status_code == GeminiStatusCode.SENSITIVE_INPUT.value

    @property
    def is_success(self) -> bool:
        return self.category is StatusCategory.SUCCESS

    @property
    def is_redirect(self) -> bool:
        return self.category is StatusCategory.REDIRECT

    @property
    def mime_type(self) -> str:
        """The bare MIME type of a success reply, lowercased and without parameters."""
        if not self.is_success:
            return ""
        return self.meta.split(";", 1)[0].strip().lower()

    @property
    def charset(self) -> str:
        for param in self.meta.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"').lower()
        return "utf-8"

    @property
    def body_text(self) -> str | None:
        """
        The decoded body of a successful text reply.

        An empty meta on a success reply means text/gemini. Non-text replies,
        replies without a body and bodies that do not decode give None.
        """
        if not self.is_success or self.body is None:
            return None
        if self.mime_type and not is_text_content(self.mime_type):
            return None
        try:
            return self.body.decode(self.charset)
        except (LookupError, UnicodeDecodeError):
            return None

    def describe(self) -> str:
        category = self.category
        if category is StatusCategory.SUCCESS:
            return f"Success ({self.status_code}): {self.meta or 'text/gemini'}"
        if category is StatusCategory.INPUT:
            return f"Input requested ({self.status_code}): {self.meta}"
        if category is StatusCategory.REDIRECT:
            return "Too many redirects"
        if category is StatusCategory.TEMPORARY_FAILURE:
            return f"Temporary failure ({self.status_code}): {self.meta}"
        if category is StatusCategory.PERMANENT_FAILURE:
            return f"Error ({self.status_code}): {self.meta}"
        return f"Client certificate required: {self.meta}"


class MediaType(Enum):
    IMAGE = "image"
    AUDIO = "audio"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_mime(cls, mime_type: str) -> "MediaType":
        mime = mime_type.strip().lower()
        if mime.startswith("image/"):
            return cls.IMAGE
        if mime.startswith("audio/"):
            return cls.AUDIO
        return cls.UNSUPPORTED


def is_text_content(mime_type: str) -> bool:
    return mime_type.strip().lower().startswith("text/")


def is_media_content(mime_type: str) -> bool:
    return MediaType.from_mime(mime_type) is not MediaType.UNSUPPORTED


_EXTENSIONS = [
    (("jpeg", "jpg"), "jpg"),
    (("png",), "png"),
    (("gif",), "gif"),
    (("webp",), "webp"),
    (("svg",), "svg"),
    (("mpeg", "mp3"), "mp3"),
    (("ogg",), "ogg"),
    (("wav",), "wav"),
    (("flac",), "flac"),
    (("aac",), "aac"),
    (("m4a",), "m4a"),
]


def file_extension(mime_type: str) -> str:
    mime = mime_type.lower()
    for needles, extension in _EXTENSIONS:
        if any(needle in mime for needle in needles):
            return extension

    media_type = MediaType.from_mime(mime)
    if media_type is MediaType.IMAGE:
        return "jpg"
    if media_type is MediaType.AUDIO:
        return "mp3"
    return "bin"


def suggested_filename(url: str, mime_type: str) -> str:
    """Last path component of the URL, or a timestamped name with an extension guessed from the MIME type."""
    path = urlsplit(url).path
    filename = path.rsplit("/", 1)[-1]
    if filename:
        return filename
    return f"geminipy_{int(time.time())}.{file_extension(mime_type)}"


# --- Status Codes ---
class GeminiStatusCode(Enum):
    INPUT = 10
    SENSITIVE_INPUT = 11
    SUCCESS = 20
    REDIRECT_TEMPORARY = 30
    REDIRECT_PERMANENT = 31
    TEMPORARY_FAILURE = 40
    SERVER_UNAVAILABLE = 41
    CGI_ERROR = 42
    PROXY_ERROR = 43
    SLOW_DOWN = 44
    PERMANENT_FAILURE = 50
    NOT_FOUND = 51
    GONE = 52
    PROXY_REQUEST_REFUSED = 53
    BAD_REQUEST = 59
    CLIENT_CERTIFICATE_REQUIRED = 60
    CERTIFICATE_NOT_AUTHORISED = 61
    CERTIFICATE_NOT_VALID = 62
