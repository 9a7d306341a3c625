from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath


class MediaType(str, Enum):
    """Declared format of an uploaded document."""

    PDF = "pdf"
    WORD = "word"
    PLAIN_TEXT = "plain_text"
    UNKNOWN = "unknown"

    @classmethod
    def resolve(cls, content_type: str | None, file_name: str | None) -> "MediaType":
        """Map a declared content type (falling back to the file extension)."""
        mime = (content_type or "").split(";")[0].strip().lower()
        by_mime = _MIME_TYPES.get(mime)
        if by_mime is not None:
            return by_mime
        if mime.startswith("text/"):
            return cls.PLAIN_TEXT
        suffix = PurePath(file_name or "").suffix.lower()
        return _EXTENSIONS.get(suffix, cls.UNKNOWN)


_MIME_TYPES: dict[str, MediaType] = {
    "application/pdf": MediaType.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": MediaType.WORD,
    "application/msword": MediaType.WORD,
}

_EXTENSIONS: dict[str, MediaType] = {
    ".pdf": MediaType.PDF,
    ".docx": MediaType.WORD,
    ".doc": MediaType.WORD,
    ".txt": MediaType.PLAIN_TEXT,
    ".md": MediaType.PLAIN_TEXT,
    ".csv": MediaType.PLAIN_TEXT,
}


@dataclass(frozen=True)
class UploadedDocument:
    """A single uploaded file, owned by one pipeline invocation."""

    content: bytes
    media_type: MediaType
    file_name: str
