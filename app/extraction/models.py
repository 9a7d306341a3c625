from dataclasses import dataclass

from app.processor.models import MediaType


@dataclass(frozen=True)
class Attachment:
    """Binary document content forwarded to the reasoning service as-is."""

    mime_type: str
    data: str  # base64-encoded bytes
    file_name: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the extraction step.

    Text-bearing formats fill ``text``; formats whose understanding is
    deferred to the reasoning service carry an ``attachment`` instead.
    """

    text: str
    source_format: MediaType
    attachment: Attachment | None = None
