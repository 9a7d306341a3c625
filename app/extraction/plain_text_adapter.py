from app.extraction.base import BaseExtractor
from app.extraction.models import ExtractionResult
from app.processor.models import UploadedDocument


class PlainTextAdapter(BaseExtractor):
    """Decodes bytes as UTF-8.

    Invalid sequences are replaced with U+FFFD rather than dropped, and the
    text is not stripped, so positions quoted back by the model still line up
    with the upload.
    """

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        text = document.content.decode("utf-8", errors="replace")
        return ExtractionResult(text=text, source_format=document.media_type)
