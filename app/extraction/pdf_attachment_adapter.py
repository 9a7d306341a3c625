import base64

from app.extraction.base import BaseExtractor
from app.extraction.models import Attachment, ExtractionResult
from app.processor.models import MediaType, UploadedDocument


class PdfAttachmentAdapter(BaseExtractor):
    """Forwards PDF bytes untouched so the reasoning service reads the layout itself.

    Local text extraction flattens tables and multi-column layouts, so the
    default PDF path does no decoding and only base64-encodes the payload.
    """

    MIME_TYPE = "application/pdf"

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        encoded = base64.b64encode(document.content).decode("ascii")
        return ExtractionResult(
            text="",
            source_format=MediaType.PDF,
            attachment=Attachment(
                mime_type=self.MIME_TYPE,
                data=encoded,
                file_name=document.file_name,
            ),
        )
