import io

import pdfplumber

from app.extraction.base import BaseExtractor
from app.extraction.exceptions import UnsupportedFormatError
from app.extraction.models import ExtractionResult
from app.processor.models import MediaType, UploadedDocument


class PdfPlumberAdapter(BaseExtractor):
    """Extracts the PDF text layer locally using pdfplumber."""

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        try:
            with pdfplumber.open(io.BytesIO(document.content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise UnsupportedFormatError(
                f"pdfplumber could not read '{document.file_name}': {exc}"
            ) from exc
        text = "\n".join(pages).strip()
        if not text:
            raise UnsupportedFormatError(
                f"'{document.file_name}' has no extractable text layer"
            )
        return ExtractionResult(text=text, source_format=MediaType.PDF)
