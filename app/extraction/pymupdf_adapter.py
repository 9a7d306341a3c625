import pymupdf

from app.extraction.base import BaseExtractor
from app.extraction.exceptions import UnsupportedFormatError
from app.extraction.models import ExtractionResult
from app.processor.models import MediaType, UploadedDocument


class PyMuPdfAdapter(BaseExtractor):
    """Extracts the PDF text layer locally using PyMuPDF."""

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        try:
            with pymupdf.open(stream=document.content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise UnsupportedFormatError(
                f"pymupdf could not read '{document.file_name}': {exc}"
            ) from exc
        text = "\n".join(pages).strip()
        if not text:
            raise UnsupportedFormatError(
                f"'{document.file_name}' has no extractable text layer"
            )
        return ExtractionResult(text=text, source_format=MediaType.PDF)
