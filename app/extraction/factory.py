from typing import ClassVar

from app.config.settings import Settings
from app.extraction.base import BaseExtractor
from app.extraction.docx_adapter import DocxAdapter
from app.extraction.models import ExtractionResult
from app.extraction.pdf_attachment_adapter import PdfAttachmentAdapter
from app.extraction.pdfplumber_adapter import PdfPlumberAdapter
from app.extraction.plain_text_adapter import PlainTextAdapter
from app.extraction.pymupdf_adapter import PyMuPdfAdapter
from app.logging.logger import Log
from app.processor.models import MediaType, UploadedDocument


class FormatExtractor(BaseExtractor):
    """Dispatches a document to the strategy registered for its media type."""

    def __init__(self, strategies: dict[MediaType, BaseExtractor]) -> None:
        missing = set(MediaType) - set(strategies)
        if missing:
            raise ValueError(
                f"No extraction strategy for: {sorted(m.value for m in missing)}"
            )
        self._strategies = dict(strategies)

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        strategy = self._strategies[document.media_type]
        result = strategy.extract(document)
        Log.info(
            f"Extracted '{document.file_name}' as {document.media_type.value}",
            chars=len(result.text),
            attachment=result.attachment is not None,
        )
        return result


class FormatExtractorFactory:
    """Creates the format extractor with the configured PDF strategy."""

    PDF_STRATEGIES: ClassVar[dict[str, type[BaseExtractor]]] = {
        "attachment": PdfAttachmentAdapter,
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> FormatExtractor:
        strategy = settings.pdf_strategy.lower()
        pdf_cls = cls.PDF_STRATEGIES.get(strategy)
        if pdf_cls is None:
            raise ValueError(
                f"Unknown PDF strategy '{strategy}'. Choose from: {list(cls.PDF_STRATEGIES)}"
            )
        plain_text = PlainTextAdapter()
        return FormatExtractor(
            {
                MediaType.PDF: pdf_cls(),
                MediaType.WORD: DocxAdapter(),
                MediaType.PLAIN_TEXT: plain_text,
                MediaType.UNKNOWN: plain_text,
            }
        )
