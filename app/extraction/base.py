from abc import ABC, abstractmethod

from app.extraction.models import ExtractionResult
from app.processor.models import UploadedDocument


class BaseExtractor(ABC):
    """Contract for all format extraction strategies."""

    @abstractmethod
    def extract(self, document: UploadedDocument) -> ExtractionResult:
        """Convert an uploaded document into text or an attachment.

        Args:
            document: Raw uploaded bytes with their declared media type.

        Returns:
            ExtractionResult with either plain text or an attachment.

        Raises:
            UnsupportedFormatError: if the bytes cannot be interpreted.
        """
