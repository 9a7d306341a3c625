from abc import ABC, abstractmethod
from typing import Any

from app.extraction.models import Attachment


class BaseAuditClient(ABC):
    """Contract for provider-specific reasoning service clients."""

    @abstractmethod
    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        instruction: str,
        json_schema: dict[str, Any],
        attachment: Attachment | None = None,
    ) -> str:
        """Return the provider response as plain text.

        Raises:
            ModelError: (or a subclass) on transport, quota or API failures.
        """
