from abc import ABC, abstractmethod


class BaseContextSource(ABC):
    """Contract for read-only stores of legal reference text."""

    @abstractmethod
    def list_fragments(self) -> list[str]:
        """Return every content fragment in retrieval order.

        Raises:
            ContextUnavailableError: if the store cannot be read.
        """
