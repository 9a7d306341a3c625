from typing import ClassVar


class ProcessorError(Exception):
    """Base exception for all audit pipeline errors.

    Every subclass carries a machine-readable ``category`` and the HTTP status
    the API answers with, so callers can tell caller-side problems (4xx) from
    service degradation (5xx) without parsing messages.
    """

    category: ClassVar[str] = "processing_error"
    status_code: ClassVar[int] = 500


class DocumentMissingError(ProcessorError):
    """Raised when the request carries no file or an empty one."""

    category = "missing_file"
    status_code = 400


class DocumentTooLargeError(ProcessorError):
    """Raised when the uploaded file exceeds the configured size limit."""

    category = "document_too_large"
    status_code = 413


class RecordNotFoundError(ProcessorError):
    """Raised when an audit record does not exist for the requesting user."""

    category = "record_not_found"
    status_code = 404


class PersistenceError(ProcessorError):
    """Raised when an audit record cannot be written or read."""

    category = "persistence_error"
    status_code = 503
