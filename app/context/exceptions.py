from app.processor.exceptions import ProcessorError


class ContextUnavailableError(ProcessorError):
    """Raised when the legal reference corpus cannot be fetched."""

    category = "context_unavailable"
    status_code = 503
