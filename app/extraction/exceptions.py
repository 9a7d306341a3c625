from app.processor.exceptions import ProcessorError


class UnsupportedFormatError(ProcessorError):
    """Raised when a document's bytes cannot be interpreted as its declared format."""

    category = "unsupported_format"
    status_code = 415
