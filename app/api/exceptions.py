from app.processor.exceptions import ProcessorError


class ClientDisconnectedError(ProcessorError):
    """Raised when the caller went away before the audit finished."""

    category = "client_disconnected"
    status_code = 499
