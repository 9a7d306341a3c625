from app.processor.exceptions import ProcessorError


class AuthenticationError(ProcessorError):
    """Raised when the caller's bearer token is missing or not valid."""

    category = "authentication_failed"
    status_code = 401


class AuthNotConfiguredError(ProcessorError):
    """Raised when token verification has no signing secret to check against."""

    category = "auth_not_configured"
    status_code = 500
