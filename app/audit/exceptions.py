from app.processor.exceptions import ProcessorError


class AuditError(ProcessorError):
    """Base for failures of the model invocation and response handling."""


class ModelError(AuditError):
    """Raised when the reasoning service call fails.

    ``retryable`` marks transport-level failures that the invocation client
    may retry with backoff.
    """

    category = "model_unavailable"
    status_code = 502
    retryable = True


class ModelUnavailableError(ModelError):
    """Raised on connection failures and upstream API errors."""


class ModelTimeoutError(ModelError):
    """Raised when an attempt exceeds the configured timeout."""

    category = "model_timeout"
    status_code = 504


class ModelRateLimitError(ModelError):
    """Raised when the provider rejects the call for quota or rate reasons."""

    category = "model_rate_limited"
    status_code = 503


class ModelConfigurationError(ModelError):
    """Raised on provider rejections that retrying cannot fix (auth, bad request)."""

    retryable = False


class ResponseParseError(AuditError):
    """Raised when the model output is not a JSON object."""

    category = "response_parse_error"
    status_code = 502


class SchemaViolation(AuditError):
    """Raised when parsed output cannot be repaired into a report."""

    category = "schema_violation"
    status_code = 502
