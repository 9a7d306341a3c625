from app.audit.client_base import BaseAuditClient
from app.audit.factory import AuditClientFactory
from app.audit.invocation import ModelInvocationClient
from app.audit.prompt_composer import PromptComposer
from app.audit.validator import validate

__all__ = [
    "AuditClientFactory",
    "BaseAuditClient",
    "ModelInvocationClient",
    "PromptComposer",
    "validate",
]
