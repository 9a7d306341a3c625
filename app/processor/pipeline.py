from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.audit.exceptions import ModelError
from app.audit.models import AuditOutcome, AuditPrompt, ModelResponse
from app.context.models import LegalContext
from app.database.models import AuditRecord
from app.extraction.models import ExtractionResult
from app.processor.models import UploadedDocument


@dataclass(slots=True)
class PipelineContext:
    user_id: str
    document: UploadedDocument
    extraction: ExtractionResult | None = None
    legal_context: LegalContext | None = None
    prompt: AuditPrompt | None = None
    response: ModelResponse | None = None
    outcome: AuditOutcome | None = None
    model_error: ModelError | None = None
    record: AuditRecord | None = None


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
