import asyncio
from collections.abc import Sequence

from app.audit.factory import AuditClientFactory
from app.audit.prompt_composer import PromptComposer
from app.config.settings import Settings
from app.context.provider import LegalContextProvider
from app.database.models import AuditRecord
from app.database.repositories.audit_reports_repository import AuditReportsRepository
from app.database.repositories.law_modules_repository import LawModulesRepository
from app.extraction.factory import FormatExtractorFactory
from app.logging.logger import Log
from app.processor.exceptions import DocumentMissingError
from app.processor.models import UploadedDocument
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    ComposePromptStep,
    ExtractStep,
    FetchContextStep,
    InvokeModelStep,
    PersistStep,
    ValidateStep,
)


class AuditProcessor:
    """Runs the audit pipeline for one uploaded document.

    Pipeline: extract -> fetch context -> compose -> invoke -> validate -> persist.

    Extraction failures propagate before anything is stored. Model failures
    and invalid responses still produce exactly one ``failed`` record.
    Cancellation while the model call is in flight propagates and leaves no
    record.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    async def process(self, user_id: str, document: UploadedDocument) -> AuditRecord:
        if not document.content:
            raise DocumentMissingError(f"Uploaded file '{document.file_name}' is empty")

        Log.info(
            f"Auditing '{document.file_name}' for user {user_id}",
            media_type=document.media_type.value,
            size=len(document.content),
        )
        context = PipelineContext(user_id=user_id, document=document)
        for step in self._steps:
            context = await step.run(context)

        if context.record is None:
            raise RuntimeError("Pipeline finished without persisting a record")
        return context.record


def build_processor(
    settings: Settings,
    gate: asyncio.Semaphore | None = None,
    reports_repo: AuditReportsRepository | None = None,
) -> AuditProcessor:
    """Build an AuditProcessor with all required adapters."""
    return AuditProcessor(
        [
            ExtractStep(FormatExtractorFactory.create(settings)),
            FetchContextStep(LegalContextProvider(LawModulesRepository())),
            ComposePromptStep(PromptComposer()),
            InvokeModelStep(AuditClientFactory.create(settings, gate=gate)),
            ValidateStep(),
            PersistStep(reports_repo or AuditReportsRepository()),
        ]
    )
