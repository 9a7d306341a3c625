import asyncio

from app.audit.exceptions import ModelError
from app.audit.invocation import ModelInvocationClient
from app.audit.prompt_composer import PromptComposer
from app.audit.validator import validate
from app.context.provider import LegalContextProvider
from app.database.repositories.audit_reports_repository import AuditReportsRepository
from app.extraction.base import BaseExtractor
from app.logging.logger import Log
from app.processor.pipeline import PipelineContext, PipelineStep


class ExtractStep(PipelineStep):
    def __init__(self, extractor: BaseExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.extraction = await asyncio.to_thread(
            self._extractor.extract, context.document
        )
        return context


class FetchContextStep(PipelineStep):
    def __init__(self, provider: LegalContextProvider) -> None:
        self._provider = provider

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.legal_context = await asyncio.to_thread(self._provider.fetch_context)
        return context


class ComposePromptStep(PipelineStep):
    def __init__(self, composer: PromptComposer) -> None:
        self._composer = composer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None or context.legal_context is None:
            raise ValueError("PipelineContext.extraction and legal_context must be set before compose")
        context.prompt = self._composer.compose(context.legal_context, context.extraction)
        return context


class InvokeModelStep(PipelineStep):
    """Calls the model; a failure after retries is kept on the context, not raised."""

    def __init__(self, client: ModelInvocationClient) -> None:
        self._client = client

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.prompt is None:
            raise ValueError("PipelineContext.prompt must be set before invocation")
        try:
            context.response = await self._client.invoke(context.prompt)
        except ModelError as exc:
            context.model_error = exc
        return context


class ValidateStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.response is None:
            return context
        context.outcome = validate(context.response)
        return context


class PersistStep(PipelineStep):
    """Writes the single record for this request.

    Once started the write is shielded from cancellation, so a client that
    disconnects mid-insert still leaves a consistent record behind.
    """

    def __init__(self, reports_repo: AuditReportsRepository) -> None:
        self._reports_repo = reports_repo

    async def run(self, context: PipelineContext) -> PipelineContext:
        degraded = context.legal_context is not None and context.legal_context.degraded
        write = asyncio.to_thread(
            self._reports_repo.persist,
            context.user_id,
            context.document.file_name,
            context.outcome,
            context_degraded=degraded,
            error=context.model_error,
        )
        context.record = await asyncio.shield(write)
        Log.info(
            f"Audit persisted for '{context.document.file_name}'",
            record_id=context.record.id,
            status=context.record.status.value,
            score=context.record.overall_score,
        )
        return context
