import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Query, Request, UploadFile
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.cancellation import run_until_disconnected
from app.api.serialization import record_to_dict
from app.audit.exceptions import (
    ModelRateLimitError,
    ModelTimeoutError,
    ModelUnavailableError,
    ResponseParseError,
    SchemaViolation,
)
from app.auth.base import BaseIdentityVerifier
from app.auth.jwt_verifier import JwtIdentityVerifier
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.models import AuditStatus
from app.database.repositories.audit_reports_repository import AuditReportsRepository
from app.logging.logger import Log
from app.processor.exceptions import (
    DocumentMissingError,
    DocumentTooLargeError,
    ProcessorError,
)
from app.processor.models import MediaType, UploadedDocument
from app.processor.processor import AuditProcessor, build_processor

FAILED_RECORD_STATUS: dict[str, int] = {
    cls.category: cls.status_code
    for cls in (
        ModelUnavailableError,
        ModelTimeoutError,
        ModelRateLimitError,
        ResponseParseError,
        SchemaViolation,
    )
}

INTERNAL_ERROR_CATEGORY = "internal_error"

_bearer = HTTPBearer(auto_error=False)


def create_app(
    settings: Settings | None = None,
    *,
    processor: AuditProcessor | None = None,
    verifier: BaseIdentityVerifier | None = None,
    reports_repo: AuditReportsRepository | None = None,
) -> FastAPI:
    """Build the HTTP application; collaborators default to the production wiring."""
    settings = settings or Settings()
    reports_repo = reports_repo or AuditReportsRepository()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        Log.configure(settings.log_level)
        init_pool(settings)
        Log.info("Compliance audit service started", env=settings.app_env)
        try:
            yield
        finally:
            close_pool()
            Log.info("Compliance audit service stopped")

    app = FastAPI(title="Compliance Audit Service", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.processor = processor or build_processor(settings, reports_repo=reports_repo)
    app.state.verifier = verifier or JwtIdentityVerifier.from_settings(settings)
    app.state.reports_repo = reports_repo

    @app.exception_handler(ProcessorError)
    async def processor_error_handler(_: Request, exc: ProcessorError) -> JSONResponse:
        if exc.status_code >= 500:
            Log.error(f"Request failed: {exc}", category=exc.category)
        else:
            Log.warning(f"Request rejected: {exc}", category=exc.category)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"category": exc.category, "message": str(exc)}},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        Log.exception(
            f"Unhandled error: {type(exc).__name__}: {exc}",
            method=request.method,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "category": INTERNAL_ERROR_CATEGORY,
                    "message": "The request could not be completed",
                }
            },
        )

    async def current_user(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    ) -> str:
        token = credentials.credentials if credentials else None
        return request.app.state.verifier.verify(token)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/audits")
    async def create_audit(
        request: Request,
        user_id: str = Depends(current_user),
        file: UploadFile | None = File(None),
    ) -> JSONResponse:
        document = await _read_upload(file, settings.max_upload_bytes)
        record = await run_until_disconnected(
            request,
            request.app.state.processor.process(user_id, document),
            settings.disconnect_poll_interval_seconds,
        )
        payload = record_to_dict(record)
        if record.status is AuditStatus.COMPLETED:
            return JSONResponse(status_code=200, content=payload)

        category = record.error_category or ModelUnavailableError.category
        return JSONResponse(
            status_code=FAILED_RECORD_STATUS.get(category, ModelUnavailableError.status_code),
            content={
                "error": {"category": category, "message": record.error_message or ""},
                "record": payload,
            },
        )

    @app.get("/audits")
    async def list_audits(
        request: Request,
        user_id: str = Depends(current_user),
        limit: int = Query(50, ge=1, le=200),
    ) -> dict[str, list[dict[str, object]]]:
        records = await asyncio.to_thread(
            request.app.state.reports_repo.list_for_user, user_id, limit
        )
        return {"audits": [record_to_dict(r) for r in records]}

    @app.get("/audits/{record_id}")
    async def get_audit(
        record_id: str,
        request: Request,
        user_id: str = Depends(current_user),
    ) -> dict[str, object]:
        record = await asyncio.to_thread(
            request.app.state.reports_repo.find_by_id, record_id, user_id
        )
        return record_to_dict(record)

    return app


async def _read_upload(file: UploadFile | None, max_bytes: int) -> UploadedDocument:
    if file is None:
        raise DocumentMissingError("No file was uploaded")
    content = await file.read(max_bytes + 1)
    file_name = file.filename or "document"
    if not content:
        raise DocumentMissingError(f"Uploaded file '{file_name}' is empty")
    if len(content) > max_bytes:
        raise DocumentTooLargeError(
            f"Uploaded file '{file_name}' exceeds the limit of {max_bytes} bytes"
        )
    return UploadedDocument(
        content=content,
        media_type=MediaType.resolve(file.content_type, file_name),
        file_name=file_name,
    )
