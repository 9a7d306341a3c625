import asyncio
from typing import ClassVar

from app.audit.client_base import BaseAuditClient
from app.audit.example_client_adapter import ExampleClientAdapter
from app.audit.invocation import ModelInvocationClient
from app.audit.openai_client_adapter import OpenAIClientAdapter
from app.config.settings import Settings


class AuditClientFactory:
    """Creates the configured reasoning service client and invocation wrapper."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create_client(cls, settings: Settings) -> BaseAuditClient:
        """Create the provider adapter from application settings."""
        provider = settings.audit_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.audit_api_key,
            timeout_seconds=settings.audit_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
            response_format=settings.audit_response_format.lower(),
        )

    @classmethod
    def create(
        cls,
        settings: Settings,
        gate: asyncio.Semaphore | None = None,
    ) -> ModelInvocationClient:
        """Create the invocation client; ``gate`` is shared process-wide."""
        if gate is None:
            gate = asyncio.Semaphore(settings.audit_max_concurrency)
        return ModelInvocationClient(
            client=cls.create_client(settings),
            model=settings.audit_model_name,
            temperature=settings.audit_temperature,
            timeout_seconds=settings.audit_timeout_seconds,
            max_retries=settings.audit_max_retries,
            backoff_base_seconds=settings.audit_backoff_base_seconds,
            gate=gate,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = (settings.audit_base_url or "").strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "audit_base_url is required for audit_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown audit provider '{provider}'. Choose from: {supported}")
