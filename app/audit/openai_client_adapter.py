from typing import Any

import httpx
import openai

from app.audit.client_base import BaseAuditClient
from app.audit.exceptions import (
    ModelConfigurationError,
    ModelRateLimitError,
    ModelTimeoutError,
    ModelUnavailableError,
)
from app.extraction.models import Attachment


class OpenAIClientAdapter(BaseAuditClient):
    """Audit client built on the OpenAI-compatible chat completions API."""

    RESPONSE_FORMATS = ("json_schema", "json_object")

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        base_url: str | None = None,
        response_format: str = "json_schema",
    ) -> None:
        if response_format not in self.RESPONSE_FORMATS:
            raise ValueError(
                f"Unknown response format '{response_format}'. "
                f"Choose from: {list(self.RESPONSE_FORMATS)}"
            )
        self._api_key = api_key
        self._response_format = response_format
        # Retries are owned by ModelInvocationClient.
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        instruction: str,
        json_schema: dict[str, Any],
        attachment: Attachment | None = None,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format=self._build_response_format(json_schema),
                messages=[
                    {"role": "user", "content": self._build_content(instruction, attachment)},
                ],
            )
        except openai.RateLimitError as exc:
            raise ModelRateLimitError(self._describe("rate limit", exc)) from exc
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise ModelTimeoutError(self._describe("timeout", exc)) from exc
        except (openai.APIConnectionError, httpx.TransportError) as exc:
            raise ModelUnavailableError(self._describe("network error", exc)) from exc
        except (
            openai.AuthenticationError,
            openai.PermissionDeniedError,
            openai.BadRequestError,
            openai.NotFoundError,
        ) as exc:
            raise ModelConfigurationError(self._describe("request rejected", exc)) from exc
        except openai.APIError as exc:
            raise ModelUnavailableError(self._describe("API error", exc)) from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def _build_response_format(self, json_schema: dict[str, Any]) -> dict[str, Any]:
        if self._response_format == "json_object":
            return {"type": "json_object"}
        return {
            "type": "json_schema",
            "json_schema": {
                "name": "compliance_audit_report",
                "strict": True,
                "schema": json_schema,
            },
        }

    @staticmethod
    def _build_content(
        instruction: str,
        attachment: Attachment | None,
    ) -> list[dict[str, Any]]:
        parts: list[dict[str, Any]] = []
        if attachment is not None:
            parts.append(
                {
                    "type": "file",
                    "file": {
                        "filename": attachment.file_name,
                        "file_data": attachment.data_url,
                    },
                }
            )
        parts.append({"type": "text", "text": instruction})
        return parts

    def _describe(self, kind: str, exc: Exception) -> str:
        message = f"AI provider {kind}: {exc}"
        if self._api_key:
            message = message.replace(self._api_key, "***")
        return message
