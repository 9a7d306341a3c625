"""Model invocation with per-attempt timeout, bounded retry and a concurrency gate."""

import asyncio
from collections.abc import Awaitable, Callable

from app.audit.client_base import BaseAuditClient
from app.audit.exceptions import ModelError, ModelTimeoutError
from app.audit.models import AuditPrompt, ModelResponse
from app.logging.logger import Log

Sleep = Callable[[float], Awaitable[None]]


class ModelInvocationClient:
    """Calls the reasoning service for one prompt.

    Transport, timeout and rate-limit failures are retried with exponential
    backoff (``backoff_base * 2**n``) up to ``max_retries`` times. A response
    that arrives is never retried, however malformed. The gate is a
    process-wide semaphore shared by all requests; it is held only for the
    duration of an attempt, never across a backoff sleep.
    """

    def __init__(
        self,
        *,
        client: BaseAuditClient,
        model: str,
        temperature: float = 0.1,
        timeout_seconds: float = 45.0,
        max_retries: int = 2,
        backoff_base_seconds: float = 1.0,
        gate: asyncio.Semaphore | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._timeout = timeout_seconds
        self._max_retries = max(0, max_retries)
        self._backoff_base = backoff_base_seconds
        self._gate = gate if gate is not None else asyncio.Semaphore(4)
        self._sleep = sleep

    async def invoke(self, prompt: AuditPrompt) -> ModelResponse:
        retries = 0
        while True:
            try:
                raw = await self._attempt(prompt)
            except ModelError as exc:
                if not exc.retryable or retries >= self._max_retries:
                    Log.error(
                        f"Model call failed after {retries + 1} attempt(s): {exc}",
                        category=exc.category,
                    )
                    raise
                delay = self._backoff_base * (2**retries)
                retries += 1
                Log.warning(
                    f"Model call failed, retry {retries}/{self._max_retries} "
                    f"in {delay:.1f}s: {exc}",
                    category=exc.category,
                )
                await self._sleep(delay)
                continue

            Log.debug(f"AI raw response:\n{raw}")
            Log.info(f"Model responded with {len(raw)} chars", retries=retries)
            return ModelResponse(raw_text=raw, retries=retries)

    async def _attempt(self, prompt: AuditPrompt) -> str:
        async with self._gate:
            Log.debug(f"Audit prompt:\n{prompt.instruction}")
            try:
                return await asyncio.wait_for(
                    self._client.create_completion(
                        model=self._model,
                        temperature=self._temperature,
                        instruction=prompt.instruction,
                        json_schema=prompt.schema_contract,
                        attachment=prompt.attachment,
                    ),
                    timeout=self._timeout,
                )
            except asyncio.TimeoutError as exc:
                raise ModelTimeoutError(
                    f"AI provider did not respond within {self._timeout:g}s"
                ) from exc
