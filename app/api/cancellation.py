import asyncio
from collections.abc import Awaitable
from typing import Protocol, TypeVar

from app.api.exceptions import ClientDisconnectedError
from app.logging.logger import Log

T = TypeVar("T")


class DisconnectAware(Protocol):
    async def is_disconnected(self) -> bool: ...


async def run_until_disconnected(
    request: DisconnectAware,
    work: Awaitable[T],
    poll_interval_seconds: float = 0.5,
) -> T:
    """Await ``work``, cancelling it if the client disconnects first.

    Raises:
        ClientDisconnectedError: when the work was cancelled because the
            client went away.
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval_seconds)
            if done:
                return task.result()
            if await request.is_disconnected():
                break
    except asyncio.CancelledError:
        task.cancel()
        raise

    Log.warning("Client disconnected, cancelling audit")
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    raise ClientDisconnectedError("Client disconnected before the audit completed")
