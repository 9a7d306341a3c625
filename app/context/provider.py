from app.context.base import BaseContextSource
from app.context.exceptions import ContextUnavailableError
from app.context.models import LegalContext
from app.logging.logger import Log


class LegalContextProvider:
    """Fetches the legal corpus, degrading to an empty context on failure.

    An audit without legal grounding is still returned to the user, so a
    store outage never aborts the pipeline; the result is marked ``degraded``
    and the record keeps that flag.
    """

    def __init__(self, source: BaseContextSource) -> None:
        self._source = source

    def fetch_context(self) -> LegalContext:
        try:
            fragments = self._source.list_fragments()
        except ContextUnavailableError as exc:
            Log.warning(f"Legal context unavailable, continuing without it: {exc}")
            return LegalContext(degraded=True)

        cleaned = tuple(f for f in fragments if f and f.strip())
        Log.info(f"Loaded legal context: {len(cleaned)} fragments")
        return LegalContext(fragments=cleaned)
