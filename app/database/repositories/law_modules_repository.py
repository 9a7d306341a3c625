import psycopg

from app.context.base import BaseContextSource
from app.context.exceptions import ContextUnavailableError
from app.database.connection import get_connection


class LawModulesRepository(BaseContextSource):
    """Read-only access to the law_modules table."""

    def list_fragments(self) -> list[str]:
        """Return the content of every law module in insertion order.

        Raises:
            ContextUnavailableError: if the table cannot be read.
        """
        try:
            with get_connection() as conn:
                rows = conn.execute(
                    """
                    SELECT content
                    FROM law_modules
                    ORDER BY id
                    """
                ).fetchall()
        except (psycopg.Error, RuntimeError) as exc:
            raise ContextUnavailableError(f"Failed to read law modules: {exc}") from exc

        return [row[0] for row in rows]
