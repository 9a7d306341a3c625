import uuid
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.audit.models import AuditOutcome, ValidOutcome
from app.database.connection import get_connection
from app.database.models import AuditRecord, AuditStatus
from app.processor.exceptions import PersistenceError, ProcessorError, RecordNotFoundError

_COLUMNS = """
    id, user_id, document_name, audit_result, overall_score, status,
    repaired, context_degraded, error_category, error_message, created_at
"""


class AuditReportsRepository:
    """Append-only storage for the auditor_reports table."""

    def persist(
        self,
        user_id: str,
        document_name: str,
        outcome: AuditOutcome | None,
        *,
        context_degraded: bool = False,
        error: ProcessorError | None = None,
    ) -> AuditRecord:
        """Insert one record for a finished audit and return it.

        A valid outcome is stored as ``completed`` with its report and score.
        An invalid outcome, or an ``error`` raised before any response was
        obtained, is stored as ``failed`` with score 0.

        Raises:
            PersistenceError: if the insert does not succeed.
        """
        if isinstance(outcome, ValidOutcome):
            values: tuple[Any, ...] = (
                Jsonb(outcome.report.to_payload()),
                outcome.report.score,
                AuditStatus.COMPLETED.value,
                outcome.repaired,
                None,
                None,
            )
        elif outcome is not None:
            values = (
                Jsonb(outcome.partial) if outcome.partial is not None else None,
                0,
                AuditStatus.FAILED.value,
                False,
                outcome.category,
                outcome.reason,
            )
        elif error is not None:
            values = (None, 0, AuditStatus.FAILED.value, False, error.category, str(error))
        else:
            raise ValueError("Either an outcome or an error is required to persist an audit")

        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO auditor_reports (
                            user_id, document_name, audit_result, overall_score,
                            status, repaired, error_category, error_message,
                            context_degraded
                        )
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                        RETURNING {_COLUMNS}
                        """,
                        (user_id, document_name, *values, context_degraded),
                    )
                    row = cur.fetchone()
                conn.commit()
        except (psycopg.Error, RuntimeError) as exc:
            raise PersistenceError(f"Failed to persist audit record: {exc}") from exc

        if row is None:
            raise PersistenceError("Insert returned no row")
        return _to_record(row)

    def find_by_id(self, record_id: str, user_id: str) -> AuditRecord:
        """Find a record owned by ``user_id``.

        Raises:
            RecordNotFoundError: if no such record exists for this user.
            PersistenceError: if the table cannot be read.
        """
        try:
            uuid.UUID(record_id)
        except ValueError:
            raise RecordNotFoundError(f"Audit record {record_id} not found") from None

        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS}
                        FROM auditor_reports
                        WHERE id = %s AND user_id = %s
                        """,
                        (record_id, user_id),
                    )
                    row = cur.fetchone()
        except (psycopg.Error, RuntimeError) as exc:
            raise PersistenceError(f"Failed to read audit record: {exc}") from exc

        if row is None:
            raise RecordNotFoundError(f"Audit record {record_id} not found")
        return _to_record(row)

    def list_for_user(self, user_id: str, limit: int = 50) -> list[AuditRecord]:
        """Return the user's records, newest first."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS}
                        FROM auditor_reports
                        WHERE user_id = %s
                        ORDER BY created_at DESC, id
                        LIMIT %s
                        """,
                        (user_id, limit),
                    )
                    rows = cur.fetchall()
        except (psycopg.Error, RuntimeError) as exc:
            raise PersistenceError(f"Failed to list audit records: {exc}") from exc

        return [_to_record(row) for row in rows]


def _to_record(row: dict[str, Any]) -> AuditRecord:
    return AuditRecord(
        id=str(row["id"]),
        user_id=row["user_id"],
        document_name=row["document_name"],
        audit_result=row["audit_result"],
        overall_score=row["overall_score"],
        status=AuditStatus(row["status"]),
        repaired=row["repaired"],
        context_degraded=row["context_degraded"],
        error_category=row["error_category"],
        error_message=row["error_message"],
        created_at=row["created_at"],
    )
