from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class AuditStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class AuditRecord:
    """Represents a row from the auditor_reports table."""

    id: str
    user_id: str
    document_name: str
    audit_result: dict[str, Any] | None
    overall_score: int
    status: AuditStatus
    repaired: bool = False
    context_degraded: bool = False
    error_category: str | None = None
    error_message: str | None = None
    created_at: datetime | None = None
