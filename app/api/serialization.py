from typing import Any

from app.database.models import AuditRecord


def record_to_dict(record: AuditRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "user_id": record.user_id,
        "document_name": record.document_name,
        "audit_result": record.audit_result,
        "overall_score": record.overall_score,
        "status": record.status.value,
        "repaired": record.repaired,
        "context_degraded": record.context_degraded,
        "error_category": record.error_category,
        "error_message": record.error_message,
        "created_at": record.created_at.isoformat() if record.created_at else None,
    }
