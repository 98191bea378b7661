from sqlalchemy.orm import Session
from fastapi import Request
from typing import Optional, Dict, Any, List
import logging

from .audit_models import AuditLog

logger = logging.getLogger(__name__)

async def create_audit_log(
    db: Session,
    action: str,
    user_id: Optional[int] = None,
    table_name: Optional[str] = None,
    record_id: Optional[Any] = None,
    details: Optional[Dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> Optional[AuditLog]:
    """
    Creates an audit log entry.

    Audit writes are best-effort: a failure is logged and rolled back,
    never raised to the caller.

    Args:
        db: The database session.
        action: A string describing the action performed (e.g., 'SIGNUP', 'APPROVED_USER').
        user_id: The ID of the user who performed the action (if applicable).
        table_name: Table of the record the action targeted.
        record_id: Primary key of the record the action targeted.
        details: A dictionary containing additional context or data related to the action.
        request: The FastAPI request object to extract IP address (if available).

    Returns:
        The created AuditLog object, or None when the write failed.
    """
    ip_address = None
    if request and request.client:
        ip_address = request.client.host

    audit_entry = AuditLog(
        user_id=user_id,
        action=action,
        table_name=table_name,
        record_id=str(record_id) if record_id is not None else None,
        ip_address=ip_address,
        details=details
    )
    try:
        db.add(audit_entry)
        db.commit()
        db.refresh(audit_entry)
    except Exception:
        logger.exception(f"Audit log error for action {action}")
        db.rollback()
        return None
    return audit_entry

def get_audit_logs(db: Session, limit: int = 100) -> List[Dict[str, Any]]:
    """
    Most recent audit entries first, each enriched with the actor's username.
    """
    entries = (
        db.query(AuditLog)
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit)
        .all()
    )
    return [
        {
            "id": entry.id,
            "user_id": entry.user_id,
            "action": entry.action,
            "table_name": entry.table_name,
            "record_id": entry.record_id,
            "details": entry.details,
            "created_at": entry.created_at,
            "username": entry.user.username if entry.user else None,
        }
        for entry in entries
    ]
