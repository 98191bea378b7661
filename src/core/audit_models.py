"""
Audit trail of account and data changes.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from ..auth.models import User  # noqa: F401


class AuditAction:
    """Values stored in ``AuditLog.action``."""
    SIGNUP = "SIGNUP"
    LOGIN = "LOGIN"
    APPROVED_USER = "APPROVED_USER"
    REJECTED_USER = "REJECTED_USER"
    BULK_REPLACE = "BULK_REPLACE"


class AuditLog(Base):
    """
    One audit entry.

    Fields:
    - user_id: Acting user (the admin for decisions, the new account for signups)
    - action: One of ``AuditAction``
    - table_name / record_id: Row the action targeted, if any
    - details: Action-specific context, e.g. the rejection reason
    - ip_address: Client address of the triggering request
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String, nullable=False, index=True)
    table_name = Column(String, nullable=True)
    record_id = Column(String, nullable=True)
    details = Column(JSON, nullable=True)
    ip_address = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user = relationship("User")

    def __repr__(self):
        return f"<AuditLog(id={self.id}, action='{self.action}', record={self.table_name}:{self.record_id})>"
