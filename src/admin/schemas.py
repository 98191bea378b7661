"""
Admin Schemas - request and response models for the admin endpoints.
"""
from typing import Optional, Dict, Any
from pydantic import BaseModel
from datetime import datetime
from ..auth.models import UserRole, AccountStatus

class RejectionRequest(BaseModel):
    """
    Rejection Schema

    Fields:
    - reason: Shown to the user in the rejection email and event
    """
    reason: Optional[str] = None

class AdminUserResponse(BaseModel):
    """
    User row as listed to administrators
    """
    id: int
    username: str
    email: str
    full_name: str
    role: UserRole
    status: AccountStatus
    created_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class DecisionResponse(BaseModel):
    message: str
    changed: bool

class AuditLogResponse(BaseModel):
    """
    Audit entry with the acting user's username
    """
    id: int
    user_id: Optional[int] = None
    username: Optional[str] = None
    action: str
    table_name: Optional[str] = None
    record_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
