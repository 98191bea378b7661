"""
Admin routes: registration approval and oversight.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from ..database import get_db
from ..auth.dependencies import require_admin
from ..auth.models import User
from ..core.audit_service import get_audit_logs
from .dependencies import get_approval_workflow
from .schemas import AdminUserResponse, AuditLogResponse, DecisionResponse, RejectionRequest
from .service import ApprovalWorkflow

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])

@router.get("/pending-users", response_model=List[AdminUserResponse])
def get_pending_users_route(
    current_admin: User = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    """
    Accounts awaiting a decision, newest first.
    """
    return workflow.list_pending()

@router.post("/approve-user/{user_id}", response_model=DecisionResponse, status_code=status.HTTP_200_OK)
async def approve_user_route(
    user_id: int,
    current_admin: User = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    """
    Approve a pending account.

    The approved user (if connected) receives ``approved`` and every admin
    stream receives ``user_status_changed``.
    """
    user, changed = await workflow.approve(user_id, current_admin)
    message = "User approved successfully" if changed else "User already approved"
    return DecisionResponse(message=message, changed=changed)

@router.post("/reject-user/{user_id}", response_model=DecisionResponse, status_code=status.HTTP_200_OK)
async def reject_user_route(
    user_id: int,
    rejection: Optional[RejectionRequest] = None,
    current_admin: User = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    """
    Reject a pending account, with an optional reason.
    """
    reason = rejection.reason if rejection else None
    user, changed = await workflow.reject(user_id, current_admin, reason)
    message = "User rejected" if changed else "User already rejected"
    return DecisionResponse(message=message, changed=changed)

@router.get("/users", response_model=List[AdminUserResponse])
def get_users_route(
    current_admin: User = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    """
    Every account, newest first.
    """
    return workflow.list_all()

@router.get("/audit-logs", response_model=List[AuditLogResponse])
def get_audit_logs_route(
    limit: int = Query(100, ge=1, le=1000, description="Maximum entries to return"),
    current_admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Most recent audit entries.
    """
    return get_audit_logs(db, limit=limit)
