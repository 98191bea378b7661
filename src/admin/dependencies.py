"""
Dependency wiring for the approval workflow.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..realtime.dependencies import get_dispatcher
from ..realtime.dispatcher import EventDispatcher
from .service import ApprovalWorkflow

def get_approval_workflow(
    request: Request,
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
) -> ApprovalWorkflow:
    return ApprovalWorkflow(db=db, dispatcher=dispatcher, request=request)
