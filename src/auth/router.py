"""
Authentication routes for the hospital system.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from ..admin.dependencies import get_approval_workflow
from ..admin.service import ApprovalWorkflow
from .schemas import SignupRequest, SignupResponse, UserLogin, LoginResponse, UserResponse
from .service import login_user

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(prefix="/api/auth", tags=["Authentication"])

@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_200_OK, summary="Self-Registration (Pending Approval)")
async def signup_route(
    signup_data: SignupRequest,
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
):
    """
    Register a new account in the pending state.

    Admins are emailed and every connected admin stream receives
    ``new_pending_user``. The account cannot log in until approved.
    """
    user = await workflow.register(signup_data)
    return SignupResponse(
        message="Registration successful! Please wait for admin approval.",
        user=UserResponse.model_validate(user),
    )

@router.post("/login", response_model=LoginResponse, summary="User Login")
async def login_route(
    login_data: UserLogin,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Exchange username and password for a 24-hour bearer token.
    """
    token, user = await login_user(db, login_data.username, login_data.password, request)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))
