"""
Authentication service layer for business logic.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session
from fastapi import Request

from ..core.security import verify_password, create_access_token, token_claims_for
from ..core.audit_models import AuditAction
from ..core.audit_service import create_audit_log
from .models import User, AccountStatus
from .exceptions import InvalidCredentialsException, AccountStatusException

# Set up logging
logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    AccountStatus.PENDING: "Account pending admin approval",
    AccountStatus.REJECTED: "Account has been rejected",
}

async def login_user(db: Session, username: str, password: str, request: Optional[Request] = None):
    """
    Authenticate a user and issue an access token.

    Args:
        db: Database session
        username: Login name
        password: Plain text password
        request: Current request for audit logging

    Returns:
        Tuple of (token, user)

    Raises:
        InvalidCredentialsException: Unknown username or wrong password
        AccountStatusException: Account is pending or rejected
    """
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password):
        logger.warning(f"Failed login attempt for username: {username}")
        raise InvalidCredentialsException()

    if user.status != AccountStatus.APPROVED:
        raise AccountStatusException(user.status, STATUS_MESSAGES.get(user.status))

    token = create_access_token(token_claims_for(user))

    await create_audit_log(
        db=db,
        action=AuditAction.LOGIN,
        user_id=user.id,
        table_name="users",
        record_id=user.id,
        details={},
        request=request,
    )
    logger.info(f"User {user.username} (ID: {user.id}) logged in")
    return token, user
