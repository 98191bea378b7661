"""
FastAPI dependencies for authentication and authorization.
"""
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ..database import get_db
from ..core.security import verify_token
from .models import User, AccountStatus
from .exceptions import InvalidTokenException, AccountStatusException, PermissionDeniedException

# OAuth2 scheme for JWT token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """
    Get current authenticated user from JWT token with database verification.

    Args:
        token: JWT token from Authorization header
        db: Database session

    Returns:
        User: Current authenticated user

    Raises:
        InvalidTokenException: If token is invalid or user not found
    """
    payload = verify_token(token)
    if not payload:
        raise InvalidTokenException("Invalid or expired token")

    user_id = payload.get("id")
    if not user_id:
        raise InvalidTokenException("Invalid token payload")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise InvalidTokenException("User not found")

    return user

def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """
    Get current user and verify the account was approved.
    """
    if current_user.status != AccountStatus.APPROVED:
        raise AccountStatusException(current_user.status)
    return current_user

def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """
    Require an approved account holding the admin role.
    """
    if not current_user.is_admin:
        raise PermissionDeniedException()
    return current_user
