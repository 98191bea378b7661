"""
Core security utilities for authentication and password handling.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import jwt, JWTError
from passlib.context import CryptContext
import logging

from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode in the token (``id``, ``username``, ``role``)
        expires_delta: Token lifetime, defaults to the configured 24 hours

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()

    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode a JWT token, raising ``JWTError`` when it is malformed, forged or expired.
    """
    return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])

def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token string

    Returns:
        Dict containing token payload if valid, None if invalid
    """
    try:
        return decode_access_token(token)
    except JWTError as e:
        logger.debug(f"Token rejected: {str(e)}")
        return None

def token_claims_for(user) -> Dict[str, Any]:
    """
    Claims embedded in tokens issued at login.
    """
    role = user.role.value if hasattr(user.role, "value") else user.role
    return {"id": user.id, "username": user.username, "role": role}
