"""
Authentication-specific exceptions.
"""
from fastapi import HTTPException, status
from typing import Union
from .models import AccountStatus

class AuthException(HTTPException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class InvalidCredentialsException(AuthException):
    """Exception raised when credentials are invalid."""
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class MissingFieldsException(AuthException):
    """Exception raised when a required registration field is empty."""
    def __init__(self, detail: str = "Missing required fields"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class DuplicateAccountException(AuthException):
    """Exception raised when username or email already exists."""
    def __init__(self, detail: str = "Username or email already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class AccountStatusException(AuthException):
    """Exception raised when account status prevents an operation."""
    def __init__(self, account_status: Union[str, AccountStatus], detail: str = None):
        status_value = account_status.value if hasattr(account_status, 'value') else str(account_status)
        message = detail or f"Account status '{status_value}' prevents this operation"
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)

class InvalidTokenException(AuthException):
    """Exception raised when token is invalid."""
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class PermissionDeniedException(AuthException):
    """Exception raised when user doesn't have required permissions."""
    def __init__(self, detail: str = "Admin only"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class ResourceNotFoundException(AuthException):
    """Exception raised when a requested record does not exist."""
    def __init__(self, detail: str = "User not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class StatusConflictException(AuthException):
    """Exception raised when an account was already decided the other way."""
    def __init__(self, current_status: Union[str, AccountStatus], requested: Union[str, AccountStatus]):
        current = current_status.value if hasattr(current_status, 'value') else str(current_status)
        wanted = requested.value if hasattr(requested, 'value') else str(requested)
        detail = f"Cannot mark account as {wanted}: it is already {current}"
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)
