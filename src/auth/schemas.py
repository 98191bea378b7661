"""
User Schemas - Pydantic models for user data validation and serialization.
"""
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field
from datetime import datetime
from .models import UserRole, AccountStatus

class SignupRequest(BaseModel):
    """
    Signup Schema - Used for self-registration

    Fields are optional at the schema level so the service can answer
    with a single "Missing required fields" error, like the login form expects.
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")
    role: Optional[UserRole] = None

    class Config:
        populate_by_name = True

class UserLogin(BaseModel):
    """
    Login Schema

    Fields:
    - username: Login name
    - password: Plain text password
    """
    username: str
    password: str

class UserResponse(BaseModel):
    """
    User Response Schema - Used when returning user data to clients

    Serialized with camelCase ``fullName`` to match the frontend contract.
    """
    id: int
    username: str
    email: str
    full_name: str = Field(..., serialization_alias="fullName")
    role: UserRole
    status: AccountStatus

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
        populate_by_name = True

class SignupResponse(BaseModel):
    message: str
    user: UserResponse

class LoginResponse(BaseModel):
    """
    Login Response Schema

    Fields:
    - token: JWT bearer token valid for 24 hours
    - user: The authenticated user
    """
    token: str
    user: UserResponse
