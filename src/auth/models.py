"""
User Model - Stores user accounts and their approval state.

New accounts are created as PENDING and stay locked out until an
administrator approves or rejects them.
"""
from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
import enum
from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the hospital system.

    Roles:
    - ADMIN: System administrators who approve registrations
    - DOCTOR: Medical practitioners
    - NURSE: Nursing staff
    - STAFF: Administrative staff (default for self-registration)
    """
    ADMIN = "admin"
    DOCTOR = "doctor"
    NURSE = "nurse"
    STAFF = "staff"

class AccountStatus(str, enum.Enum):
    """
    Enumeration for account approval status.

    Status Types:
    - PENDING: Registered, awaiting an admin decision
    - APPROVED: Admin granted access (terminal)
    - REJECTED: Admin refused access (terminal)
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - username: Unique login name
    - email: Unique email address for communication
    - password: Securely hashed password (never store raw passwords)
    - full_name: User's complete name
    - role: User role (admin, doctor, nurse, staff)
    - status: Approval status (pending, approved, rejected)
    - created_at: Timestamp when user was created
    - approved_at: Timestamp of the admin decision
    - approved_by: Username of the admin who decided
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    role = Column(Enum(UserRole, values_callable=_enum_values), default=UserRole.STAFF, nullable=False)
    status = Column(
        Enum(AccountStatus, values_callable=_enum_values),
        default=AccountStatus.PENDING,
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(String, nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}', status='{self.status}')>"

    @property
    def is_admin(self) -> bool:
        """Check if the account holds the admin role"""
        return self.role == UserRole.ADMIN
