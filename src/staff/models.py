"""
Staff Model - Stores the hospital staff directory.

This is the roster shown in the frontend, independent of login accounts.
"""
from sqlalchemy import Column, Integer, String
from ..database import Base

class StaffMember(Base):
    """
    Staff Model - Stores staff directory entries

    Fields:
    - id: Primary key (client supplied)
    - first_name / last_name: Staff member's name
    - role: Job title (e.g. Doctor, Nurse, Receptionist)
    - department: Department assignment
    - phone / email / address: Contact details
    - join_date: Date the staff member joined
    - status: Employment status (e.g. Active, On Leave)
    """
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    role = Column(String, nullable=True)
    department = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    join_date = Column(String, nullable=True)
    status = Column(String, nullable=True)

    def __repr__(self):
        """String representation of the StaffMember model"""
        return f"<StaffMember(id={self.id}, name='{self.first_name} {self.last_name}', role='{self.role}')>"
