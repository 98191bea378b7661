"""
Patient Model - Stores patient registration details.

Rows are owned by the hospital frontend and replaced wholesale through
the bulk data endpoint.
"""
from sqlalchemy import Column, Integer, String
from ..database import Base

class Patient(Base):
    """
    Patient Model - Stores patient information

    Fields:
    - id: Primary key (client supplied)
    - first_name / last_name: Patient's name
    - dob: Date of birth as entered by the frontend
    - gender: Patient's gender
    - phone: Contact number
    - address: Patient's address
    - emergency_contact: Emergency contact information
    - blood_group: Blood group
    - status: Admission status (e.g. Active, Discharged)
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    dob = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    emergency_contact = Column(String, nullable=True)
    blood_group = Column(String, nullable=True)
    status = Column(String, nullable=True)

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, name='{self.first_name} {self.last_name}')>"
