"""
Appointment Model - Stores scheduled visits.
"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from ..database import Base

class Appointment(Base):
    """
    Appointment Model - Stores appointment information

    Fields:
    - id: Primary key (client supplied)
    - patient_id: Patient the appointment is for
    - patient_name: Denormalized patient name shown in listings
    - doctor: Attending doctor's name
    - date / time: Scheduled slot as entered by the frontend
    - reason: Reason for the appointment
    - status: Current status (e.g. Scheduled, Completed, Cancelled)
    - notes: Additional notes about the appointment
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=True)
    patient_name = Column(String, nullable=True)
    doctor = Column(String, nullable=True)
    date = Column(String, nullable=True)
    time = Column(String, nullable=True)
    reason = Column(String, nullable=True)
    status = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    def __repr__(self):
        """String representation of the Appointment model"""
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, date='{self.date}')>"
