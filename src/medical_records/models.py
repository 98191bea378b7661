"""
Medical Record Model - Stores patient visit records and doctor notes.
"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, JSON
from ..database import Base

class MedicalRecord(Base):
    """
    Medical Record Model - Stores patient medical records

    Fields:
    - id: Primary key (client supplied)
    - patient_id: Patient the record belongs to
    - patient_name: Denormalized patient name
    - doctor: Doctor who wrote the record
    - date: Visit date
    - diagnosis: Medical diagnosis
    - treatment: Treatment given
    - prescription: Prescribed medications
    - vitals: Vital signs (free text or structured)
    - notes: Additional medical notes
    """
    __tablename__ = "records"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=True)
    patient_name = Column(String, nullable=True)
    doctor = Column(String, nullable=True)
    date = Column(String, nullable=True)
    diagnosis = Column(Text, nullable=True)
    treatment = Column(Text, nullable=True)
    prescription = Column(Text, nullable=True)
    vitals = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)

    def __repr__(self):
        """String representation of the MedicalRecord model"""
        return f"<MedicalRecord(id={self.id}, patient_id={self.patient_id}, date='{self.date}')>"
