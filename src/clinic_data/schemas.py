"""
Clinic Data Schemas - rows exchanged with the hospital frontend.

Incoming rows accept the frontend's camelCase keys as well as the
snake_case column names; responses use the column names.
"""
from typing import Any, List, Optional
from pydantic import AliasChoices, BaseModel, Field

def _either(camel: str, snake: str):
    return Field(None, validation_alias=AliasChoices(camel, snake))

class PatientData(BaseModel):
    id: Optional[int] = None
    first_name: Optional[str] = _either("firstName", "first_name")
    last_name: Optional[str] = _either("lastName", "last_name")
    dob: Optional[str] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = _either("emergencyContact", "emergency_contact")
    blood_group: Optional[str] = _either("bloodGroup", "blood_group")
    status: Optional[str] = None

    class Config:
        from_attributes = True

class AppointmentData(BaseModel):
    id: Optional[int] = None
    patient_id: Optional[int] = _either("patientId", "patient_id")
    patient_name: Optional[str] = _either("patientName", "patient_name")
    doctor: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    reason: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class MedicalRecordData(BaseModel):
    id: Optional[int] = None
    patient_id: Optional[int] = _either("patientId", "patient_id")
    patient_name: Optional[str] = _either("patientName", "patient_name")
    doctor: Optional[str] = None
    date: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescription: Optional[str] = None
    vitals: Optional[Any] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class StaffData(BaseModel):
    id: Optional[int] = None
    first_name: Optional[str] = _either("firstName", "first_name")
    last_name: Optional[str] = _either("lastName", "last_name")
    role: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    join_date: Optional[str] = _either("joinDate", "join_date")
    status: Optional[str] = None

    class Config:
        from_attributes = True

class ClinicData(BaseModel):
    """
    Full snapshot of the four frontend-owned tables.

    Used both as the GET /api/data response and the POST /api/bulk body;
    missing lists mean "empty".
    """
    patients: List[PatientData] = Field(default_factory=list)
    appointments: List[AppointmentData] = Field(default_factory=list)
    records: List[MedicalRecordData] = Field(default_factory=list)
    staff: List[StaffData] = Field(default_factory=list)
