"""
Clinic Data Service - read and bulk-replace the frontend-owned tables.
"""
import logging
from typing import Optional
from fastapi import Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..appointments.models import Appointment
from ..core.audit_models import AuditAction
from ..core.audit_service import create_audit_log
from ..exceptions import AppException, StoreWriteError
from ..medical_records.models import MedicalRecord
from ..patients.models import Patient
from ..staff.models import StaffMember
from .schemas import AppointmentData, ClinicData, MedicalRecordData, PatientData, StaffData

# Set up logging
logger = logging.getLogger(__name__)

def get_clinic_data(db: Session) -> ClinicData:
    """
    Load every patient, appointment, record and staff row, ordered by id.
    """
    try:
        return ClinicData(
            patients=[PatientData.model_validate(row) for row in db.query(Patient).order_by(Patient.id)],
            appointments=[AppointmentData.model_validate(row) for row in db.query(Appointment).order_by(Appointment.id)],
            records=[MedicalRecordData.model_validate(row) for row in db.query(MedicalRecord).order_by(MedicalRecord.id)],
            staff=[StaffData.model_validate(row) for row in db.query(StaffMember).order_by(StaffMember.id)],
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching data: {str(e)}")
        raise AppException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error fetching data")

async def bulk_replace(db: Session, data: ClinicData, request: Optional[Request] = None) -> None:
    """
    Replace the contents of all four tables in one transaction.

    Either every row of ``data`` is stored or the previous contents are
    left untouched.

    Raises:
        StoreWriteError: Any row failed to insert; the transaction was rolled back
    """
    try:
        # children first so foreign keys never dangle mid-transaction
        db.query(Appointment).delete()
        db.query(MedicalRecord).delete()
        db.query(StaffMember).delete()
        db.query(Patient).delete()

        db.add_all(Patient(**row.model_dump()) for row in data.patients)
        db.flush()
        db.add_all(Appointment(**row.model_dump()) for row in data.appointments)
        db.add_all(MedicalRecord(**row.model_dump()) for row in data.records)
        db.add_all(StaffMember(**row.model_dump()) for row in data.staff)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Bulk save error: {str(e)}")
        raise StoreWriteError("Bulk save failed")

    logger.info(
        f"Bulk replace stored {len(data.patients)} patients, {len(data.appointments)} appointments, "
        f"{len(data.records)} records, {len(data.staff)} staff"
    )
    await create_audit_log(
        db=db,
        action=AuditAction.BULK_REPLACE,
        details={
            "patients": len(data.patients),
            "appointments": len(data.appointments),
            "records": len(data.records),
            "staff": len(data.staff),
        },
        request=request,
    )
