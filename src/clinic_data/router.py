"""
Clinic Data Router - bulk read/write endpoints used by the hospital frontend.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import ClinicData
from .service import get_clinic_data, bulk_replace

router = APIRouter(prefix="/api", tags=["Clinic Data"])

@router.get("/data", response_model=ClinicData)
def get_data_route(db: Session = Depends(get_db)):
    """
    Return all patients, appointments, records and staff.
    """
    return get_clinic_data(db)

@router.post("/bulk")
async def bulk_replace_route(data: ClinicData, request: Request, db: Session = Depends(get_db)):
    """
    Overwrite all four tables with the posted snapshot.
    """
    await bulk_replace(db, data, request)
    return {"ok": True}
