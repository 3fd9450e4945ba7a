"""Doctor router - Registry, approval workflow and dashboard views"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ..bookings.service import BookingService
from .schemas import DoctorCreate, DoctorResponse, DoctorStatus, DoctorStatusUpdate
from .service import DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def get_doctor_service(db: Session = Depends(get_db)) -> DoctorService:
    """Dependency injection for DoctorService"""
    return DoctorService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


@router.post("", status_code=201)
async def register_doctor(
    data: DoctorCreate,
    service: DoctorService = Depends(get_doctor_service),
):
    doctor = service.register_doctor(data)
    return {"success": True, "doctor": DoctorResponse.model_validate(doctor)}


@router.get("")
async def list_doctors(
    status: Optional[DoctorStatus] = Query(None),
    service: DoctorService = Depends(get_doctor_service),
):
    doctors = service.list_doctors(status)
    return {"success": True, "doctors": [DoctorResponse.model_validate(d) for d in doctors]}


@router.get("/{doctor_id}")
async def get_doctor(
    doctor_id: str,
    service: DoctorService = Depends(get_doctor_service),
):
    return {"success": True, "doctor": DoctorResponse.model_validate(service.get_doctor(doctor_id))}


@router.patch("/{doctor_id}/status")
async def update_doctor_status(
    doctor_id: str,
    data: DoctorStatusUpdate,
    service: DoctorService = Depends(get_doctor_service),
):
    """Admin approval workflow: under_review, approved or suspended"""
    doctor = service.change_status(doctor_id, data.status)
    return {"success": True, "doctor": DoctorResponse.model_validate(doctor)}


# ============================================================================
# DASHBOARD
# ============================================================================


@router.get("/{doctor_id}/appointments")
async def get_appointments(
    doctor_id: str,
    service: BookingService = Depends(get_booking_service),
):
    """Open bookings awaiting check-in, grouped by date"""
    return {"success": True, "dates": service.doctor_appointments(doctor_id)}


@router.get("/{doctor_id}/patients")
async def get_patients(
    doctor_id: str,
    service: BookingService = Depends(get_booking_service),
):
    """Checked-in patients with their visit history"""
    return {"success": True, "patients": service.doctor_patients(doctor_id)}
