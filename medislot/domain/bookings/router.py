"""Booking router - FastAPI endpoints for bookings and check-in"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Booking
from ...rate_limiter import booking_rate_limit
from ...services.notification_service import send_booking_confirmation
from ...shared.validators import validate_iso_date
from .schemas import BookingCreate, BookingResponse, CheckedUpdate
from .service import BookingService, serialize_booking

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


def to_response(booking: Booking) -> BookingResponse:
    return BookingResponse(**serialize_booking(booking))


def _normalize_or_422(call, *args, **kwargs):
    try:
        return call(*args, **kwargs)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("", status_code=201, dependencies=[Depends(booking_rate_limit)])
async def create_booking(
    data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Store a booking as sent by the client.

    Slot inventory is not touched; the client reduces the slot separately.
    """
    booking = service.create_booking(data)
    notification = await send_booking_confirmation(service.db, booking)
    return {
        "success": True,
        "booking": to_response(booking),
        "notificationSent": notification["sent"],
    }


@router.post("/reserve", status_code=201, dependencies=[Depends(booking_rate_limit)])
async def reserve_booking(
    data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """Reduce the slot and store the booking together, or do neither"""
    booking = service.reserve_booking(data)
    notification = await send_booking_confirmation(service.db, booking)
    return {
        "success": True,
        "booking": to_response(booking),
        "notificationSent": notification["sent"],
    }


@router.get("")
async def list_bookings(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    service: BookingService = Depends(get_booking_service),
):
    """All bookings, newest first"""
    bookings = service.list_bookings(skip, limit)
    return {"success": True, "bookings": [to_response(b) for b in bookings]}


@router.get("/user/{phone}")
async def list_patient_bookings(
    phone: str,
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    service: BookingService = Depends(get_booking_service),
):
    bookings = _normalize_or_422(service.list_patient_bookings, phone, skip, limit)
    return {"success": True, "bookings": [to_response(b) for b in bookings]}


@router.get("/user/{phone}/notifications")
async def list_patient_notifications(
    phone: str,
    today: Optional[str] = Query(None, description="Override today's date (YYYY-MM-DD)"),
    service: BookingService = Depends(get_booking_service),
):
    """Upcoming open bookings for the patient's notification feed"""
    today_date = date.today()
    if today is not None:
        today_date = date.fromisoformat(_normalize_or_422(validate_iso_date, today))
    bookings = _normalize_or_422(service.patient_notifications, phone, today_date)
    return {"success": True, "notifications": [to_response(b) for b in bookings]}


@router.get("/doctor/{doctor_id}")
async def list_doctor_bookings(
    doctor_id: str,
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    service: BookingService = Depends(get_booking_service),
):
    bookings = service.list_doctor_bookings(doctor_id, skip, limit)
    return {"success": True, "bookings": [to_response(b) for b in bookings]}


@router.patch("/{booking_pk}/checked")
async def update_checked(
    booking_pk: int,
    data: CheckedUpdate,
    service: BookingService = Depends(get_booking_service),
):
    """Mark a booking as checked; checked bookings cannot be reopened"""
    booking = service.set_checked(booking_pk, data.checked)
    return {"success": True, "booking": to_response(booking)}
