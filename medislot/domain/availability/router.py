"""Availability router - FastAPI endpoints for doctor slot inventories"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...config import PLATFORM_FEE
from ...database import get_db
from ...rate_limiter import booking_rate_limit
from ...shared.validators import validate_iso_date
from .catalog import booking_quote, catalog_summary, is_valid_slot_key
from .schemas import (
    AvailabilityReplace,
    AvailabilityResponse,
    SaveAvailabilityResponse,
    SlotCountUpdate,
    SlotRef,
)
from .service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctor-availability", tags=["Availability"])
catalog_router = APIRouter(prefix="/slots", tags=["Slots"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    """Dependency injection for AvailabilityService"""
    return AvailabilityService(db)


def parse_date_param(value: Optional[str], name: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(validate_iso_date(value))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"{name}: {e}") from e


# ============================================================================
# CORE: READ / REPLACE / SET / REDUCE
# ============================================================================


@router.post("", response_model=SaveAvailabilityResponse)
async def save_availability(
    data: AvailabilityReplace,
    service: AvailabilityService = Depends(get_availability_service),
):
    """Replace the doctor's whole availability with the editor's snapshot (no merge)"""
    service.replace_availability(data.doctorId, [d.model_dump() for d in data.availability])
    return SaveAvailabilityResponse(message="Availability saved")


@router.get("/{doctor_id}", response_model=AvailabilityResponse)
async def get_availability(
    doctor_id: str,
    service: AvailabilityService = Depends(get_availability_service),
):
    """Get a doctor's availability; 404 when the doctor never saved any"""
    return AvailabilityResponse(availability=service.get_availability(doctor_id))


@router.patch("/{doctor_id}/slot", response_model=AvailabilityResponse)
async def update_slot_count(
    doctor_id: str,
    data: SlotCountUpdate,
    service: AvailabilityService = Depends(get_availability_service),
):
    """Set a slot's count directly"""
    days = service.set_slot_count(doctor_id, data.date, data.slotKey, data.count)
    return AvailabilityResponse(availability=days)


@router.post(
    "/{doctor_id}/reduce-slot",
    response_model=AvailabilityResponse,
    dependencies=[Depends(booking_rate_limit)],
)
async def reduce_slot(
    doctor_id: str,
    data: SlotRef,
    service: AvailabilityService = Depends(get_availability_service),
):
    """Take one unit from a slot; 400 "No slots left" when the count is already 0"""
    days = service.reduce_slot(doctor_id, data.date, data.slotKey)
    return AvailabilityResponse(availability=days)


@router.post("/{doctor_id}/restore-slot", response_model=AvailabilityResponse)
async def restore_slot(
    doctor_id: str,
    data: SlotRef,
    service: AvailabilityService = Depends(get_availability_service),
):
    """Give one unit back to a slot"""
    days = service.restore_slot(doctor_id, data.date, data.slotKey)
    return AvailabilityResponse(availability=days)


# ============================================================================
# VIEWS: SUMMARY / CALENDAR / DAY BOARD
# ============================================================================


@router.get("/{doctor_id}/summary")
async def get_availability_summary(
    doctor_id: str,
    service: AvailabilityService = Depends(get_availability_service),
):
    return {"success": True, **service.get_summary(doctor_id)}


@router.get("/{doctor_id}/calendar")
async def get_calendar(
    doctor_id: str,
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    today: Optional[str] = Query(None, description="Override today's date (YYYY-MM-DD)"),
    selected: list[str] = Query(default=[]),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Month grid with past/today/selected/available flags and per-day slot totals"""
    today_date = parse_date_param(today, "today") or date.today()
    weeks = service.get_calendar(doctor_id, year, month, today_date, selected)
    return {"success": True, "year": year, "month": month, "weeks": weeks}


@router.get("/{doctor_id}/upcoming")
async def get_upcoming_dates(
    doctor_id: str,
    today: Optional[str] = Query(None),
    days: int = Query(30, ge=1, le=90),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Rolling date strip for the patient booking calendar"""
    today_date = parse_date_param(today, "today") or date.today()
    return {"success": True, "dates": service.get_upcoming(doctor_id, today_date, days)}


@router.get("/{doctor_id}/slots/{date_key}")
async def get_day_slots(
    doctor_id: str,
    date_key: str,
    service: AvailabilityService = Depends(get_availability_service),
):
    """All catalog slots for a date with remaining counts and prices"""
    parse_date_param(date_key, "date")
    return {"success": True, "date": date_key, "slots": service.get_day_board(doctor_id, date_key)}


# ============================================================================
# STATIC SLOT CATALOG
# ============================================================================


@catalog_router.get("/catalog")
async def get_slot_catalog():
    return {"success": True, "periods": catalog_summary()}


@catalog_router.get("/{slot_key}/quote")
async def get_slot_quote(slot_key: str):
    """Fee breakdown for booking a slot"""
    if not is_valid_slot_key(slot_key):
        raise HTTPException(status_code=404, detail="Slot not found")
    return {"success": True, "slotKey": slot_key, **booking_quote(slot_key, PLATFORM_FEE)}
