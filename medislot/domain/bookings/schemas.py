"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import normalize_phone, validate_iso_date
from ..availability.catalog import is_valid_slot_key


class BookingCreate(BaseModel):
    """Payload sent by the payment screen once payment is confirmed"""

    patientName: str = Field(min_length=1)
    patientPhone: str
    doctorId: str = Field(min_length=1)
    doctorName: Optional[str] = None
    date: str
    slot: str  # slotKey, e.g. "morning-09:00"
    time: Optional[str] = None
    bookingId: Optional[str] = None
    checked: bool = False

    @field_validator("patientPhone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        return validate_iso_date(v)

    @field_validator("slot")
    @classmethod
    def validate_slot(cls, v):
        if not is_valid_slot_key(v):
            raise ValueError(f"Unknown slot key: {v}")
        return v


class CheckedUpdate(BaseModel):
    checked: bool


class BookingResponse(BaseModel):
    id: int
    bookingId: str
    patientName: str
    patientPhone: str
    doctorId: str
    doctorName: Optional[str] = None
    date: str
    slot: str
    time: Optional[str] = None
    checked: bool
    status: str
    createdAt: Optional[datetime] = None

    class Config:
        from_attributes = True
