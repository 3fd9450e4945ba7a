"""Availability domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_iso_date
from .catalog import is_valid_slot_key


class SlotEntry(BaseModel):
    """One bookable bucket on a day"""

    slotKey: str
    count: int = Field(ge=0)

    @field_validator("slotKey")
    @classmethod
    def validate_slot_key(cls, v):
        if not is_valid_slot_key(v):
            raise ValueError(f"Unknown slot key: {v}")
        return v

    class Config:
        from_attributes = True


class DayEntry(BaseModel):
    date: str
    slots: list[SlotEntry] = []

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        return validate_iso_date(v)

    @field_validator("slots")
    @classmethod
    def validate_unique_slots(cls, v):
        keys = [s.slotKey for s in v]
        if len(keys) != len(set(keys)):
            raise ValueError("slotKey values must be unique within a day")
        return v


class AvailabilityReplace(BaseModel):
    """Full snapshot from the editor; replaces every stored day"""

    doctorId: str = Field(min_length=1)
    availability: list[DayEntry]

    @field_validator("availability")
    @classmethod
    def validate_unique_dates(cls, v):
        dates = [d.date for d in v]
        if len(dates) != len(set(dates)):
            raise ValueError("date values must be unique")
        return v


class SlotCountUpdate(BaseModel):
    date: str
    slotKey: str
    count: int = Field(ge=0)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        return validate_iso_date(v)


class SlotRef(BaseModel):
    """Addresses a single slot of a doctor's availability"""

    date: str
    slotKey: str

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        return validate_iso_date(v)


class AvailabilityResponse(BaseModel):
    success: bool = True
    availability: list[DayEntry]


class SaveAvailabilityResponse(BaseModel):
    success: bool = True
    message: str
