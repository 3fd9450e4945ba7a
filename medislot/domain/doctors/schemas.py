"""Doctor domain schemas - Pydantic models for validation"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from ...shared.validators import normalize_phone


class DoctorStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    SUSPENDED = "suspended"


class DoctorCreate(BaseModel):
    """Doctor registration request"""

    name: str = Field(min_length=1)
    email: EmailStr
    phone: str
    profession: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    imageUri: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)


class DoctorStatusUpdate(BaseModel):
    status: DoctorStatus


class DoctorResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    profession: str
    experience: str
    status: DoctorStatus
    verified: bool
    request_date: Optional[datetime] = None
    image_uri: Optional[str] = None

    class Config:
        from_attributes = True
