"""Patient domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import normalize_phone


class PatientUpsert(BaseModel):
    """Register a patient or refresh their details and push token"""

    name: str = Field(min_length=1)
    phone: str
    email: Optional[str] = None
    expoPushToken: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)


class PatientResponse(BaseModel):
    id: int
    name: str
    phone: str
    email: Optional[str] = None
    hasPushToken: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
