"""Patient router - FastAPI endpoints for patient records"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Patient
from .schemas import PatientResponse, PatientUpsert
from .service import PatientService

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


def to_response(patient: Patient) -> PatientResponse:
    return PatientResponse(
        id=patient.id,
        name=patient.name,
        phone=patient.phone,
        email=patient.email,
        hasPushToken=bool(patient.expo_push_token),
        created_at=patient.created_at,
    )


@router.post("")
async def upsert_patient(
    data: PatientUpsert,
    service: PatientService = Depends(get_patient_service),
):
    """Register a patient, or update name/email/push token for an existing phone"""
    patient, created = service.upsert_patient(data)
    return {"success": True, "created": created, "patient": to_response(patient)}


@router.get("/{phone}")
async def get_patient(
    phone: str,
    service: PatientService = Depends(get_patient_service),
):
    try:
        patient = service.get_patient(phone)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {"success": True, "patient": to_response(patient)}
