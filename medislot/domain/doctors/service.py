"""Doctor service - Registration and admin approval workflow"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Doctor
from ...shared.errors import ConflictError, InvalidTransitionError, NotFoundError
from .repository import DoctorRepository
from .schemas import DoctorCreate, DoctorStatus

logger = logging.getLogger(__name__)

# target status -> statuses it may be reached from
ALLOWED_TRANSITIONS: dict[DoctorStatus, frozenset[DoctorStatus]] = {
    DoctorStatus.PENDING: frozenset(),
    DoctorStatus.UNDER_REVIEW: frozenset({DoctorStatus.PENDING}),
    DoctorStatus.APPROVED: frozenset({DoctorStatus.UNDER_REVIEW, DoctorStatus.SUSPENDED}),
    DoctorStatus.SUSPENDED: frozenset(DoctorStatus),
}


def can_transition(current: DoctorStatus, target: DoctorStatus) -> bool:
    return current in ALLOWED_TRANSITIONS[target]


class DoctorService:
    """Service layer for doctor business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DoctorRepository()

    def register_doctor(self, data: DoctorCreate) -> Doctor:
        """Create a doctor in pending status; emails are unique"""
        if self.repo.get_by_email(self.db, data.email):
            raise ConflictError("Email already exists")

        try:
            doctor = self.repo.create_doctor(
                self.db,
                name=data.name,
                email=data.email,
                phone=data.phone,
                profession=data.profession,
                experience=data.experience,
                image_uri=data.imageUri,
                status=DoctorStatus.PENDING.value,
                verified=False,
            )
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email already exists") from e

        logger.info(f"🩺 Doctor registered: {doctor.email} ({doctor.id})")
        return doctor

    def get_doctor(self, doctor_id: str) -> Doctor:
        doctor = self.repo.get_by_id(self.db, doctor_id)
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    def list_doctors(self, status: Optional[DoctorStatus] = None) -> list[Doctor]:
        return self.repo.list_doctors(self.db, status.value if status else None)

    def change_status(self, doctor_id: str, target: DoctorStatus) -> Doctor:
        """
        Move a doctor through the approval workflow.

        Approving sets verified; suspending clears it. Any move outside
        ALLOWED_TRANSITIONS raises InvalidTransitionError.
        """
        doctor = self.get_doctor(doctor_id)
        current = DoctorStatus(doctor.status)

        if not can_transition(current, target):
            raise InvalidTransitionError(
                f"Cannot change doctor status from {current.value} to {target.value}"
            )

        if target == DoctorStatus.APPROVED:
            verified = True
        elif target == DoctorStatus.SUSPENDED:
            verified = False
        else:
            verified = doctor.verified

        doctor = self.repo.update_status(self.db, doctor, target.value, verified)
        logger.info(f"✅ Doctor {doctor.id} status: {current.value} -> {target.value}")
        return doctor
