import logging
from dataclasses import dataclass
from typing import List, Optional
from fastapi import HTTPException

from ..ports.appointments_repo import AppointmentsRepository, AppointmentDto
from ..ports.user_repo import UserRepository, UserDto
from .availability_service import AvailabilityService

logger = logging.getLogger(__name__)

VALID_STATUSES = ["pending", "scheduled", "completed", "cancelled"]

# Allowed status changes; completed and cancelled are final
STATUS_TRANSITIONS = {
    "pending": {"scheduled", "cancelled"},
    "scheduled": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


@dataclass
class AppointmentsService:
    repo: AppointmentsRepository
    user_repo: UserRepository
    availability: AvailabilityService
    default_doctor_id: int = 1

    def book(self, user: UserDto, date: Optional[str], type_id: Optional[int], doctor_id: Optional[int] = None, patient_id: Optional[int] = None) -> AppointmentDto:
        if not date:
            raise HTTPException(status_code=400, detail="Appointment date is required")
        doctor_id = doctor_id if doctor_id is not None else self.default_doctor_id

        if user.role == "patient":
            patient_id = user.id
        elif patient_id is None:
            raise HTTPException(status_code=400, detail="patientId is required when booking as a doctor")
        else:
            patient = self.user_repo.get_by_id(patient_id)
            if not patient or patient.role != "patient":
                raise HTTPException(status_code=404, detail="Patient not found")

        doctor = self.user_repo.get_by_id(doctor_id)
        if not doctor or doctor.role != "doctor":
            raise HTTPException(status_code=404, detail="Doctor not found")

        # Check and insert are not atomic: two concurrent requests for one slot can both pass.
        start = self.availability.ensure_available(doctor_id, date, type_id)
        appt = self.repo.create(patient_id, doctor_id, start, type_id, "pending")
        logger.info(f"Booked appointment {appt.id} for patient {patient_id} with doctor {doctor_id} at {start.isoformat()}")
        return appt

    def list_for_user(self, user: UserDto, status: Optional[str] = None) -> List[AppointmentDto]:
        if status is not None and status not in VALID_STATUSES:
            raise HTTPException(status_code=400, detail=f"Invalid status. Must be one of: {VALID_STATUSES}")
        return self.repo.list_for_user(user.id, user.role, status)

    def get_for_user(self, user: UserDto, appointment_id: int) -> AppointmentDto:
        appt = self.repo.get_by_id(appointment_id)
        if not appt or not _is_visible(appt, user):
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appt

    def cancel(self, user: UserDto, appointment_id: int) -> AppointmentDto:
        appt = self.get_for_user(user, appointment_id)
        if appt.status == "cancelled":
            raise HTTPException(status_code=400, detail="This appointment has already been cancelled")
        if appt.status == "completed":
            raise HTTPException(status_code=400, detail="Cannot cancel a completed appointment")
        self.repo.update_status(appointment_id, "cancelled")
        appt.status = "cancelled"
        logger.info(f"Appointment {appointment_id} cancelled by user {user.id}")
        return appt

    def update_status(self, user: UserDto, appointment_id: int, status: str) -> AppointmentDto:
        if user.role != "doctor":
            raise HTTPException(status_code=403, detail="Only doctors can change appointment status")
        if status not in VALID_STATUSES:
            raise HTTPException(status_code=400, detail=f"Invalid status. Must be one of: {VALID_STATUSES}")
        appt = self.get_for_user(user, appointment_id)
        if status not in STATUS_TRANSITIONS[appt.status]:
            raise HTTPException(status_code=400, detail=f"Cannot change status from {appt.status} to {status}")
        self.repo.update_status(appointment_id, status)
        appt.status = status
        logger.info(f"Appointment {appointment_id} moved to {status} by doctor {user.id}")
        return appt


def _is_visible(appt: AppointmentDto, user: UserDto) -> bool:
    if user.role == "doctor":
        return appt.doctor_id == user.id
    return appt.patient_id == user.id
