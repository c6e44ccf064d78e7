from dataclasses import dataclass
from typing import List, Optional, Protocol
from datetime import datetime


@dataclass(frozen=True)
class AppointmentTypeDto:
    id: int
    name: str
    duration_minutes: int


@dataclass
class AppointmentDto:
    id: int
    patient_id: int
    doctor_id: int
    date: datetime
    type_id: int
    status: str
    created_at: Optional[datetime] = None


class AppointmentsRepository(Protocol):
    def list_types(self) -> List[AppointmentTypeDto]:
        ...

    def get_type(self, type_id: int) -> Optional[AppointmentTypeDto]:
        ...

    def list_for_doctor(self, doctor_id: int) -> List[AppointmentDto]:
        ...

    def list_for_user(self, user_id: int, role: str, status: Optional[str] = None) -> List[AppointmentDto]:
        ...

    def get_by_id(self, appointment_id: int) -> Optional[AppointmentDto]:
        ...

    def create(self, patient_id: int, doctor_id: int, date: datetime, type_id: int, status: str) -> AppointmentDto:
        ...

    def update_status(self, appointment_id: int, status: str) -> None:
        ...
