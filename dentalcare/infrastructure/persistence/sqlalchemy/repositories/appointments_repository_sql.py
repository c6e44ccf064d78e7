from datetime import datetime
from typing import List, Optional
from sqlmodel import Session, select

from .....db.models import Appointment, AppointmentType
from .....application.ports.appointments_repo import (
    AppointmentsRepository,
    AppointmentDto,
    AppointmentTypeDto,
)


class SqlAppointmentsRepository(AppointmentsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _appt_to_dto(self, a: Appointment) -> AppointmentDto:
        return AppointmentDto(
            id=a.id,
            patient_id=a.patient_id,
            doctor_id=a.doctor_id,
            date=a.date,
            type_id=a.type_id,
            status=a.status,
            created_at=a.created_at,
        )

    def _type_to_dto(self, t: AppointmentType) -> AppointmentTypeDto:
        return AppointmentTypeDto(id=t.id, name=t.name, duration_minutes=t.duration_minutes)

    def list_types(self) -> List[AppointmentTypeDto]:
        rows = self.session.exec(select(AppointmentType).order_by(AppointmentType.id)).all()
        return [self._type_to_dto(t) for t in rows]

    def get_type(self, type_id: int) -> Optional[AppointmentTypeDto]:
        t = self.session.get(AppointmentType, type_id)
        return self._type_to_dto(t) if t else None

    def list_for_doctor(self, doctor_id: int) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.status != "cancelled")
            .order_by(Appointment.date)
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def list_for_user(self, user_id: int, role: str, status: Optional[str] = None) -> List[AppointmentDto]:
        query = select(Appointment)
        if role == "doctor":
            query = query.where(Appointment.doctor_id == user_id)
        else:
            query = query.where(Appointment.patient_id == user_id)
        if status:
            query = query.where(Appointment.status == status)
        rows = self.session.exec(query.order_by(Appointment.date.desc())).all()
        return [self._appt_to_dto(r) for r in rows]

    def get_by_id(self, appointment_id: int) -> Optional[AppointmentDto]:
        a = self.session.get(Appointment, appointment_id)
        return self._appt_to_dto(a) if a else None

    def create(self, patient_id: int, doctor_id: int, date: datetime, type_id: int, status: str) -> AppointmentDto:
        appt = Appointment(
            patient_id=patient_id,
            doctor_id=doctor_id,
            date=date,
            type_id=type_id,
            status=status,
        )
        self.session.add(appt)
        self.session.commit()
        self.session.refresh(appt)
        return self._appt_to_dto(appt)

    def update_status(self, appointment_id: int, status: str) -> None:
        a = self.session.get(Appointment, appointment_id)
        if not a:
            return
        a.status = status
        self.session.add(a)
        self.session.commit()
