from typing import List
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlmodel import Session

from ..database import get_session
from ..application.ports.appointments_repo import AppointmentTypeDto
from ..infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from ..schemas import AppointmentTypeResponse
from ..schemas.appointments.appointment import MAX_ID

router = APIRouter(prefix="/appointmentTypes", tags=["Appointment Types"])


def to_type_response(t: AppointmentTypeDto) -> AppointmentTypeResponse:
    return AppointmentTypeResponse(id=t.id, name=t.name, durationMinutes=t.duration_minutes)


@router.get("", response_model=List[AppointmentTypeResponse])
def list_appointment_types(session: Session = Depends(get_session)):
    return [to_type_response(t) for t in SqlAppointmentsRepository(session).list_types()]


@router.get("/{type_id}", response_model=AppointmentTypeResponse)
def get_appointment_type(type_id: int = Path(..., ge=0, le=MAX_ID), session: Session = Depends(get_session)):
    t = SqlAppointmentsRepository(session).get_type(type_id)
    if not t:
        raise HTTPException(status_code=404, detail="Appointment type not found")
    return to_type_response(t)
