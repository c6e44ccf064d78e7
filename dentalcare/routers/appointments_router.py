from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Path, Query
import logging

from ..application.ports.appointments_repo import AppointmentDto
from ..application.ports.user_repo import UserDto
from ..application.services.appointments_service import AppointmentsService
from ..application.services.availability_service import (
    AvailabilityService,
    Rejected,
    rejection_to_exception,
)
from ..schemas.appointments.appointment import MAX_ID
from ..schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AvailabilityRequest,
    AvailabilityResponse,
    ConflictResponse,
    ErrorResponse,
)
from .dependencies import get_appointments_service, get_availability_service, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def to_appointment_response(a: AppointmentDto) -> AppointmentResponse:
    return AppointmentResponse(
        id=a.id,
        patientId=a.patient_id,
        doctorId=a.doctor_id,
        date=a.date.isoformat(),
        type=a.type_id,
        status=a.status,
        createdAt=a.created_at,
    )


@router.post(
    "/availability",
    response_model=AvailabilityResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ConflictResponse}},
)
def check_availability(
    request: AvailabilityRequest,
    availability: AvailabilityService = Depends(get_availability_service),
):
    result = availability.check(request.doctorId, request.date, request.typeId)
    if isinstance(result, Rejected):
        raise rejection_to_exception(result)
    return AvailabilityResponse(available=True)


@router.post(
    "",
    response_model=AppointmentResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ConflictResponse}},
)
def book_appointment(
    appointment_data: AppointmentCreate,
    current_user: UserDto = Depends(get_current_user),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appt = appt_service.book(
            current_user,
            date=appointment_data.date,
            type_id=appointment_data.type,
            doctor_id=appointment_data.doctorId,
            patient_id=appointment_data.patientId,
        )
        return to_appointment_response(appt)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error booking appointment: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to book appointment")


@router.get("", response_model=List[AppointmentResponse])
def get_user_appointments(
    status: Optional[str] = Query(None),
    current_user: UserDto = Depends(get_current_user),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return [to_appointment_response(a) for a in appt_service.list_for_user(current_user, status)]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointments: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve appointments")


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: int = Path(..., ge=0, le=MAX_ID),
    current_user: UserDto = Depends(get_current_user),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    return to_appointment_response(appt_service.get_for_user(current_user, appointment_id))


@router.put("/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(
    appointment_id: int = Path(..., ge=0, le=MAX_ID),
    current_user: UserDto = Depends(get_current_user),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return to_appointment_response(appt_service.cancel(current_user, appointment_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error cancelling appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to cancel appointment")


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
    update: AppointmentStatusUpdate,
    appointment_id: int = Path(..., ge=0, le=MAX_ID),
    current_user: UserDto = Depends(get_current_user),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return to_appointment_response(appt_service.update_status(current_user, appointment_id, update.status))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating appointment {appointment_id} status: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update appointment status")
