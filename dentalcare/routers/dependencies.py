from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from ..config import settings
from ..database import get_session
from ..utils import decode_jwt_token
from ..application.ports.user_repo import UserDto
from ..application.services.auth_service import AuthService
from ..application.services.availability_service import AvailabilityService
from ..application.services.appointments_service import AppointmentsService
from ..infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.user_repository_sql import SqlUserRepository

oauth2_scheme = HTTPBearer()


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(user_repo=SqlUserRepository(session))


def get_availability_service(session: Session = Depends(get_session)) -> AvailabilityService:
    return AvailabilityService(
        repo=SqlAppointmentsRepository(session),
        timezone_name=settings.CLINIC_TIMEZONE,
        opening_hour=settings.BUSINESS_HOURS_START,
        closing_hour=settings.BUSINESS_HOURS_END,
        default_duration_minutes=settings.DEFAULT_APPOINTMENT_DURATION_MINUTES,
    )


def get_appointments_service(
    session: Session = Depends(get_session),
    availability: AvailabilityService = Depends(get_availability_service),
) -> AppointmentsService:
    return AppointmentsService(
        repo=SqlAppointmentsRepository(session),
        user_repo=SqlUserRepository(session),
        availability=availability,
        default_doctor_id=settings.DEFAULT_DOCTOR_ID,
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserDto:
    payload = decode_jwt_token(credentials.credentials)
    return auth_service.user_from_token_payload(payload)
