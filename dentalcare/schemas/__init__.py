# Schemas package (re-export feature modules for stable imports)
from .auth.auth import LoginRequest, LoginResponse, UserResponse
from .appointments.appointment import (
    AppointmentTypeResponse,
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AvailabilityRequest,
    AvailabilityResponse,
)
from .common.common import ErrorResponse, ConflictEntry, ConflictResponse, HealthResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "UserResponse",
    "AppointmentTypeResponse",
    "AppointmentCreate",
    "AppointmentResponse",
    "AppointmentStatusUpdate",
    "AvailabilityRequest",
    "AvailabilityResponse",
    "ErrorResponse",
    "ConflictEntry",
    "ConflictResponse",
    "HealthResponse",
]
