# Models package (re-export feature modules for stable imports)
from .users.user import User
from .scheduling.appointment import Appointment
from .scheduling.appointment_type import AppointmentType

__all__ = [
    "User",
    "Appointment",
    "AppointmentType",
]
