# Routers package
from . import auth_router
from . import appointments_router
from . import appointment_types_router

__all__ = [
    "auth_router",
    "appointments_router",
    "appointment_types_router",
]
