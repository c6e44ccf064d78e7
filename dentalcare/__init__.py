"""DentalCare scheduling API: login, appointment booking and availability checks."""

__version__ = "1.0.0"
