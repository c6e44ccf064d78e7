# dentalcare/schemas/appointments/appointment.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

# Ids are SQLite INTEGER (signed 64-bit)
MAX_ID = 2**63 - 1

class AppointmentTypeResponse(BaseModel):
    id: int
    name: str
    durationMinutes: int

class AppointmentCreate(BaseModel):
    date: Optional[str] = None  # ISO-8601
    type: Optional[int] = Field(None, ge=0, le=MAX_ID)  # appointment type id
    doctorId: Optional[int] = Field(None, ge=0, le=MAX_ID)
    patientId: Optional[int] = Field(None, ge=0, le=MAX_ID)

class AppointmentResponse(BaseModel):
    id: int
    patientId: int
    doctorId: int
    date: str  # ISO-8601, clinic-local
    type: int
    status: str
    createdAt: Optional[datetime] = None

class AppointmentStatusUpdate(BaseModel):
    status: str = Field(min_length=1)

class AvailabilityRequest(BaseModel):
    doctorId: Optional[int] = Field(None, ge=0, le=MAX_ID)
    date: Optional[str] = None  # ISO-8601
    typeId: Optional[int] = Field(None, ge=0, le=MAX_ID)

class AvailabilityResponse(BaseModel):
    available: bool = True
