# dentalcare/db/models/scheduling/appointment.py
from typing import Optional
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime

from ..base import utc_now

class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: Optional[int] = Field(default=None, primary_key=True)
    patient_id: int = Field(foreign_key="users.id", index=True)
    doctor_id: int = Field(foreign_key="users.id", index=True)
    # Clinic-local wall time, stored naive
    date: datetime = Field(sa_column=Column(DateTime(timezone=False), index=True, nullable=False))
    # No foreign key: a dangling type falls back to the default duration
    type_id: int
    status: str = Field(default="pending")
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=False), nullable=False))
