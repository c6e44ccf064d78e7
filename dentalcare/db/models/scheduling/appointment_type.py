# dentalcare/db/models/scheduling/appointment_type.py
from typing import Optional
from sqlmodel import SQLModel, Field

class AppointmentType(SQLModel, table=True):
    __tablename__ = "appointment_types"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    duration_minutes: int = Field(gt=0)
