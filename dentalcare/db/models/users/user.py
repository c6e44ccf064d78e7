# dentalcare/db/models/users/user.py
from typing import Optional
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime

from ..base import utc_now

class User(SQLModel, table=True):
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=100, unique=True, index=True)
    password_hash: str
    role: str = Field(max_length=10)  # "doctor" | "patient"
    name: str = Field(max_length=100)
    phone: Optional[str] = Field(max_length=20, default=None)
    date_of_birth: Optional[str] = Field(default=None)  # YYYY-MM-DD
    address: Optional[str] = Field(max_length=255, default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=False), nullable=False))
