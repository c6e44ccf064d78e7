# dentalcare/schemas/auth/auth.py
from pydantic import BaseModel
from typing import Optional

class LoginRequest(BaseModel):
    # Optional so that a missing field yields the 400 login error, not a validation error
    email: Optional[str] = None
    password: Optional[str] = None

class UserResponse(BaseModel):
    id: int
    email: str
    role: str  # "doctor" | "patient"
    name: str
    phone: Optional[str] = None
    dateOfBirth: Optional[str] = None
    address: Optional[str] = None

class LoginResponse(BaseModel):
    token: str
    user: UserResponse
