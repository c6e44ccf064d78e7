# dentalcare/schemas/common/common.py
from pydantic import BaseModel
from typing import List, Optional

class ErrorResponse(BaseModel):
    error: str

class ConflictEntry(BaseModel):
    date: str
    type: int

class ConflictResponse(ErrorResponse):
    conflicts: List[ConflictEntry] = []

class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    timestamp: str
    database_error: Optional[str] = None
