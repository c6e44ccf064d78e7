import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from sqlmodel import SQLModel, create_engine, Session, select
from sqlalchemy.pool import StaticPool

from .config import settings
from .db.models import User, Appointment, AppointmentType
from .utils import hash_password
from .application.services.availability_service import parse_appointment_date, clinic_timezone

logger = logging.getLogger(__name__)

DEFAULT_SEED_FILE = Path(__file__).parent / "data" / "db.json"

# Choose engine options based on database scheme
db_url = settings.DATABASE_URL
engine_kwargs: Dict[str, Any] = {}

if db_url.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty database
        engine_kwargs["poolclass"] = StaticPool
else:
    engine_kwargs.update({
        "pool_pre_ping": True,
        "pool_recycle": 300,
    })

engine = create_engine(db_url, echo=settings.DEBUG, **engine_kwargs)


def create_db_and_tables():
    SQLModel.metadata.create_all(engine)


def drop_db_and_tables():
    SQLModel.metadata.drop_all(engine)


def load_seed_data(path: Optional[str] = None) -> Dict[str, Any]:
    seed_path = Path(path) if path else DEFAULT_SEED_FILE
    with seed_path.open(encoding="utf-8") as fh:
        return json.load(fh)


def seed_database(session: Session, data: Dict[str, Any]) -> bool:
    """Insert users, appointment types and appointments from a db.json document.

    Does nothing when the users table already holds rows. Returns True when
    data was inserted.
    """
    if session.exec(select(User)).first() is not None:
        return False

    for u in data.get("users", []):
        session.add(User(
            id=u.get("id"),
            email=u["email"],
            password_hash=hash_password(u["password"]),
            role=u["role"],
            name=u["name"],
            phone=u.get("phone"),
            date_of_birth=u.get("dateOfBirth"),
            address=u.get("address"),
        ))
    for t in data.get("appointmentTypes", []):
        session.add(AppointmentType(id=t.get("id"), name=t["name"], duration_minutes=int(t["durationMinutes"])))
    # Users and types must exist before appointments reference them
    session.flush()
    for a in data.get("appointments", []):
        session.add(Appointment(
            id=a.get("id"),
            patient_id=a["patientId"],
            doctor_id=a["doctorId"],
            date=_parse_seed_date(a["date"]),
            type_id=a["type"],
            status=a.get("status", "pending"),
        ))
    session.commit()
    logger.info(
        f"Seeded {len(data.get('users', []))} users, "
        f"{len(data.get('appointmentTypes', []))} appointment types, "
        f"{len(data.get('appointments', []))} appointments"
    )
    return True


def _parse_seed_date(value: str):
    parsed = parse_appointment_date(value, clinic_timezone(settings.CLINIC_TIMEZONE))
    if parsed is None:
        raise ValueError(f"Invalid appointment date in seed data: {value!r}")
    return parsed


def get_session():
    with Session(engine) as session:
        yield session
