"""
Appointment availability checks.

A candidate booking is accepted when it starts inside business hours on a
weekday, names a known appointment type, and its interval does not overlap any
non-cancelled appointment of the same doctor.

Intervals are half-open, [start, start + duration), so back-to-back slots do
not conflict. All datetimes handled here are naive clinic-local wall times;
``parse_appointment_date`` converts request input into that form.

The check is read-only and takes no lock. A caller that checks and then
creates can double-book when two requests for one slot interleave.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from ..ports.appointments_repo import AppointmentsRepository, AppointmentDto, AppointmentTypeDto
from ...exceptions import APIException

logger = logging.getLogger(__name__)

CANCELLED = "cancelled"


class RejectionKind(str, Enum):
    MISSING_FIELDS = "missing_fields"
    INVALID_DATE = "invalid_date"
    OUTSIDE_BUSINESS_HOURS = "outside_business_hours"
    WEEKEND = "weekend"
    INVALID_TYPE = "invalid_type"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class BookingRequest:
    doctor_id: Optional[int]
    start: Optional[datetime]
    type_id: Optional[int]


@dataclass(frozen=True)
class Conflict:
    appointment_id: int
    date: datetime
    type_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "type": self.type_id}


@dataclass(frozen=True)
class Accepted:
    available: bool = True


@dataclass(frozen=True)
class Rejected:
    kind: RejectionKind
    message: str
    conflicts: Tuple[Conflict, ...] = ()
    available: bool = False


AvailabilityResult = Union[Accepted, Rejected]


def _format_clock(t: time) -> str:
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour}:{t.minute:02d} {suffix}"


def clinic_timezone(name: Optional[str]) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def parse_appointment_date(value: Union[str, datetime, None], tz: tzinfo) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into naive clinic-local time.

    Aware input (including a trailing ``Z``) is converted to ``tz``; naive
    input is taken to be clinic-local already. Returns None when the value
    cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed


def check_availability(
    request: BookingRequest,
    existing: Iterable[AppointmentDto],
    appointment_types: Iterable[AppointmentTypeDto],
    *,
    opening: time = time(9, 0),
    closing: time = time(15, 0),
    default_duration_minutes: int = 30,
) -> AvailabilityResult:
    """Decide whether ``request`` can be booked against ``existing``.

    Rejections are returned in a fixed order: missing fields, business hours,
    weekend, unknown type, then overlaps. ``existing`` may hold other doctors'
    appointments; only those of ``request.doctor_id`` are compared.
    """
    if request.doctor_id is None or request.start is None or request.type_id is None:
        return Rejected(
            RejectionKind.MISSING_FIELDS,
            "Missing required fields: doctor, date and appointment type are required",
        )

    start = request.start
    if not (opening <= start.time() < closing):
        return Rejected(
            RejectionKind.OUTSIDE_BUSINESS_HOURS,
            f"Appointments are only available between {_format_clock(opening)} and {_format_clock(closing)}",
        )

    if start.weekday() >= 5:
        return Rejected(
            RejectionKind.WEEKEND,
            "Appointments are only available Monday through Friday",
        )

    durations = {t.id: t.duration_minutes for t in appointment_types}
    if request.type_id not in durations:
        return Rejected(RejectionKind.INVALID_TYPE, "Invalid appointment type")

    end = start + timedelta(minutes=durations[request.type_id])
    conflicts: List[Conflict] = []
    for appt in existing:
        if appt.doctor_id != request.doctor_id or appt.status == CANCELLED:
            continue
        appt_start = appt.date
        appt_end = appt_start + timedelta(minutes=durations.get(appt.type_id, default_duration_minutes))
        if start < appt_end and end > appt_start:
            conflicts.append(Conflict(appointment_id=appt.id, date=appt.date, type_id=appt.type_id))

    if conflicts:
        return Rejected(
            RejectionKind.CONFLICT,
            "The selected time slot conflicts with an existing appointment",
            tuple(conflicts),
        )
    return Accepted()


@dataclass
class AvailabilityService:
    repo: AppointmentsRepository
    timezone_name: str = "UTC"
    opening_hour: int = 9
    closing_hour: int = 15
    default_duration_minutes: int = 30

    def _evaluate(self, doctor_id: Optional[int], date_value: Union[str, datetime, None], type_id: Optional[int]) -> Tuple[Optional[datetime], AvailabilityResult]:
        start = None
        if date_value:
            start = parse_appointment_date(date_value, clinic_timezone(self.timezone_name))
            if start is None and doctor_id is not None and type_id is not None:
                return None, Rejected(RejectionKind.INVALID_DATE, "Invalid date format. Use ISO-8601")

        existing = self.repo.list_for_doctor(doctor_id) if doctor_id is not None else []
        result = check_availability(
            BookingRequest(doctor_id=doctor_id, start=start, type_id=type_id),
            existing,
            self.repo.list_types(),
            opening=time(self.opening_hour, 0),
            closing=time(self.closing_hour, 0),
            default_duration_minutes=self.default_duration_minutes,
        )
        if isinstance(result, Rejected):
            logger.info(f"Availability rejected for doctor {doctor_id} at {date_value}: {result.kind.value}")
        return start, result

    def check(self, doctor_id: Optional[int], date_value: Union[str, datetime, None], type_id: Optional[int]) -> AvailabilityResult:
        _, result = self._evaluate(doctor_id, date_value, type_id)
        return result

    def ensure_available(self, doctor_id: Optional[int], date_value: Union[str, datetime, None], type_id: Optional[int]) -> datetime:
        """Return the parsed clinic-local start, or raise 400/409."""
        start, result = self._evaluate(doctor_id, date_value, type_id)
        if isinstance(result, Rejected):
            raise rejection_to_exception(result)
        return start


def rejection_to_exception(result: Rejected) -> APIException:
    if result.kind == RejectionKind.CONFLICT:
        return APIException(
            status_code=409,
            detail=result.message,
            extra={"conflicts": [c.to_dict() for c in result.conflicts]},
        )
    return APIException(status_code=400, detail=result.message)
