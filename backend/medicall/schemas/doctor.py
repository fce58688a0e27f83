# medicall/schemas/doctor.py
from typing import List, Optional

from medicall.config.constants import DEFAULT_DOCTOR_CATEGORY
from medicall.schemas.shared import CamelModel


class Visit(CamelModel):
    id: str
    date: Optional[str] = None
    time: Optional[str] = None
    note: Optional[str] = None
    objective: Optional[str] = None
    follow_up: Optional[str] = None
    outcome: Optional[str] = None
    status: Optional[str] = None


class ScheduleSlot(CamelModel):
    day: Optional[str] = None
    time: Optional[str] = None
    active: Optional[bool] = None


class DoctorFields(CamelModel):
    id: str
    category: Optional[str] = DEFAULT_DOCTOR_CATEGORY
    executive: Optional[str] = None
    name: Optional[str] = None
    specialty: Optional[str] = None
    sub_specialty: Optional[str] = None
    address: Optional[str] = None
    hospital: Optional[str] = None
    area: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    floor: Optional[str] = None
    office_number: Optional[str] = None
    birth_date: Optional[str] = None
    cedula: Optional[str] = None
    profile: Optional[str] = None
    classification: Optional[str] = None
    social_style: Optional[str] = None
    attitudinal_segment: Optional[str] = None
    important_notes: Optional[str] = None
    is_insurance_doctor: bool = False


class DoctorIn(DoctorFields):
    # None (or absent) leaves stored children untouched, [] clears them
    visits: Optional[List[Visit]] = None
    schedule: Optional[List[ScheduleSlot]] = None


class Doctor(DoctorFields):
    """Hydrated doctor as returned by the API, broadcast, and held by clients."""
    visits: List[Visit] = []
    schedule: List[ScheduleSlot] = []


class DeleteVisitResponse(CamelModel):
    success: bool
    result: Doctor
