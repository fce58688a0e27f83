# medicall/schemas/procedure.py
from typing import Optional

from medicall.schemas.shared import CamelModel


class Procedure(CamelModel):
    id: str
    date: Optional[str] = None
    time: Optional[str] = None
    hospital: Optional[str] = None
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    procedure_type: Optional[str] = None
    payment_type: Optional[str] = None
    cost: Optional[float] = None
    commission: Optional[float] = None
    technician: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class DeleteProcedureResponse(CamelModel):
    success: bool
    result: int
