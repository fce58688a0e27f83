# medicall/db/models/procedure.py
from sqlalchemy import Column, String, Text, Float
from medicall.db.base import Base

class ProcedureModel(Base):
    __tablename__ = "procedures"

    id = Column(String, primary_key=True)
    date = Column(String)
    time = Column(String)
    hospital = Column(String)
    # display-only reference, no foreign key on purpose
    doctor_id = Column(String)
    doctor_name = Column(String)
    procedure_type = Column(String)
    payment_type = Column(String)
    cost = Column(Float)
    commission = Column(Float)
    technician = Column(String)
    notes = Column(Text)
    status = Column(String)

    SCALAR_FIELDS = (
        "date", "time", "hospital", "doctor_id", "doctor_name",
        "procedure_type", "payment_type", "cost", "commission",
        "technician", "notes", "status",
    )
