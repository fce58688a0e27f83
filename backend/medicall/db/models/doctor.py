# medicall/db/models/doctor.py
from sqlalchemy import Column, String, Text, Boolean
from sqlalchemy.orm import relationship
from medicall.db.base import Base
from medicall.config.constants import DEFAULT_DOCTOR_CATEGORY

class DoctorModel(Base):
    __tablename__ = "doctors"

    # client generated, never auto-incremented
    id = Column(String, primary_key=True)

    category   = Column(String, default=DEFAULT_DOCTOR_CATEGORY)
    executive  = Column(String)
    name       = Column(String)
    specialty  = Column(String)
    sub_specialty = Column(String)
    address    = Column(String)
    hospital   = Column(String)
    area       = Column(String)
    phone      = Column(String)
    email      = Column(String)
    floor      = Column(String)
    office_number = Column(String)
    birth_date = Column(String)
    cedula     = Column(String)
    profile    = Column(String)
    classification = Column(String)
    social_style   = Column(String)
    attitudinal_segment = Column(String)
    important_notes = Column(Text)
    is_insurance_doctor = Column(Boolean, default=False, nullable=False)

    visits = relationship(
        "VisitModel",
        back_populates="doctor",
        order_by="VisitModel.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    schedule = relationship(
        "ScheduleModel",
        back_populates="doctor",
        order_by="ScheduleModel.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # scalar columns a save may overwrite (everything but the key)
    SCALAR_FIELDS = (
        "category", "executive", "name", "specialty", "sub_specialty",
        "address", "hospital", "area", "phone", "email", "floor",
        "office_number", "birth_date", "cedula", "profile", "classification",
        "social_style", "attitudinal_segment", "important_notes",
        "is_insurance_doctor",
    )
