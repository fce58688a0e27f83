# medicall/db/models/visit.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from medicall.db.base import Base

class VisitModel(Base):
    __tablename__ = "visits"

    id = Column(String, primary_key=True)
    doctor_id = Column(String, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False, index=True)
    # index within the submitted list; reads come back in this order
    position = Column(Integer, nullable=False, default=0)

    date = Column(String)
    time = Column(String)
    note = Column(Text)
    objective = Column(String)
    follow_up = Column(String)
    outcome = Column(String)
    status = Column(String)

    doctor = relationship("DoctorModel", back_populates="visits")
