# medicall/db/models/schedule.py
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from medicall.db.base import Base

class ScheduleModel(Base):
    __tablename__ = "schedules"

    # surrogate key only; slots are replaced wholesale on every save
    id = Column(Integer, primary_key=True, autoincrement=True)
    doctor_id = Column(String, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    day = Column(String)
    time = Column(String)
    active = Column(Boolean)

    doctor = relationship("DoctorModel", back_populates="schedule")
