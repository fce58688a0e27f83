from .doctor import DoctorModel
from .visit import VisitModel
from .schedule import ScheduleModel
from .procedure import ProcedureModel

__all__ = ["DoctorModel", "VisitModel", "ScheduleModel", "ProcedureModel"]
