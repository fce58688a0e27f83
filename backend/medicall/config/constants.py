from enum import Enum

class EventName(str, Enum):
    DOCTOR_UPDATED = "server:doctor_updated"
    DOCTOR_DELETED = "server:doctor_deleted"
    PROCEDURE_UPDATED = "server:procedure_updated"
    PROCEDURE_DELETED = "server:procedure_deleted"

class StorageKey(str, Enum):
    USER = "rc_medicall_user_v5"
    SIDEBAR = "rc_medicall_sidebar_collapsed"
    DOCTORS = "rc_medicall_doctors_data"
    PROCEDURES = "rc_medicall_procedures_data"
    TIMEOFF = "rc_medicall_timeoff_data"

class ConnectionStatus(str, Enum):
    LOADING = "loading"
    ONLINE = "online"
    OFFLINE = "offline"
    # online over REST, live channel still (re)connecting
    SYNCING = "syncing"

DEFAULT_DOCTOR_CATEGORY = "MEDICO"
