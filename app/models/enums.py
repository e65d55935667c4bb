from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class ProspectStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    NEGOTIATING = "negotiating"
    CONVERTED = "converted"
    LOST = "lost"


class ImplementationStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
