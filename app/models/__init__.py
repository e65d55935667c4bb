"""SQLModel table models, imported here so metadata is complete for migrations."""

from app.models.user import User
from app.models.task import Task
from app.models.prospect import Prospect
from app.models.implementation import Implementation
from app.models.billing import ImplementationBilling

__all__ = [
    "User",
    "Task",
    "Prospect",
    "Implementation",
    "ImplementationBilling",
]
