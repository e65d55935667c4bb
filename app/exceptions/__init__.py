"""
Domain exceptions.

Services raise these; `app/core/error_handlers.py` turns them into HTTP
responses, so nothing below the routers imports FastAPI.
"""

from app.exceptions.base import AppException
from app.exceptions.crud import (
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
)
from app.exceptions.auth import (
    AuthenticationError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
)
from app.exceptions.dashboard import DashboardUnavailableError

__all__ = [
    "AppException",
    "NotFoundError",
    "AlreadyExistsError",
    "ValidationError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "DashboardUnavailableError",
]
