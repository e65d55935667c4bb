import os

# Settings are read at import time by app.database.database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only-min-32-chars")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "30")
os.environ.setdefault("REFRESH_TOKEN_EXPIRE_DAYS", "7")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from app.core.security import create_access_token  # noqa: E402
from app.database.database import get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User, UserCreate  # noqa: E402
from app.services import user as user_service  # noqa: E402


@pytest.fixture(name="session")
def session_fixture():
    """
    Yield a Session bound to a fresh in-memory SQLite database.

    StaticPool keeps a single connection so every query sees the same database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """TestClient whose requests use the test session."""

    def _get_test_session():
        yield session

    app.dependency_overrides[get_session] = _get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(name="user")
def user_fixture(session: Session) -> User:
    """A signed-up user with password `secret123`."""
    return user_service.create_user(
        session,
        UserCreate(email="ana@example.com", full_name="Ana", password="secret123"),
    )


@pytest.fixture(name="other_user")
def other_user_fixture(session: Session) -> User:
    """A second user, used to check that rows never leak across owners."""
    return user_service.create_user(
        session,
        UserCreate(email="bruno@example.com", full_name="Bruno", password="secret456"),
    )


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(user: User) -> dict[str, str]:
    token = create_access_token(data={"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="other_auth_headers")
def other_auth_headers_fixture(other_user: User) -> dict[str, str]:
    token = create_access_token(data={"sub": other_user.email})
    return {"Authorization": f"Bearer {token}"}
