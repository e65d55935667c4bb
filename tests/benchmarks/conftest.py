"""Shared fixtures for benchmark tests."""

from datetime import date, datetime, timedelta
from decimal import Decimal
import uuid

import pytest
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.models.enums import ImplementationStatus, TaskStatus
from app.models.implementation import Implementation
from app.models.task import Task
from app.models.user import User

BENCH_TODAY = date(2024, 5, 4)


@pytest.fixture(name="session")
def session_fixture():
    """
    Create and yield a SQLModel Session bound to a fresh in-memory SQLite database.

    Yields:
        Session: A session on the new database, closed when the fixture tears down.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="bench_user")
def bench_user_fixture(session: Session) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(email=f"bench_{unique}@example.com", hashed_password="hash")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="implementation_rows")
def implementation_rows_fixture() -> list[Implementation]:
    """
    Build 300 detached implementations with a spread of statuses and windows.

    Returns:
        list[Implementation]: Rows suitable for the pure aggregation functions.
    """
    statuses = list(ImplementationStatus)
    rows = []
    for i in range(300):
        start = date(2023, 1, 1) + timedelta(days=7 * i % 500)
        rows.append(
            Implementation(
                user_id=1,
                client_name=f"Client {i}",
                recurrence_value=Decimal(100 + i),
                recurrence_start_date=start if i % 3 else None,
                recurrence_end_date=start + timedelta(days=180) if i % 5 == 0 else None,
                status=statuses[i % len(statuses)],
                delivery_completed=i % 2 == 0,
                created_at=datetime(2023, 1, 1),
            )
        )
    return rows


@pytest.fixture(name="seeded_bench_user")
def seeded_bench_user_fixture(
    session: Session, bench_user: User, implementation_rows: list[Implementation]
) -> User:
    """`bench_user` owning the implementation rows and a week of tasks."""
    for row in implementation_rows:
        row.user_id = bench_user.id_user
        session.add(row)
    for i in range(200):
        session.add(
            Task(
                user_id=bench_user.id_user,
                title=f"Task {i}",
                scheduled_date=BENCH_TODAY - timedelta(days=i % 10),
                status=TaskStatus.COMPLETED if i % 2 else TaskStatus.PENDING,
            )
        )
    session.commit()
    return bench_user
