"""Engine and per-request session."""

from sqlmodel import Session, SQLModel, create_engine

from app.core.config import get_settings
import app.models  # noqa: F401  (registers every table on SQLModel.metadata)

_database_url = get_settings().DATABASE_URL

# SQLite (local dev, tests) is reached from FastAPI's threadpool, so the
# same-thread check is off there; Postgres needs no connect args
engine = create_engine(
    _database_url,
    pool_pre_ping=True,
    connect_args=(
        {"check_same_thread": False} if _database_url.startswith("sqlite") else {}
    ),
)


def create_db_and_tables():
    """Create missing tables; Alembic owns schema changes after that."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Yield one Session per request, closed when the response is sent."""
    with Session(engine) as session:
        yield session
