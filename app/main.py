from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings, parse_comma_separated_origins
from app.core.error_handlers import register_exception_handlers
from app.core.telemetry import setup_telemetry
from app.database.database import create_db_and_tables
from app.routers import auth, dashboard, implementation, prospect, task, user
from app.utils.logger import setup_logging

TAGS_METADATA = [
    {"name": "auth", "description": "Sign up, sign in and token refresh."},
    {"name": "users", "description": "The signed-in user's account."},
    {"name": "tasks", "description": "Daily and weekly planner."},
    {"name": "prospects", "description": "Sales pipeline."},
    {
        "name": "implementations",
        "description": "Client engagements, their recurring charge and billings.",
    },
    {
        "name": "dashboard",
        "description": "Counters, 7-day completions and 6-month recurring revenue.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, make sure tables exist, then start telemetry."""
    setup_logging()
    create_db_and_tables()
    setup_telemetry(app)
    yield


app = FastAPI(
    title="Gestao API",
    description="RESTful API for tasks, prospects, implementations and the business dashboard",
    version="0.1.0",
    openapi_tags=TAGS_METADATA,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        str(origin).rstrip("/")
        for origin in parse_comma_separated_origins(get_settings().BACKEND_CORS_ORIGINS)
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", include_in_schema=False)
def health_check():
    return {"status": "ok"}


for module in (auth, user, task, prospect, implementation, dashboard):
    app.include_router(module.router)
