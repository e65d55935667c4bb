"""Dashboard router: statistics and chart series for the signed-in user."""

from datetime import date
from typing import Annotated
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.config import Settings, get_settings
from app.core.dependencies import CurrentUser
from app.database.database import get_session
from app.models.dashboard import DashboardSnapshot
from app.models.implementation import MonthlyRecurrence
from app.services import dashboard as dashboard_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=DashboardSnapshot)
def get_dashboard(
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    current_user: CurrentUser,
) -> DashboardSnapshot:
    """
    Build the dashboard for the authenticated user.

    The snapshot is recomputed on every call and never cached.

    ## Example Response

    ```json
    {
      "stats": {
        "tasks_today": 4,
        "tasks_completed_today": 1,
        "tasks_completed_week": 9,
        "prospects_total": 12,
        "prospects_converted": 3,
        "conversion_rate": 25,
        "total_recurrence": "4500.00",
        "delivery_pending_count": 2
      },
      "completion_chart": [{"day": "seg", "date": "2024-05-06", "completed": 2}, ...],
      "recurrence_trend": [{"month": "2023-12", "label": "dez", "value": "3000.00"}, ...]
    }
    ```

    Raises:
        `401 Unauthorized`: If no valid access token is provided.
        `503 DashboardUnavailableError`: If any of the underlying reads fails.
    """
    return dashboard_service.get_dashboard(
        session, ensure_id(current_user.id_user, "User"), settings.today()
    )


@router.get("/recurrence", response_model=MonthlyRecurrence)
def get_monthly_recurrence(
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    current_user: CurrentUser,
    month: date | None = None,
) -> MonthlyRecurrence:
    """
    Expected recurring revenue for one month.

    Query parameters:
        `month` (YYYY-MM-DD): any day of the target month; defaults to today.
    """
    return dashboard_service.get_monthly_recurrence(
        session, ensure_id(current_user.id_user, "User"), month or settings.today()
    )
