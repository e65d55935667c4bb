"""Dashboard service: per-user statistics and chart series.

Reading and aggregating are separate steps. `fetch_dashboard_inputs` runs the
owner-scoped queries. `compute_snapshot` is a pure function over what they
returned. `get_dashboard` chains the two for a signed-in user.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, Sequence, cast

from dateutil.relativedelta import relativedelta
from loguru import logger
from opentelemetry import metrics
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, func

from app.core.config import get_settings
from app.exceptions import DashboardUnavailableError
from app.models.dashboard import (
    DailyCompletionPoint,
    DashboardSnapshot,
    DashboardStats,
    MonthlyRecurrencePoint,
)
from app.models.enums import ImplementationStatus, ProspectStatus, TaskStatus
from app.models.implementation import Implementation, MonthlyRecurrence
from app.models.prospect import Prospect
from app.models.task import Task
from app.services.recurrence import (
    RecurringImplementation,
    active_for_month,
    month_bounds,
    monthly_recurrence_total,
    recurrence_amount,
)

COMPLETION_CHART_DAYS = 7
RECURRENCE_TREND_MONTHS = 6

# pt-BR abbreviations, indexed by date.weekday() and month - 1
WEEKDAY_LABELS = ("seg", "ter", "qua", "qui", "sex", "sáb", "dom")
MONTH_LABELS = (
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
)  # fmt: skip

_meter = metrics.get_meter(__name__)
read_failures = _meter.create_counter(
    "dashboard.read_failures",
    description="Dashboard batches aborted because one read failed",
)


@dataclass(frozen=True)
class RawCounts:
    """Scalar counts the store computes directly."""

    tasks_today: int = 0
    tasks_completed_today: int = 0
    tasks_completed_week: int = 0
    prospects_total: int = 0
    prospects_converted: int = 0


@dataclass(frozen=True)
class DashboardInputs:
    """Everything one dashboard pass reads from the store."""

    counts: RawCounts
    implementations: list[Implementation] = field(default_factory=list)
    task_dates: list[date] = field(default_factory=list)


def week_bounds(today: date) -> tuple[date, date]:
    """Return the Monday and Sunday of the week containing `today`."""
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def conversion_rate(converted: int, total: int) -> int:
    """
    Percentage of prospects converted, rounded half up.

    Returns 0 when there are no prospects.
    """
    if total <= 0:
        return 0
    rate = Decimal(converted) * 100 / Decimal(total)
    return int(rate.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def count_delivery_pending(implementations: Iterable[Implementation]) -> int:
    """Count active implementations whose delivery is not completed yet."""
    return sum(
        1
        for impl in implementations
        if impl.status == ImplementationStatus.ACTIVE and not impl.delivery_completed
    )


def build_completion_chart(
    task_dates: Iterable[date | str],
    today: date,
    days: int = COMPLETION_CHART_DAYS,
) -> list[DailyCompletionPoint]:
    """
    Count completed tasks per day over the trailing window ending at `today`.

    Parameters:
        task_dates: Scheduled dates of completed tasks; ISO strings are accepted. Dates outside the window are ignored.
        today (date): Last day of the window (inclusive).
        days (int): Window length.

    Returns:
        list[DailyCompletionPoint]: One point per day, oldest first, zero-filled.
    """
    counts = Counter(
        date.fromisoformat(d) if isinstance(d, str) else d for d in task_dates
    )

    result = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        result.append(
            DailyCompletionPoint(
                day=WEEKDAY_LABELS[day.weekday()],
                date=day.isoformat(),
                completed=counts[day],
            )
        )
    return result


def build_recurrence_trend(
    implementations: Sequence[RecurringImplementation],
    today: date,
    months: int = RECURRENCE_TREND_MONTHS,
) -> list[MonthlyRecurrencePoint]:
    """
    Expected recurring revenue for each of the last `months` months.

    Every implementation is re-tested against every month; with a few hundred
    implementations at most this stays cheap.

    Returns:
        list[MonthlyRecurrencePoint]: One point per month, oldest first, ending with the month containing `today`.
    """
    current_month, _ = month_bounds(today)
    result = []
    for back in range(months - 1, -1, -1):
        month = cast(date, current_month - relativedelta(months=back))
        result.append(
            MonthlyRecurrencePoint(
                month=month.strftime("%Y-%m"),
                label=MONTH_LABELS[month.month - 1],
                value=monthly_recurrence_total(implementations, month),
            )
        )
    return result


def compute_snapshot(
    implementations: Sequence[Implementation],
    task_dates_last_7_days: Iterable[date | str],
    raw_counts: RawCounts,
    today: date,
) -> DashboardSnapshot:
    """
    Build the dashboard snapshot from already-fetched rows.

    Pure: the inputs are only read, and the same inputs always give the same snapshot.

    Parameters:
        implementations: All implementations of the user, unfiltered.
        task_dates_last_7_days: Scheduled dates of tasks completed in the trailing week.
        raw_counts (RawCounts): Counts fetched directly from the store.
        today (date): Reference date for "now".

    Returns:
        DashboardSnapshot: Stats, the 7-day completion series and the 6-month recurrence trend.
    """
    stats = DashboardStats(
        tasks_today=raw_counts.tasks_today,
        tasks_completed_today=raw_counts.tasks_completed_today,
        tasks_completed_week=raw_counts.tasks_completed_week,
        prospects_total=raw_counts.prospects_total,
        prospects_converted=raw_counts.prospects_converted,
        conversion_rate=conversion_rate(
            raw_counts.prospects_converted, raw_counts.prospects_total
        ),
        total_recurrence=monthly_recurrence_total(implementations, today),
        delivery_pending_count=count_delivery_pending(implementations),
    )
    return DashboardSnapshot(
        stats=stats,
        completion_chart=build_completion_chart(task_dates_last_7_days, today),
        recurrence_trend=build_recurrence_trend(implementations, today),
    )


def _count(session: Session, model: type, *conditions) -> int:
    statement = select(func.count()).select_from(model).where(*conditions)
    return session.exec(statement).one()


def fetch_dashboard_inputs(
    session: Session, user_id: int, today: date
) -> DashboardInputs:
    """
    Run every read the dashboard needs for one user.

    The reads are independent of each other. If any of them fails the whole
    batch is discarded: nothing partial is returned.

    Parameters:
        session: Database session.
        user_id: Owner whose rows are read; every query filters on it.
        today: Reference date used for the day, week and month windows.

    Returns:
        DashboardInputs: Counts, the implementation rows and completed-task dates.

    Raises:
        DashboardUnavailableError: If any read fails.
    """
    week_start, week_end = week_bounds(today)
    month_start, _ = month_bounds(today)
    window_start = today - timedelta(days=COMPLETION_CHART_DAYS - 1)

    reads: dict[str, Callable[[], object]] = {
        "tasks_today": lambda: _count(
            session, Task, Task.user_id == user_id, Task.scheduled_date == today
        ),
        "tasks_completed_today": lambda: _count(
            session,
            Task,
            Task.user_id == user_id,
            Task.scheduled_date == today,
            Task.status == TaskStatus.COMPLETED,
        ),
        "tasks_completed_week": lambda: _count(
            session,
            Task,
            Task.user_id == user_id,
            Task.status == TaskStatus.COMPLETED,
            Task.scheduled_date >= week_start,
            Task.scheduled_date <= week_end,
        ),
        "prospects_total": lambda: _count(
            session,
            Prospect,
            Prospect.user_id == user_id,
            Prospect.created_at >= datetime.combine(month_start, time.min),
        ),
        "prospects_converted": lambda: _count(
            session,
            Prospect,
            Prospect.user_id == user_id,
            Prospect.status == ProspectStatus.CONVERTED,
        ),
        "implementations": lambda: list(
            session.exec(
                select(Implementation).where(Implementation.user_id == user_id)
            ).all()
        ),
        "task_dates": lambda: list(
            session.exec(
                select(Task.scheduled_date)
                .where(
                    Task.user_id == user_id,
                    Task.status == TaskStatus.COMPLETED,
                    Task.scheduled_date >= window_start,
                    Task.scheduled_date <= today,
                )
                .order_by(Task.scheduled_date)  # type: ignore
            ).all()
        ),
    }

    results: dict[str, object] = {}
    for name, read in reads.items():
        try:
            results[name] = read()
        except SQLAlchemyError as e:
            logger.error(f"Dashboard read '{name}' failed for user {user_id}: {e}")
            read_failures.add(1, {"query": name})
            raise DashboardUnavailableError(query=name) from e

    counts = RawCounts(
        tasks_today=cast(int, results["tasks_today"]),
        tasks_completed_today=cast(int, results["tasks_completed_today"]),
        tasks_completed_week=cast(int, results["tasks_completed_week"]),
        prospects_total=cast(int, results["prospects_total"]),
        prospects_converted=cast(int, results["prospects_converted"]),
    )
    return DashboardInputs(
        counts=counts,
        implementations=cast(list[Implementation], results["implementations"]),
        task_dates=cast(list[date], results["task_dates"]),
    )


def get_dashboard(
    session: Session, user_id: int, today: date | None = None
) -> DashboardSnapshot:
    """
    Fetch and aggregate the dashboard for a signed-in user.

    Parameters:
        session: Database session.
        user_id: The authenticated user's id.
        today: Reference date; defaults to the current date in the configured timezone.

    Returns:
        DashboardSnapshot: A freshly computed snapshot.

    Raises:
        DashboardUnavailableError: If any underlying read fails.
    """
    today = today or get_settings().today()
    inputs = fetch_dashboard_inputs(session, user_id, today)
    snapshot = compute_snapshot(
        inputs.implementations, inputs.task_dates, inputs.counts, today
    )
    logger.debug(
        f"Dashboard built for user {user_id}: "
        f"{len(inputs.implementations)} implementations, {len(inputs.task_dates)} completed tasks"
    )
    return snapshot


def get_monthly_recurrence(
    session: Session, user_id: int, month_date: date
) -> MonthlyRecurrence:
    """
    Report the recurring revenue expected for one month and which implementations make it up.

    Parameters:
        session: Database session.
        user_id: Owner whose implementations are considered.
        month_date: Any day inside the target month.

    Returns:
        MonthlyRecurrence: Month key, total and ids of the eligible implementations.
    """
    try:
        implementations = list(
            session.exec(
                select(Implementation)
                .where(Implementation.user_id == user_id)
                .order_by(Implementation.id_implementation)  # type: ignore
            ).all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Recurrence read failed for user {user_id}: {e}")
        read_failures.add(1, {"query": "implementations"})
        raise DashboardUnavailableError(query="implementations") from e

    eligible = cast(list[Implementation], active_for_month(implementations, month_date))
    return MonthlyRecurrence(
        month=month_date.strftime("%Y-%m"),
        total=sum((recurrence_amount(impl) for impl in eligible), Decimal(0)),
        implementation_ids=[
            impl.id_implementation
            for impl in eligible
            if impl.id_implementation is not None
        ],
    )
