"""Dashboard statistics and chart models."""

from decimal import Decimal
from sqlmodel import SQLModel


class DashboardStats(SQLModel):
    """Headline counters shown on the dashboard cards."""

    tasks_today: int
    tasks_completed_today: int
    tasks_completed_week: int
    prospects_total: int
    prospects_converted: int
    conversion_rate: int  # Percentage, rounded
    total_recurrence: Decimal
    delivery_pending_count: int


class DailyCompletionPoint(SQLModel):
    """Completed tasks for one day of the trailing week."""

    day: str  # Abbreviated weekday label, e.g. "seg"
    date: str  # Format: "YYYY-MM-DD"
    completed: int


class MonthlyRecurrencePoint(SQLModel):
    """Expected recurring revenue for one month of the trend chart."""

    month: str  # Format: "YYYY-MM"
    label: str  # Abbreviated month label, e.g. "jan"
    value: Decimal


class DashboardSnapshot(SQLModel):
    stats: DashboardStats
    completion_chart: list[DailyCompletionPoint]
    recurrence_trend: list[MonthlyRecurrencePoint]
