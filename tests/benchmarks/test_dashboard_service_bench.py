"""Performance benchmarks for dashboard and recurrence computations."""

from datetime import date

from pytest_codspeed import BenchmarkFixture
from sqlmodel import Session

from app.models.implementation import Implementation
from app.models.user import User
from app.services import dashboard as dashboard_service
from app.services import recurrence as recurrence_service
from app.services.dashboard import RawCounts

BENCH_TODAY = date(2024, 5, 4)


def test_monthly_recurrence_total_performance(
    benchmark: BenchmarkFixture,
    implementation_rows: list[Implementation],
):
    """Benchmark the eligibility scan for a single month."""

    @benchmark
    def total():
        return recurrence_service.monthly_recurrence_total(
            implementation_rows, BENCH_TODAY
        )


def test_compute_snapshot_performance(
    benchmark: BenchmarkFixture,
    implementation_rows: list[Implementation],
):
    """Benchmark the pure aggregation over a few hundred implementations."""
    task_dates = [BENCH_TODAY.isoformat()] * 50
    counts = RawCounts(tasks_today=10, prospects_total=40, prospects_converted=7)

    @benchmark
    def snapshot():
        return dashboard_service.compute_snapshot(
            implementation_rows, task_dates, counts, BENCH_TODAY
        )


def test_get_dashboard_performance(
    benchmark: BenchmarkFixture,
    session: Session,
    seeded_bench_user: User,
):
    """Benchmark the full read and aggregate path."""

    @benchmark
    def get_dashboard():
        session.expire_all()
        return dashboard_service.get_dashboard(
            session, seeded_bench_user.id_user, BENCH_TODAY
        )
