"""Recurring-revenue eligibility for implementations.

An implementation bills for a month when it is active, has a positive
recurring amount, and its recurrence window
``[start, end or open-ended]`` overlaps ``[month_start, month_end]``.
The start defaults to the day the implementation was created.
"""

from calendar import monthrange
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Protocol

from app.models.enums import ImplementationStatus


class RecurringImplementation(Protocol):
    """The fields of an implementation the eligibility test reads."""

    recurrence_value: Decimal | float | int | str | None
    recurrence_start_date: date | datetime | None
    recurrence_end_date: date | datetime | None
    status: ImplementationStatus | str
    created_at: datetime | date


def month_bounds(day: date) -> tuple[date, date]:
    """
    Return the first and last day of the month containing `day`.

    Parameters:
        day (date): Any date inside the target month.

    Returns:
        tuple[date, date]: (month_start, month_end), both inclusive.
    """
    last_day = monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last_day)


def _as_day(value: date | datetime) -> date:
    # Drops the time of day; datetime is a subclass of date so test it first
    if isinstance(value, datetime):
        return value.date()
    return value


def recurrence_amount(implementation: RecurringImplementation) -> Decimal:
    """
    Return the recurring amount as a Decimal.

    Missing values and values that do not parse as a number count as zero.
    """
    value = implementation.recurrence_value
    if value is None:
        return Decimal(0)
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not amount.is_finite():
        return Decimal(0)
    return amount


def is_active_for_month(
    implementation: RecurringImplementation, month_date: date
) -> bool:
    """
    Decide whether an implementation's recurring charge counts toward a month.

    Parameters:
        implementation: The implementation to test. It is never modified.
        month_date (date): Any day inside the target month.

    Returns:
        bool: True if the amount is positive, the status is active, the effective
        start is not after the month's last day, and the end date (if any) is
        not before the month's first day.
    """
    if recurrence_amount(implementation) <= 0:
        return False
    if implementation.status != ImplementationStatus.ACTIVE:
        return False

    month_start, month_end = month_bounds(_as_day(month_date))

    start = implementation.recurrence_start_date or implementation.created_at
    if _as_day(start) > month_end:
        return False

    if implementation.recurrence_end_date is not None:
        if _as_day(implementation.recurrence_end_date) < month_start:
            return False

    return True


def active_for_month(
    implementations: Iterable[RecurringImplementation], month_date: date
) -> list[RecurringImplementation]:
    """Return the implementations eligible for the month containing `month_date`, in input order."""
    return [impl for impl in implementations if is_active_for_month(impl, month_date)]


def monthly_recurrence_total(
    implementations: Iterable[RecurringImplementation], month_date: date
) -> Decimal:
    """
    Sum the recurring amounts of every implementation eligible for a month.

    Parameters:
        implementations: Implementations to consider; ineligible ones contribute nothing.
        month_date (date): Any day inside the target month.

    Returns:
        Decimal: The expected recurring revenue for that month.
    """
    return sum(
        (recurrence_amount(impl) for impl in active_for_month(implementations, month_date)),
        Decimal(0),
    )
