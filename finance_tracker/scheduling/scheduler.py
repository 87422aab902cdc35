"""
Installment Scheduler

Pure functions over (start date, installment count, period).

Due dates are computed with calendar-field arithmetic, always from the start
date (never chained from the previous installment). When the target month is
shorter than the start day, the day is clamped to the last day of that month:

    2024-01-31 monthly -> 2024-01-31, 2024-02-29, 2024-03-31, 2024-04-30, ...
    2024-02-29 yearly  -> 2024-02-29, 2025-02-28, 2026-02-28, 2027-02-28, 2028-02-29
"""

import calendar
from datetime import date
from enum import Enum
from typing import Union

from finance_tracker.scheduling.dates import DateLike, parse_date
from finance_tracker.scheduling.errors import ContractViolationError


class InstallmentPeriod(str, Enum):
    """Recurrence unit between two installments."""
    MONTHLY = "monthly"
    YEARLY = "yearly"


PeriodLike = Union[InstallmentPeriod, str]


def coerce_period(period: PeriodLike) -> InstallmentPeriod:
    """Accept an InstallmentPeriod or its string value."""
    try:
        return InstallmentPeriod(period)
    except ValueError:
        raise ContractViolationError(
            f"Unknown installment period: {period!r}. "
            f"Expected one of {[p.value for p in InstallmentPeriod]}"
        ) from None


def require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ContractViolationError(f"{name} must be >= 1, got {value}")


def add_months(d: date, months: int) -> date:
    """Add calendar months to a date, clamping the day to the target month's length."""
    year = d.year + (d.month - 1 + months) // 12
    month = (d.month - 1 + months) % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def due_date_for_installment(
    start_date: DateLike,
    installment_number: int,
    period: PeriodLike,
) -> date:
    """
    Due date of the Nth installment (1-indexed).

    Args:
        start_date: Date of the first installment
        installment_number: Which installment, starting at 1
        period: monthly or yearly

    Returns:
        The due date; installment 1 is the start date itself.

    Raises:
        ContractViolationError: If installment_number < 1 or the period is unknown
        InvalidDateError: If start_date is not a valid date
    """
    require_positive("installment_number", installment_number)
    start = parse_date(start_date)
    step = installment_number - 1

    if coerce_period(period) is InstallmentPeriod.YEARLY:
        return add_months(start, step * 12)
    return add_months(start, step)


def final_due_date(start_date: DateLike, total: int, period: PeriodLike) -> date:
    """Due date of the last installment; this is a transaction's due date."""
    require_positive("total", total)
    return due_date_for_installment(start_date, total, period)


def current_installment_number(
    start_date: DateLike,
    due_date: DateLike,
    period: PeriodLike,
) -> int:
    """
    Installment number whose due date falls in the same month (or year) as due_date.

    Only year and month are compared, so the result is stable under the day
    clamping done by `due_date_for_installment`. The result is not clamped to
    the schedule's total; a due date before the start gives a value below 1.
    """
    start = parse_date(start_date)
    due = parse_date(due_date)

    if coerce_period(period) is InstallmentPeriod.YEARLY:
        return (due.year - start.year) + 1
    return (due.year - start.year) * 12 + (due.month - start.month) + 1


def active_installment_number(
    start_date: DateLike,
    total: int,
    period: PeriodLike,
    today: DateLike,
) -> int:
    """
    Installment active on `today`, kept inside 1..total.

    A schedule that has not started yet is on installment 1; one whose last
    due date is behind `today` stays on its last installment.
    """
    require_positive("total", total)
    number = current_installment_number(start_date, today, period)
    return min(max(number, 1), total)
