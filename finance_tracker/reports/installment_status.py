"""
Installment Status Engine

Classifies every installment of a schedule relative to a reference day:

- paid:    number < current pointer, or the whole schedule is paid in full
- current: number == current pointer
- overdue: due date strictly before the reference day AND not paid

There is no per-installment paid flag. Paying moves the pointer, and paying
the last installment sets `paid_in_full`, so the pointer plus that flag is
trusted as the single source of truth for what is paid. Due dates are
recomputed every time.

The reference day is always passed in. Nothing here reads the clock.
"""

from typing import Union

from finance_tracker.models.status import InstallmentDescriptor, InstallmentStatusReport
from finance_tracker.models.transaction import Transaction
from finance_tracker.scheduling import (
    ContractViolationError,
    DateLike,
    InstallmentPeriod,
    due_date_for_installment,
    parse_date,
    require_positive,
)


def installment_status(
    start_date: DateLike,
    current: int,
    total: int,
    period: Union[InstallmentPeriod, str],
    *,
    today: DateLike,
    paid_in_full: bool = False,
) -> InstallmentStatusReport:
    """
    Build the status report of a schedule.

    Args:
        start_date: Due date of the first installment
        current: First unpaid installment (1..total)
        total: Number of installments
        period: monthly or yearly
        today: Reference day for overdue and countdown values
        paid_in_full: Every installment, the current one included, is paid

    Raises:
        ContractViolationError: If total or current is not a positive integer,
            current is past total, or a schedule paid in full does not point
            at its last installment
    """
    require_positive("total", total)
    require_positive("current", current)
    if current > total:
        raise ContractViolationError(
            f"current must be between 1 and {total}, got {current}"
        )
    if paid_in_full and current != total:
        raise ContractViolationError(
            f"a schedule paid in full must point at installment {total}, got {current}"
        )

    reference = parse_date(today)
    descriptors = []

    for number in range(1, total + 1):
        due = due_date_for_installment(start_date, number, period)
        days_remaining = (due - reference).days
        is_paid = paid_in_full or number < current
        is_overdue = due < reference and not is_paid

        descriptors.append(
            InstallmentDescriptor(
                number=number,
                due_date=due,
                is_paid=is_paid,
                is_current=number == current,
                is_overdue=is_overdue,
                days_overdue=-days_remaining if is_overdue else None,
                days_remaining=days_remaining,
            )
        )

    overdue = [d for d in descriptors if d.is_overdue]
    paid_count = total if paid_in_full else current - 1

    return InstallmentStatusReport(
        reference_date=reference,
        installments=descriptors,
        overdue=overdue,
        max_days_overdue=max((d.days_overdue for d in overdue), default=0),
        oldest_overdue_date=overdue[0].due_date if overdue else None,
        paid_count=paid_count,
        remaining_count=total - paid_count,
        current_installment=descriptors[current - 1],
        paid_in_full=paid_in_full,
    )


def transaction_status(transaction: Transaction, *, today: DateLike) -> InstallmentStatusReport:
    """Status report of a stored transaction, using its stored pointer."""
    schedule = transaction.installments
    return installment_status(
        transaction.date,
        schedule.current,
        schedule.total,
        schedule.period,
        today=today,
        paid_in_full=schedule.paid_in_full,
    )
