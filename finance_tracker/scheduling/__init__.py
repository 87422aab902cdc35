"""
Installment Scheduling Package

Date normalization and the installment due-date arithmetic. Every function
here is pure and never reads the system clock except `local_date()` called
without an argument.
"""

from finance_tracker.scheduling.dates import (
    DEFAULT_LOCALE,
    DateLike,
    format_date,
    local_date,
    parse_date,
    parse_display_date,
)
from finance_tracker.scheduling.errors import (
    ContractViolationError,
    InstallmentsExhaustedError,
    InvalidDateError,
)
from finance_tracker.scheduling.scheduler import (
    InstallmentPeriod,
    active_installment_number,
    add_months,
    require_positive,
    coerce_period,
    current_installment_number,
    due_date_for_installment,
    final_due_date,
)

__all__ = [
    # Dates
    "DEFAULT_LOCALE",
    "DateLike",
    "format_date",
    "local_date",
    "parse_date",
    "parse_display_date",
    # Errors
    "ContractViolationError",
    "InstallmentsExhaustedError",
    "InvalidDateError",
    # Scheduler
    "InstallmentPeriod",
    "active_installment_number",
    "add_months",
    "require_positive",
    "coerce_period",
    "current_installment_number",
    "due_date_for_installment",
    "final_due_date",
]
