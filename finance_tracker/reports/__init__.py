"""Installment status, totals and filtering over transactions."""

from finance_tracker.reports.filters import TransactionFilter, filter_transactions
from finance_tracker.reports.installment_status import installment_status, transaction_status
from finance_tracker.reports.totals import sum_by_type

__all__ = [
    "TransactionFilter",
    "filter_transactions",
    "installment_status",
    "sum_by_type",
    "transaction_status",
]
