"""
Data Models Package

This package contains all Pydantic models used by the finance tracker.
All data flowing through the ledger must conform to these schemas.
"""

from finance_tracker.models.transaction import (
    CardPayment,
    Installments,
    InstallmentPeriod,
    PaymentMethod,
    PixPayment,
    Transaction,
    TransactionDraft,
    TransactionTotals,
    TransactionType,
    payment_recipient,
)
from finance_tracker.models.status import (
    InstallmentDescriptor,
    InstallmentStatusReport,
)
from finance_tracker.models.category import (
    DEFAULT_CATEGORIES,
    Category,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "CardPayment",
    "Installments",
    "InstallmentPeriod",
    "PaymentMethod",
    "PixPayment",
    "Transaction",
    "TransactionDraft",
    "TransactionTotals",
    "TransactionType",
    "payment_recipient",
    # Status models
    "InstallmentDescriptor",
    "InstallmentStatusReport",
    # Categories
    "DEFAULT_CATEGORIES",
    "Category",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
