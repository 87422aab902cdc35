"""Shared fixtures for the finance tracker tests."""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.config import TrackerSettings
from finance_tracker.ledger import TransactionLedger
from finance_tracker.models.transaction import (
    InstallmentPeriod,
    TransactionDraft,
    TransactionType,
)
from finance_tracker.services.storage import (
    AuditRepository,
    CategoryRepository,
    InMemoryKeyValueStore,
    TransactionRepository,
)


TODAY = date(2024, 12, 27)


def make_draft(**overrides) -> TransactionDraft:
    """Debt paid in 12 monthly installments starting 2024-10-10, unless overridden."""
    fields = {
        "type": TransactionType.DEBT,
        "description": "Car financing",
        "category": "financing",
        "amount": Decimal("350.00"),
        "date": date(2024, 10, 10),
        "total_installments": 12,
        "period": InstallmentPeriod.MONTHLY,
    }
    fields.update(overrides)
    return TransactionDraft(**fields)


@pytest.fixture
def settings() -> TrackerSettings:
    return TrackerSettings(_env_file=None)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def audit_repository(store) -> AuditRepository:
    return AuditRepository(store)


@pytest.fixture
def ledger(store, audit_repository, settings) -> TransactionLedger:
    return TransactionLedger(
        repository=TransactionRepository(store),
        categories=CategoryRepository(store),
        audit_logger=AuditLogger(audit_repository),
        clock=lambda: TODAY,
        settings=settings,
    )


@pytest.fixture
def draft_factory():
    return make_draft


@pytest.fixture
def today() -> date:
    return TODAY
