"""
Tests for the transaction ledger.

Integration tests over the in-memory store, with "today" pinned to
2024-12-27 by the ledger fixture.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.config import TrackerSettings
from finance_tracker.ledger import TransactionLedger, advance_current_installment, create_ledger
from finance_tracker.models import AuditEventType, InstallmentPeriod, TransactionType
from finance_tracker.reports import TransactionFilter
from finance_tracker.scheduling import InstallmentsExhaustedError
from finance_tracker.services.storage import (
    AuditRepository,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    NotFoundError,
    StorageError,
    TransactionRepository,
)


class FailingStore(InMemoryKeyValueStore):
    """Store whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise StorageError("disk full")


def _event_types(audit_repository: AuditRepository) -> list[AuditEventType]:
    return [e.event_type for e in reversed(audit_repository.recent_events())]


class TestRecord:
    """Tests for recording transactions."""

    def test_record_derives_schedule(self, ledger, draft_factory):
        transaction = ledger.record(draft_factory())

        assert transaction.installments.total == 12
        assert transaction.installments.current == 3
        assert transaction.due_date == date(2025, 9, 10)
        assert ledger.get(transaction.id) == transaction

    def test_record_future_schedule_starts_at_one(self, ledger, draft_factory):
        transaction = ledger.record(draft_factory(date=date(2025, 2, 1)))
        assert transaction.installments.current == 1

    def test_record_single_payment(self, ledger, draft_factory):
        transaction = ledger.record(draft_factory(
            type=TransactionType.INCOME,
            description="Salary",
            category="salary",
            amount=Decimal("5000.00"),
            date=date(2024, 12, 5),
            total_installments=1,
        ))
        assert transaction.installments.current == 1
        assert transaction.due_date == date(2024, 12, 5)

    def test_record_is_audited(self, ledger, draft_factory, audit_repository):
        transaction = ledger.record(draft_factory())

        event = audit_repository.recent_events()[0]
        assert event.event_type == AuditEventType.TRANSACTION_CREATED
        assert event.entity_id == str(transaction.id)

    def test_storage_failure_is_audited_and_raised(self, settings, draft_factory):
        audit_repository = AuditRepository(InMemoryKeyValueStore())
        ledger = TransactionLedger(
            repository=TransactionRepository(FailingStore()),
            audit_logger=AuditLogger(audit_repository),
            clock=lambda: date(2024, 12, 27),
            settings=settings,
        )

        with pytest.raises(StorageError):
            ledger.record(draft_factory())

        assert _event_types(audit_repository) == [AuditEventType.SAVE_FAILED]


class TestEdit:
    """Tests for editing transactions."""

    def test_edit_replaces_and_keeps_identity(self, ledger, draft_factory):
        original = ledger.record(draft_factory())
        edited = ledger.edit(original.id, draft_factory(total_installments=24, description="Car loan"))

        assert edited.id == original.id
        assert edited.created_at == original.created_at
        assert edited.description == "Car loan"
        assert edited.due_date == date(2026, 9, 10)
        assert ledger.get(original.id) == edited
        assert len(ledger.transactions()) == 1

    def test_edit_derives_pointer_again(self, ledger, draft_factory):
        original = ledger.record(draft_factory())
        ledger.pay_installment(original.id)

        edited = ledger.edit(original.id, draft_factory(date=date(2024, 11, 10)))
        assert edited.installments.current == 2

    def test_edit_keeps_payments_when_schedule_unchanged(self, ledger, draft_factory):
        original = ledger.record(draft_factory())
        ledger.pay_installment(original.id)
        ledger.pay_installment(original.id)

        edited = ledger.edit(original.id, draft_factory(description="Car financing (bank)"))

        assert edited.installments.current == 5
        assert ledger.get(original.id).installments.current == 5

    def test_edit_keeps_paid_in_full(self, ledger, draft_factory):
        original = ledger.record(draft_factory(total_installments=1, date=date(2024, 12, 1)))
        ledger.pay_installment(original.id)

        edited = ledger.edit(original.id, draft_factory(
            total_installments=1, date=date(2024, 12, 1), amount=Decimal("360.00"),
        ))
        assert edited.installments.paid_in_full is True

    def test_edit_period_change_derives_pointer_again(self, ledger, draft_factory):
        original = ledger.record(draft_factory())
        ledger.pay_installment(original.id)

        edited = ledger.edit(original.id, draft_factory(period=InstallmentPeriod.YEARLY))
        assert edited.installments.current == 1
        assert edited.installments.period == InstallmentPeriod.YEARLY

    def test_edit_audit_lists_changed_fields(self, ledger, draft_factory, audit_repository):
        original = ledger.record(draft_factory())
        ledger.edit(original.id, draft_factory(amount=Decimal("400.00")))

        event = audit_repository.recent_events()[0]
        assert event.event_type == AuditEventType.TRANSACTION_UPDATED
        assert event.details["changed_fields"] == ["amount"]

    def test_edit_unknown(self, ledger, draft_factory):
        with pytest.raises(NotFoundError):
            ledger.edit(uuid4(), draft_factory())


class TestPayInstallment:
    """Tests for paying installments."""

    def test_pay_advances_pointer(self, ledger, draft_factory, audit_repository):
        transaction = ledger.record(draft_factory())
        paid = ledger.pay_installment(transaction.id)

        assert paid.installments.current == 4
        assert ledger.get(transaction.id).installments.current == 4
        assert ledger.status(transaction.id).has_overdue is False

        event = audit_repository.recent_events()[0]
        assert event.event_type == AuditEventType.INSTALLMENT_PAID
        assert event.details == {"paid_number": 3, "total": 12}

    def test_pay_single_payment_bill_settles_it(self, ledger, draft_factory, audit_repository):
        bill = ledger.record(draft_factory(
            type=TransactionType.BILL, description="Power bill", category="electricity",
            amount=Decimal("180.00"), date=date(2024, 12, 1), total_installments=1,
        ))
        assert [t.id for t, _ in ledger.overdue()] == [bill.id]

        paid = ledger.pay_installment(bill.id)

        assert paid.installments.paid_in_full is True
        assert paid.installments.current == 1
        assert ledger.overdue() == []

        report = ledger.status(bill.id)
        assert report.has_overdue is False
        assert report.paid_count == 1
        assert report.remaining_count == 0
        assert report.next_due_date is None

        event = audit_repository.recent_events()[0]
        assert event.details == {"paid_number": 1, "total": 1}

    def test_pay_final_installment_of_plan(self, ledger, draft_factory):
        debt = ledger.record(draft_factory(total_installments=3))
        assert debt.installments.current == 3
        assert ledger.status(debt.id).max_days_overdue == 17

        paid = ledger.pay_installment(debt.id)

        assert paid.installments.current == 3
        assert paid.installments.paid_in_full is True
        assert ledger.status(debt.id).max_days_overdue == 0
        assert ledger.overdue() == []

    def test_pay_after_paid_in_full_rejected(self, ledger, draft_factory):
        transaction = ledger.record(draft_factory(total_installments=2, date=date(2024, 12, 1)))
        ledger.pay_installment(transaction.id)
        ledger.pay_installment(transaction.id)

        with pytest.raises(InstallmentsExhaustedError):
            ledger.pay_installment(transaction.id)
        stored = ledger.get(transaction.id)
        assert stored.installments.current == 2
        assert stored.installments.paid_in_full is True

    def test_paid_in_full_not_upcoming(self, ledger, draft_factory):
        bill = ledger.record(draft_factory(
            type=TransactionType.BILL, description="Water bill", category="water",
            amount=Decimal("90.00"), date=date(2024, 12, 30), total_installments=1,
        ))
        assert [t.id for t, _ in ledger.upcoming()] == [bill.id]

        ledger.pay_installment(bill.id)
        assert ledger.upcoming() == []

    def test_pay_unknown(self, ledger):
        with pytest.raises(NotFoundError):
            ledger.pay_installment(uuid4())

    def test_advance_leaves_input_untouched(self, ledger, draft_factory):
        transaction = ledger.record(draft_factory())
        advanced = advance_current_installment(transaction)

        assert transaction.installments.current == 3
        assert advanced.installments.current == 4
        assert advanced.due_date == transaction.due_date
        assert advanced.updated_at >= transaction.updated_at

    def test_advance_single_payment_marks_paid_in_full(self, ledger, draft_factory):
        transaction = ledger.record(draft_factory(total_installments=1))

        settled = advance_current_installment(transaction)
        assert settled.installments.paid_in_full is True
        assert transaction.installments.paid_in_full is False

        with pytest.raises(InstallmentsExhaustedError):
            advance_current_installment(settled)


class TestDelete:
    """Tests for deleting transactions."""

    def test_delete(self, ledger, draft_factory, audit_repository):
        transaction = ledger.record(draft_factory())

        assert ledger.delete(transaction.id) == transaction
        with pytest.raises(NotFoundError):
            ledger.get(transaction.id)
        assert audit_repository.recent_events()[0].event_type == AuditEventType.TRANSACTION_DELETED

    def test_delete_unknown_is_not_a_save_failure(self, ledger, audit_repository):
        with pytest.raises(NotFoundError):
            ledger.delete(uuid4())
        assert audit_repository.recent_events() == []


class TestViews:
    """Tests for summary, status, overdue and upcoming views."""

    @pytest.fixture
    def populated(self, ledger, draft_factory):
        records = {
            "salary": draft_factory(
                type=TransactionType.INCOME, description="Salary", category="salary",
                amount=Decimal("5000.00"), date=date(2024, 1, 1), total_installments=1,
            ),
            "groceries": draft_factory(
                type=TransactionType.DAILY_EXPENSE, description="Groceries", category="supermarket",
                amount=Decimal("250.00"), date=date(2024, 11, 2), total_installments=1,
            ),
            "car": draft_factory(),
            "power": draft_factory(
                type=TransactionType.BILL, description="Power bill", category="electricity",
                amount=Decimal("180.00"), date=date(2024, 12, 1), total_installments=1,
            ),
            "water": draft_factory(
                type=TransactionType.BILL, description="Water bill", category="water",
                amount=Decimal("90.00"), date=date(2024, 12, 30), total_installments=1,
            ),
            "course": draft_factory(
                type=TransactionType.EXPENSE, description="Course", category="education",
                amount=Decimal("400.00"), date=date(2025, 1, 20), total_installments=3,
            ),
        }
        return {name: ledger.record(draft) for name, draft in records.items()}

    def test_summary(self, ledger, populated):
        totals = ledger.summary()
        assert totals.income == Decimal("5000.00")
        assert totals.expenses == Decimal("920.00")
        assert totals.debts == Decimal("350.00")
        assert totals.total == Decimal("3730.00")

    def test_filtered_summary(self, ledger, populated):
        totals = ledger.summary(TransactionFilter(type=TransactionType.BILL))
        assert totals.expenses == Decimal("270.00")
        assert totals.income == Decimal("0")

    def test_status(self, ledger, populated):
        report = ledger.status(populated["car"].id)
        assert report.reference_date == date(2024, 12, 27)
        assert report.paid_count == 2
        assert [d.number for d in report.overdue] == [3]

    def test_overdue_most_overdue_first(self, ledger, populated):
        overdue = ledger.overdue()

        assert [t.description for t, _ in overdue] == ["Power bill", "Car financing"]
        assert [r.max_days_overdue for _, r in overdue] == [26, 17]

    def test_overdue_excludes_untracked_types(self, ledger, populated):
        descriptions = {t.description for t, _ in ledger.overdue()}
        assert "Salary" not in descriptions
        assert "Groceries" not in descriptions

    def test_upcoming_uses_configured_window(self, ledger, populated):
        upcoming = ledger.upcoming()
        assert [(t.description, d.days_remaining) for t, d in upcoming] == [("Water bill", 3)]

    def test_upcoming_custom_window(self, ledger, populated):
        upcoming = ledger.upcoming(within_days=30)
        assert [(t.description, d.days_remaining) for t, d in upcoming] == [
            ("Water bill", 3),
            ("Course", 24),
        ]

    def test_transactions_filtered(self, ledger, populated):
        found = ledger.transactions(TransactionFilter(search="bill"))
        assert [t.description for t in found] == ["Power bill", "Water bill"]


class TestCategories:
    """Tests for category management through the ledger."""

    def test_add_and_remove_custom_category(self, ledger, audit_repository):
        category = ledger.add_category("Pets", TransactionType.EXPENSE)

        assert category in ledger.categories(TransactionType.EXPENSE)
        assert ledger.remove_category(category.id) is True
        assert ledger.remove_category(category.id) is False

        assert _event_types(audit_repository) == [
            AuditEventType.CATEGORY_ADDED,
            AuditEventType.CATEGORY_REMOVED,
        ]

    def test_all_categories(self, ledger):
        ids = {c.id for c in ledger.categories()}
        assert {"salary", "electricity", "bank_loans"} <= ids

    def test_without_category_repository(self, settings):
        ledger = TransactionLedger(
            repository=TransactionRepository(InMemoryKeyValueStore()),
            settings=settings,
        )
        with pytest.raises(StorageError):
            ledger.categories()


class TestCreateLedger:
    """Tests for the create_ledger factory."""

    def test_in_memory_by_default(self, settings, draft_factory):
        ledger = create_ledger(settings, clock=lambda: "2024-12-27")
        transaction = ledger.record(draft_factory())
        assert ledger.today() == date(2024, 12, 27)
        assert ledger.get(transaction.id).installments.current == 3

    def test_json_file_storage(self, tmp_path, draft_factory):
        settings = TrackerSettings(_env_file=None, storage_path=str(tmp_path / "finance.json"))

        transaction = create_ledger(settings, clock=lambda: date(2024, 12, 27)).record(draft_factory())
        reopened = create_ledger(settings, clock=lambda: date(2024, 12, 27))

        assert reopened.get(transaction.id) == transaction
        assert isinstance(JsonFileKeyValueStore(settings.storage_path).get("audit_log"), str)

    def test_environment_configuration(self, monkeypatch, draft_factory):
        monkeypatch.setenv("FINANCE_TRACKER_DUE_SOON_DAYS", "30")
        monkeypatch.setenv("FINANCE_TRACKER_TRANSACTIONS_KEY", "tx")
        settings = TrackerSettings(_env_file=None)
        store = InMemoryKeyValueStore()

        ledger = create_ledger(settings, store=store, clock=lambda: date(2024, 12, 27))
        ledger.record(draft_factory(date=date(2025, 1, 20), total_installments=3))

        assert store.get("tx") is not None
        assert len(ledger.upcoming()) == 1


class TestDisplayDate:
    """Tests for locale-aware display dates."""

    def test_default_locale(self, ledger):
        assert ledger.display_date("2024-10-10") == "10 de outubro de 2024"

    def test_configured_locale(self, draft_factory):
        settings = TrackerSettings(_env_file=None, locale="en-US")
        ledger = create_ledger(settings, clock=lambda: date(2024, 12, 27))
        transaction = ledger.record(draft_factory())

        assert ledger.display_date(transaction.due_date) == "September 10, 2025"
