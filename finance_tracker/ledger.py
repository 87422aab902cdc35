"""
Transaction Ledger

This module ties the engine, storage and audit log together and defines the
state transitions of a transaction:

1. Record  (draft -> schedule derived -> stored)
2. Edit    (full replacement, schedule derived again only if it changed)
3. Pay     (pointer advanced by one, or the schedule marked paid in full)
4. Delete

plus the read-side views built from the status engine and the totals:
summary, per-transaction status, overdue list and upcoming due dates.

The installment pointer is written only by `Installments.for_schedule` (record,
and edits that change the schedule) and by `advance_current_installment`
(pay). "Today" comes from an injectable clock.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional, Union
from uuid import UUID

import structlog

from finance_tracker.audit import AuditLogger, create_correlation_id
from finance_tracker.config import TrackerSettings, get_settings
from finance_tracker.models.category import Category
from finance_tracker.models.status import InstallmentDescriptor, InstallmentStatusReport
from finance_tracker.models.transaction import (
    Installments,
    Transaction,
    TransactionDraft,
    TransactionTotals,
    TransactionType,
)
from finance_tracker.reports import (
    TransactionFilter,
    filter_transactions,
    sum_by_type,
    transaction_status,
)
from finance_tracker.scheduling import (
    DateLike,
    InstallmentsExhaustedError,
    format_date,
    parse_date,
)
from finance_tracker.services.storage import (
    AuditRepository,
    CategoryRepository,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    NotFoundError,
    StorageError,
    TransactionRepository,
)


logger = structlog.get_logger(__name__)

Clock = Callable[[], Union[date, str]]


def advance_current_installment(transaction: Transaction) -> Transaction:
    """
    Mark the current installment as paid.

    The pointer moves to the next installment. Paying the last one leaves the
    pointer in place and marks the schedule paid in full. Only the installment
    under the pointer can be paid; paying a later one out of order is not
    supported. The input is left untouched.

    Raises:
        InstallmentsExhaustedError: If the schedule is already paid in full
    """
    schedule = transaction.installments
    if schedule.paid_in_full:
        raise InstallmentsExhaustedError(
            f"Transaction {transaction.id} is already paid in full "
            f"({schedule.total}/{schedule.total})"
        )

    if schedule.current == schedule.total:
        update = {"paid_in_full": True}
    else:
        update = {"current": schedule.current + 1}

    return transaction.model_copy(
        update={
            "installments": schedule.model_copy(update=update),
            "updated_at": datetime.now(timezone.utc),
        }
    )


class TransactionLedger:
    """
    Record, edit, pay and delete transactions, and report on them.

    Every write is audited. Storage failures are audited and re-raised.
    """

    def __init__(
        self,
        repository: TransactionRepository,
        categories: Optional[CategoryRepository] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Clock] = None,
        settings: Optional[TrackerSettings] = None,
    ):
        self._repository = repository
        self._categories = categories
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock or date.today
        self._settings = settings or get_settings()

    def today(self) -> date:
        return parse_date(self._clock())

    def display_date(self, value: DateLike) -> str:
        """Long-form date in the configured locale, e.g. "10 de outubro de 2024"."""
        return format_date(value, self._settings.locale)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def _build(
        self,
        draft: TransactionDraft,
        installments: Optional[Installments] = None,
        **identity,
    ) -> Transaction:
        if installments is None:
            installments = Installments.for_schedule(
                draft.date,
                draft.total_installments,
                draft.period,
                today=self.today(),
            )
        return Transaction(
            type=draft.type,
            description=draft.description,
            category=draft.category,
            amount=draft.amount,
            date=draft.date,
            installments=installments,
            payment_method=draft.payment_method,
            **identity,
        )

    def _write(self, operation: str, action: Callable[[], Transaction], entity_id: str,
               correlation_id: UUID) -> Transaction:
        try:
            return action()
        except NotFoundError:
            raise
        except StorageError as e:
            self._audit_logger.log_save_failed(
                operation=operation,
                error_message=str(e),
                entity_id=entity_id,
                correlation_id=correlation_id,
            )
            raise

    def record(self, draft: TransactionDraft, correlation_id: Optional[UUID] = None) -> Transaction:
        """Store a new transaction built from a draft."""
        correlation_id = correlation_id or create_correlation_id()
        transaction = self._build(draft)

        self._write(
            "record",
            lambda: self._repository.add(transaction),
            str(transaction.id),
            correlation_id,
        )
        self._audit_logger.log_transaction_created(transaction, correlation_id=correlation_id)
        return transaction

    def edit(
        self,
        transaction_id: UUID,
        draft: TransactionDraft,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Replace a transaction with a new draft, keeping its id and creation time.

        The installment pointer is derived again only when the start date, the
        number of installments or the period changed. Otherwise the stored
        payments are kept.
        """
        correlation_id = correlation_id or create_correlation_id()
        existing = self.get(transaction_id)
        schedule = existing.installments
        unchanged = (
            draft.date == existing.date
            and draft.total_installments == schedule.total
            and draft.period == schedule.period
        )
        replacement = self._build(
            draft,
            installments=schedule if unchanged else None,
            id=existing.id,
            created_at=existing.created_at,
        )

        self._write(
            "edit",
            lambda: self._repository.replace(replacement),
            str(transaction_id),
            correlation_id,
        )
        self._audit_logger.log_transaction_updated(existing, replacement, correlation_id=correlation_id)
        return replacement

    def pay_installment(self, transaction_id: UUID, correlation_id: Optional[UUID] = None) -> Transaction:
        """Pay the current installment of a transaction."""
        correlation_id = correlation_id or create_correlation_id()
        existing = self.get(transaction_id)
        paid_number = existing.installments.current
        updated = advance_current_installment(existing)

        self._write(
            "pay_installment",
            lambda: self._repository.replace(updated),
            str(transaction_id),
            correlation_id,
        )
        self._audit_logger.log_installment_paid(updated, paid_number, correlation_id=correlation_id)
        return updated

    def delete(self, transaction_id: UUID, correlation_id: Optional[UUID] = None) -> Transaction:
        """Delete a transaction and return what was removed."""
        correlation_id = correlation_id or create_correlation_id()
        removed = self._write(
            "delete",
            lambda: self._repository.remove(transaction_id),
            str(transaction_id),
            correlation_id,
        )
        self._audit_logger.log_transaction_deleted(transaction_id, correlation_id=correlation_id)
        return removed

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, transaction_id: UUID) -> Transaction:
        """
        Raises:
            NotFoundError: If no transaction has that id
        """
        transaction = self._repository.get(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        return transaction

    def transactions(self, criteria: Optional[TransactionFilter] = None) -> list[Transaction]:
        return filter_transactions(self._repository.list_all(), criteria)

    def summary(self, criteria: Optional[TransactionFilter] = None) -> TransactionTotals:
        return sum_by_type(self.transactions(criteria))

    def status(self, transaction_id: UUID) -> InstallmentStatusReport:
        return transaction_status(self.get(transaction_id), today=self.today())

    def overdue(self) -> list[tuple[Transaction, InstallmentStatusReport]]:
        """
        Transactions with overdue installments, most overdue first.

        Income and daily purchases never appear here.
        """
        today = self.today()
        results = []

        for transaction in self._repository.list_all():
            if not transaction.type.tracks_due_date:
                continue
            report = transaction_status(transaction, today=today)
            if report.has_overdue:
                results.append((transaction, report))

        results.sort(key=lambda pair: pair[1].max_days_overdue, reverse=True)
        logger.debug("overdue_computed", count=len(results), today=today.isoformat())
        return results

    def upcoming(self, within_days: Optional[int] = None) -> list[tuple[Transaction, InstallmentDescriptor]]:
        """
        Current installments due between today and `within_days` ahead, soonest first.

        Defaults to the configured `due_soon_days`. Schedules paid in full are
        skipped.
        """
        window = self._settings.due_soon_days if within_days is None else within_days
        today = self.today()
        results = []

        for transaction in self._repository.list_all():
            if not transaction.type.tracks_due_date or transaction.installments.paid_in_full:
                continue
            current = transaction_status(transaction, today=today).current_installment
            if 0 <= current.days_remaining <= window:
                results.append((transaction, current))

        results.sort(key=lambda pair: pair[1].days_remaining)
        return results

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def _category_repository(self) -> CategoryRepository:
        if self._categories is None:
            raise StorageError("No category repository configured")
        return self._categories

    def categories(self, category_type: Optional[TransactionType] = None) -> list[Category]:
        repository = self._category_repository()
        if category_type is None:
            return repository.all_categories()
        return repository.by_type(category_type)

    def add_category(
        self,
        label: str,
        category_type: TransactionType,
        description: Optional[str] = None,
    ) -> Category:
        category = self._category_repository().add_custom(label, category_type, description)
        self._audit_logger.log_category_added(category.id, category.label, category.type.value)
        return category

    def remove_category(self, category_id: str) -> bool:
        removed = self._category_repository().remove_custom(category_id)
        if removed:
            self._audit_logger.log_category_removed(category_id)
        return removed


def create_ledger(
    settings: Optional[TrackerSettings] = None,
    store: Optional[KeyValueStore] = None,
    clock: Optional[Clock] = None,
) -> TransactionLedger:
    """
    Factory function wiring a ledger from settings.

    Args:
        settings: Defaults to get_settings()
        store: Overrides the store chosen from settings.storage_path
        clock: Source of "today"; defaults to the local date

    Returns:
        A ledger whose transactions, categories and audit log share one store
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format="%(message)s")

    if store is None:
        if settings.storage_path:
            store = JsonFileKeyValueStore(settings.storage_path)
        else:
            logger.warning("storage_not_configured", detail="using in-memory store")
            store = InMemoryKeyValueStore()

    return TransactionLedger(
        repository=TransactionRepository(store, settings.transactions_key),
        categories=CategoryRepository(store, settings.categories_key),
        audit_logger=AuditLogger(AuditRepository(store, settings.audit_key)),
        clock=clock,
        settings=settings,
    )
