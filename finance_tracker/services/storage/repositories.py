"""
Repositories

Typed access to the JSON documents kept in a KeyValueStore:

- TransactionRepository: the transaction list
- CategoryRepository:    user-defined categories (on top of the defaults)
- AuditRepository:       the append-only audit log

Every read validates the stored document against the models. A document that
no longer validates is reported as a StorageError, never skipped.
"""

from typing import Optional
from uuid import UUID, uuid4

from pydantic import TypeAdapter, ValidationError

from finance_tracker.models.audit import AuditEvent
from finance_tracker.models.category import DEFAULT_CATEGORIES, Category
from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.services.storage.interface import (
    DuplicateError,
    KeyValueStore,
    NotFoundError,
    StorageError,
)


class _JsonListDocument:
    """A JSON array of models stored under one key."""

    def __init__(self, store: KeyValueStore, key: str, adapter: TypeAdapter):
        self._store = store
        self._key = key
        self._adapter = adapter

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list:
        raw = self._store.get(self._key)
        if raw is None:
            return []
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            raise StorageError(f"Corrupt document under '{self._key}': {e}") from e

    def save(self, items: list) -> None:
        self._store.set(self._key, self._adapter.dump_json(items).decode("utf-8"))


class TransactionRepository:
    """Transactions stored as one JSON array."""

    def __init__(self, store: KeyValueStore, key: str = "transactions"):
        self._document = _JsonListDocument(store, key, TypeAdapter(list[Transaction]))

    def list_all(self) -> list[Transaction]:
        return self._document.load()

    def get(self, transaction_id: UUID) -> Optional[Transaction]:
        for transaction in self.list_all():
            if transaction.id == transaction_id:
                return transaction
        return None

    def add(self, transaction: Transaction) -> Transaction:
        """
        Append a new transaction.

        Raises:
            DuplicateError: If a transaction with the same id exists
        """
        transactions = self.list_all()
        if any(t.id == transaction.id for t in transactions):
            raise DuplicateError(f"Transaction {transaction.id} already exists")
        transactions.append(transaction)
        self._document.save(transactions)
        return transaction

    def replace(self, transaction: Transaction) -> Transaction:
        """
        Replace the stored transaction with the same id, keeping its position.

        Raises:
            NotFoundError: If no transaction has that id
        """
        transactions = self.list_all()
        for index, existing in enumerate(transactions):
            if existing.id == transaction.id:
                transactions[index] = transaction
                self._document.save(transactions)
                return transaction
        raise NotFoundError(f"Transaction {transaction.id} not found")

    def remove(self, transaction_id: UUID) -> Transaction:
        """
        Delete a transaction and return it.

        Raises:
            NotFoundError: If no transaction has that id
        """
        transactions = self.list_all()
        for index, existing in enumerate(transactions):
            if existing.id == transaction_id:
                del transactions[index]
                self._document.save(transactions)
                return existing
        raise NotFoundError(f"Transaction {transaction_id} not found")


class CategoryRepository:
    """
    Default categories plus the user's custom ones.

    Only custom categories are persisted; the defaults are always listed
    first.
    """

    def __init__(self, store: KeyValueStore, key: str = "custom_categories"):
        self._document = _JsonListDocument(store, key, TypeAdapter(list[Category]))

    def custom_categories(self) -> list[Category]:
        return self._document.load()

    def all_categories(self) -> list[Category]:
        return [*DEFAULT_CATEGORIES, *self.custom_categories()]

    def by_type(self, category_type: TransactionType) -> list[Category]:
        return [c for c in self.all_categories() if c.type == category_type]

    def get(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.all_categories() if c.id == category_id), None)

    def exists(self, category_id: str) -> bool:
        return self.get(category_id) is not None

    def default_for_type(self, category_type: TransactionType) -> Optional[Category]:
        """First category of the type, or None if the type has none."""
        categories = self.by_type(category_type)
        return categories[0] if categories else None

    def add_custom(
        self,
        label: str,
        category_type: TransactionType,
        description: Optional[str] = None,
    ) -> Category:
        category = Category(
            id=f"custom_{uuid4().hex[:12]}",
            label=label,
            type=category_type,
            description=description,
            is_custom=True,
        )
        categories = self.custom_categories()
        categories.append(category)
        self._document.save(categories)
        return category

    def remove_custom(self, category_id: str) -> bool:
        """
        Remove a custom category. Default categories cannot be removed.

        Returns:
            True if a custom category was removed
        """
        categories = self.custom_categories()
        remaining = [c for c in categories if c.id != category_id]
        if len(remaining) == len(categories):
            return False
        self._document.save(remaining)
        return True


class AuditRepository:
    """Append-only audit log."""

    def __init__(self, store: KeyValueStore, key: str = "audit_log"):
        self._document = _JsonListDocument(store, key, TypeAdapter(list[AuditEvent]))

    def append_event(self, event: AuditEvent) -> bool:
        events = self._document.load()
        events.append(event)
        self._document.save(events)
        return True

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = self._document.load()
        return list(reversed(events))[:limit]

    def events_for_entity(self, entity_id: str) -> list[AuditEvent]:
        """Events about one entity, in chronological order."""
        return [e for e in self._document.load() if e.entity_id == entity_id]
