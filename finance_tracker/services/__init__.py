"""Services package."""

from finance_tracker.services.storage import (
    AuditRepository,
    CategoryRepository,
    DuplicateError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    NotFoundError,
    StorageError,
    TransactionRepository,
)

__all__ = [
    "AuditRepository",
    "CategoryRepository",
    "DuplicateError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "NotFoundError",
    "StorageError",
    "TransactionRepository",
]
