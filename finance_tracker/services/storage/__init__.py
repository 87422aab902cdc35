"""
Storage Services Package

Provides the key-value store interface, its in-memory and JSON-file
implementations, and the typed repositories built on top of them.
"""

from finance_tracker.services.storage.interface import (
    DuplicateError,
    KeyValueStore,
    NotFoundError,
    StorageError,
)
from finance_tracker.services.storage.json_file import JsonFileKeyValueStore
from finance_tracker.services.storage.memory import InMemoryKeyValueStore
from finance_tracker.services.storage.repositories import (
    AuditRepository,
    CategoryRepository,
    TransactionRepository,
)

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # Stores
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Repositories
    "AuditRepository",
    "CategoryRepository",
    "TransactionRepository",
]
