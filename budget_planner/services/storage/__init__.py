"""
Storage Services Package

Provides the key-value storage interface, its backends, and the adapter
that maps a Ledger onto storage keys.
"""

from budget_planner.services.storage.interface import (
    KeyValueStorageInterface,
    StorageConnectionError,
    StorageError,
)
from budget_planner.services.storage.json_file import JsonFileKeyValueStorage
from budget_planner.services.storage.memory import InMemoryKeyValueStorage
from budget_planner.services.storage.ledger_persistence import (
    BUDGET_GOAL_KEY,
    EXPENSES_KEY,
    INCOME_KEY,
    CorruptValueError,
    LedgerPersistence,
)

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "CorruptValueError",
    "StorageConnectionError",
    "StorageError",
    # Backends
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    # Ledger adapter
    "BUDGET_GOAL_KEY",
    "EXPENSES_KEY",
    "INCOME_KEY",
    "LedgerPersistence",
]
