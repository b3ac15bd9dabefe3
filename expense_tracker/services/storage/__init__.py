"""
Storage Services Package

Provides the abstract store interface and the in-memory implementation.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStoreInterface,
    StorageConnectionError,
    StorageError,
)
from expense_tracker.services.storage.memory import InMemoryExpenseStore

__all__ = [
    # Interface
    "ExpenseStoreInterface",
    # Exceptions
    "StorageConnectionError",
    "StorageError",
    # In-memory implementation
    "InMemoryExpenseStore",
]
