"""Services package."""

from expense_tracker.services.storage import (
    ExpenseStoreInterface,
    InMemoryExpenseStore,
    StorageConnectionError,
    StorageError,
)

__all__ = [
    # Storage services
    "ExpenseStoreInterface",
    "InMemoryExpenseStore",
    "StorageConnectionError",
    "StorageError",
]
