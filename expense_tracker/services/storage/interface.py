"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep today's in-memory store
2. Swap in a durable backend (SQLite, a web API) later
3. Keep the repository and everything above it unaware of the difference

Every method is a coroutine even though the in-memory store never
suspends, so a disk or network backend fits the same contract.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import Expense


class ExpenseStoreInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Any storage implementation must implement these methods.
    Update and delete of an unknown id are silent no-ops, never errors.
    """

    @abstractmethod
    async def add(self, expense: Expense) -> None:
        """
        Append an expense.

        No duplicate-id check is made; the caller guarantees uniqueness.

        Raises:
            StorageError: If the backend fails
        """
        pass

    @abstractmethod
    async def list(self) -> list[Expense]:
        """
        Return all expenses in insertion order.

        Returns:
            An independent list; mutating it never affects the store
        """
        pass

    @abstractmethod
    async def update(self, expense: Expense) -> None:
        """
        Replace the stored expense with the same id, keeping its position.

        Does nothing if no stored expense has that id.
        """
        pass

    @abstractmethod
    async def delete(self, expense_id: str) -> None:
        """
        Remove every stored expense with this id.

        Does nothing if none match.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageConnectionError(StorageError):
    """Could not reach the storage backend."""
    pass
