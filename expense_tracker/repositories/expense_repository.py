"""
Expense Repository

DESIGN DECISION: The use cases depend on ExpenseRepository, never on a
concrete store. StoreExpenseRepository is a pure pass-through today; it
is the place where mapping to a different storage technology would go.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage import ExpenseStoreInterface


class ExpenseRepository(ABC):
    """Contract the use cases program against."""

    @abstractmethod
    async def add_expense(self, expense: Expense) -> None:
        pass

    @abstractmethod
    async def get_expenses(self) -> list[Expense]:
        pass

    @abstractmethod
    async def update_expense(self, expense: Expense) -> None:
        pass

    @abstractmethod
    async def delete_expense(self, expense_id: str) -> None:
        pass


class StoreExpenseRepository(ExpenseRepository):
    """Forwards every call verbatim to an ExpenseStoreInterface."""

    def __init__(self, store: ExpenseStoreInterface):
        self._store = store

    async def add_expense(self, expense: Expense) -> None:
        await self._store.add(expense)

    async def get_expenses(self) -> list[Expense]:
        return await self._store.list()

    async def update_expense(self, expense: Expense) -> None:
        await self._store.update(expense)

    async def delete_expense(self, expense_id: str) -> None:
        await self._store.delete(expense_id)
