"""
In-Memory Expense Store

The authoritative record store. Nothing survives a process restart.

The backing list is private to the instance: callers only ever see
copies, and only the four interface methods (plus clear) mutate it.
"""

from expense_tracker.log_config import get_logger
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import ExpenseStoreInterface

logger = get_logger(__name__)


class InMemoryExpenseStore(ExpenseStoreInterface):
    """List-backed implementation of ExpenseStoreInterface."""

    def __init__(self):
        self._expenses: list[Expense] = []

    @property
    def count(self) -> int:
        """Number of live records."""
        return len(self._expenses)

    async def add(self, expense: Expense) -> None:
        self._expenses.append(expense)
        logger.debug("store_add", expense_id=expense.id, count=len(self._expenses))

    async def list(self) -> list[Expense]:
        # Records are frozen, so a shallow copy is a full snapshot
        return list(self._expenses)

    async def update(self, expense: Expense) -> None:
        for index, stored in enumerate(self._expenses):
            if stored.id == expense.id:
                self._expenses[index] = expense
                logger.debug("store_update", expense_id=expense.id, position=index)
                return
        logger.debug("store_update_skipped", expense_id=expense.id)

    async def delete(self, expense_id: str) -> None:
        before = len(self._expenses)
        self._expenses = [e for e in self._expenses if e.id != expense_id]
        logger.debug(
            "store_delete",
            expense_id=expense_id,
            removed=before - len(self._expenses),
        )

    def clear(self) -> None:
        """Drop every record."""
        self._expenses = []
