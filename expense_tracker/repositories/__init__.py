"""Repository package."""

from expense_tracker.repositories.expense_repository import (
    ExpenseRepository,
    StoreExpenseRepository,
)

__all__ = ["ExpenseRepository", "StoreExpenseRepository"]
