"""Use case package."""

from expense_tracker.usecases.base import UseCase
from expense_tracker.usecases.expense_usecases import (
    AddExpenseUseCase,
    DeleteExpenseUseCase,
    GetExpensesUseCase,
    UpdateExpenseUseCase,
)

__all__ = [
    "AddExpenseUseCase",
    "DeleteExpenseUseCase",
    "GetExpensesUseCase",
    "UpdateExpenseUseCase",
    "UseCase",
]
