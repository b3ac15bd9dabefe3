"""
Expense Use Cases

One handler per operation. Each forwards to exactly one repository
method and returns its result unchanged.

Add and update optionally take an ExpenseValidator. With one attached,
an invalid record is rejected before the repository is called; without
one the handlers accept whatever they are given.
"""

from typing import Optional

from expense_tracker.models.expense import Expense
from expense_tracker.repositories import ExpenseRepository
from expense_tracker.usecases.base import UseCase
from expense_tracker.validation import ExpenseValidator


class AddExpenseUseCase(UseCase[None, Expense]):

    def __init__(
        self,
        repository: ExpenseRepository,
        validator: Optional[ExpenseValidator] = None,
    ):
        self._repository = repository
        self._validator = validator

    async def __call__(self, params: Expense) -> None:
        if self._validator:
            self._validator.ensure_valid(params)
        await self._repository.add_expense(params)


class GetExpensesUseCase(UseCase[list[Expense], None]):

    def __init__(self, repository: ExpenseRepository):
        self._repository = repository

    async def __call__(self, params: None = None) -> list[Expense]:
        return await self._repository.get_expenses()


class UpdateExpenseUseCase(UseCase[None, Expense]):

    def __init__(
        self,
        repository: ExpenseRepository,
        validator: Optional[ExpenseValidator] = None,
    ):
        self._repository = repository
        self._validator = validator

    async def __call__(self, params: Expense) -> None:
        if self._validator:
            self._validator.ensure_valid(params)
        await self._repository.update_expense(params)


class DeleteExpenseUseCase(UseCase[None, str]):

    def __init__(self, repository: ExpenseRepository):
        self._repository = repository

    async def __call__(self, params: str) -> None:
        await self._repository.delete_expense(params)
