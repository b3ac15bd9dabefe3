"""Shared fixtures for the Expense Tracker tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from expense_tracker.config import AppSettings
from expense_tracker.models.expense import Expense
from expense_tracker.repositories import StoreExpenseRepository
from expense_tracker.services.storage import InMemoryExpenseStore, StorageError
from expense_tracker.state import ExpenseController
from expense_tracker.usecases import (
    AddExpenseUseCase,
    DeleteExpenseUseCase,
    GetExpensesUseCase,
    UpdateExpenseUseCase,
)


class FailingStore(InMemoryExpenseStore):
    """In-memory store whose operations can be switched to fail."""

    def __init__(self):
        super().__init__()
        self.fail_on: set[str] = set()
        self.error_class = StorageError

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise self.error_class(f"{operation} failed")

    async def add(self, expense):
        self._maybe_fail("add")
        await super().add(expense)

    async def list(self):
        self._maybe_fail("list")
        return await super().list()

    async def update(self, expense):
        self._maybe_fail("update")
        await super().update(expense)

    async def delete(self, expense_id):
        self._maybe_fail("delete")
        await super().delete(expense_id)


def make_expense(expense_id: str, amount: str = "10.00", **overrides) -> Expense:
    fields = dict(
        id=expense_id,
        description=f"Expense {expense_id}",
        amount=Decimal(amount),
        date=datetime(2024, 5, 1, 12, 0),
        category="Food",
    )
    fields.update(overrides)
    return Expense(**fields)


def build_controller(store, validator=None) -> ExpenseController:
    repository = StoreExpenseRepository(store)
    return ExpenseController(
        add_expense_use_case=AddExpenseUseCase(repository, validator),
        get_expenses_use_case=GetExpensesUseCase(repository),
        update_expense_use_case=UpdateExpenseUseCase(repository, validator),
        delete_expense_use_case=DeleteExpenseUseCase(repository),
    )


@pytest.fixture
def app_settings():
    return AppSettings(
        default_categories="Food,Transport,Utilities,Other",
        max_description_length=50,
        validate_on_write=True,
    )


@pytest.fixture
def store():
    return InMemoryExpenseStore()


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def controller(store):
    return build_controller(store)


@pytest.fixture
def expense_factory():
    return make_expense


@pytest.fixture
def controller_factory():
    return build_controller
