"""
Expense State Controller

The single owner of UI-observable state. Views read from it and call its
methods; they never touch the store or the use cases directly.

State:
- records:    ordered mirror of the store (read-only tuple for callers)
- is_loading: True while load() is in flight
- total:      sum of all amounts, recomputed on every read
- last_error: message from the last failed load(), None otherwise

Change notifications:
Listeners are plain zero-argument callables, called synchronously in
subscription order after every state change. A listener that raises is
logged and skipped; the remaining listeners still run.
- load()            exactly two (start, end), whatever the outcome
- add_expense()     one, only after the store accepted the record
- update_expense()  one, only if the id was present in the mirror
- delete_expense()  one, always, once the store call succeeded
A failed write notifies nobody and leaves the mirror untouched.

Error policy:
Read failures are caught, logged and exposed through last_error so the
view can show them. Write failures propagate to the caller unchanged.
Any successful operation clears last_error.

Operations are not serialized against each other. Two overlapping
writes from the same view both run and their completions race.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from expense_tracker.log_config import get_logger
from expense_tracker.models.expense import (
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    generate_expense_id,
)
from expense_tracker.usecases import (
    AddExpenseUseCase,
    DeleteExpenseUseCase,
    GetExpensesUseCase,
    UpdateExpenseUseCase,
)

logger = get_logger(__name__)

Listener = Callable[[], None]


class ExpenseController:
    """Mirrors the expense store for the UI and broadcasts changes."""

    def __init__(
        self,
        add_expense_use_case: AddExpenseUseCase,
        get_expenses_use_case: GetExpensesUseCase,
        update_expense_use_case: UpdateExpenseUseCase,
        delete_expense_use_case: DeleteExpenseUseCase,
    ):
        self._add_expense = add_expense_use_case
        self._get_expenses = get_expenses_use_case
        self._update_expense = update_expense_use_case
        self._delete_expense = delete_expense_use_case

        self._expenses: list[Expense] = []
        self._is_loading = False
        self._last_error: Optional[str] = None
        self._listeners: list[Listener] = []

    # -------------------------------------------------------------------------
    # Observable state
    # -------------------------------------------------------------------------

    @property
    def records(self) -> tuple[Expense, ...]:
        return tuple(self._expenses)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def total(self) -> Decimal:
        return sum((e.amount for e in self._expenses), Decimal("0"))

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def find(self, expense_id: str) -> Optional[Expense]:
        """Look up a mirrored record by id."""
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Registering the same callable twice has no extra effect.

        Returns:
            A function that unsubscribes this listener
        """
        if listener not in self._listeners:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self) -> None:
        # Copy so a listener may unsubscribe itself while being called
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                # A broken view must not stop the others or corrupt state
                logger.error(
                    "listener_failed",
                    listener=repr(listener),
                    error=str(e),
                    error_type=type(e).__name__,
                )

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def load(self) -> None:
        """
        Replace the mirror with the store's current contents.

        Never raises for storage failures; see last_error instead.
        """
        self._is_loading = True
        try:
            self._notify()
            try:
                self._expenses = list(await self._get_expenses(None))
                self._last_error = None
                logger.info("expenses_loaded", count=len(self._expenses))
            except Exception as e:
                self._last_error = f"Could not load expenses: {e}"
                logger.error(
                    "expenses_load_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
        finally:
            self._is_loading = False
            self._notify()

    async def add_expense(
        self,
        description: str,
        amount: Any,
        date: datetime,
        category: Any = ExpenseCategory.OTHER,
    ) -> Expense:
        """
        Create a record with a fresh id and add it to the store.

        Returns:
            The record that was stored

        Raises:
            Whatever the add use case raises; state is left unchanged
        """
        draft = ExpenseDraft(
            description=description,
            amount=amount,
            date=date,
            category=category,
        )
        expense = draft.to_expense(generate_expense_id())

        await self._add_expense(expense)

        self._expenses.append(expense)
        self._last_error = None
        logger.info("expense_added", **expense.to_log_dict())
        self._notify()
        return expense

    async def add_draft(self, draft: ExpenseDraft) -> Expense:
        """Same as add_expense, taking the form fields as one object."""
        return await self.add_expense(
            description=draft.description,
            amount=draft.amount,
            date=draft.date,
            category=draft.category,
        )

    async def update_expense(self, expense: Expense) -> None:
        """
        Replace the record with the same id in the store and the mirror.

        Raises:
            Whatever the update use case raises; state is left unchanged
        """
        await self._update_expense(expense)
        self._last_error = None

        for index, current in enumerate(self._expenses):
            if current.id == expense.id:
                self._expenses[index] = expense
                logger.info("expense_updated", **expense.to_log_dict())
                self._notify()
                return

        # Store accepted the call but the mirror never had this id
        logger.warning("expense_update_not_mirrored", expense_id=expense.id)

    async def delete_expense(self, expense_id: str) -> None:
        """
        Remove every record with this id from the store and the mirror.

        Raises:
            Whatever the delete use case raises; state is left unchanged
        """
        await self._delete_expense(expense_id)

        before = len(self._expenses)
        self._expenses = [e for e in self._expenses if e.id != expense_id]
        self._last_error = None
        logger.info(
            "expense_deleted",
            expense_id=expense_id,
            removed=before - len(self._expenses),
        )
        self._notify()
