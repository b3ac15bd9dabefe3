"""Application state package."""

from expense_tracker.state.controller import ExpenseController, Listener

__all__ = ["ExpenseController", "Listener"]
