"""
Data Models Package

All data flowing through the Expense Tracker conforms to these schemas.
"""

from expense_tracker.models.expense import (
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    generate_expense_id,
)
from expense_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Expense models
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    "generate_expense_id",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
