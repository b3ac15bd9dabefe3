"""
Expense Input Validation

DESIGN DECISION: Validation sits above the store, in its own layer.
The store accepts anything it is handed; the UI and the add/update use
cases ask this validator first.

Checks:
- Description present and not too long (error)
- Amount present and strictly positive (error)
- Category outside the configured default list (warning)

IMPORTANT: Validation NEVER silently fixes issues.
It reports them and lets the caller decide.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from expense_tracker.config import AppSettings, get_settings
from expense_tracker.models.expense import Expense
from expense_tracker.models.validation import ValidationIssue, ValidationResult


class ExpenseValidationError(ValueError):
    """Raised by the use cases when an expense fails validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.summary() or "Invalid expense")


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


class ExpenseValidator:
    """Validates the user-editable fields of an expense."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def validate(
        self,
        description: Optional[str],
        amount: Any,
        category: Optional[str] = None,
    ) -> ValidationResult:
        """
        Validate raw form values.

        Args:
            description: Free-text label
            amount: Anything convertible to Decimal
            category: Category label, checked against the default list

        Returns:
            ValidationResult with all issues found
        """
        issues = []

        text = (description or "").strip()
        if not text:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
                severity="error",
                suggested_fix="Enter what the money was spent on",
            ))
        elif len(text) > self._settings.max_description_length:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message=(
                    f"Description is longer than "
                    f"{self._settings.max_description_length} characters"
                ),
                severity="error",
            ))

        value = _to_decimal(amount)
        if value is None or not value.is_finite():
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount must be a number",
                severity="error",
            ))
        elif value <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
                suggested_fix="Enter a positive amount",
            ))

        if category and category not in self._settings.categories_list:
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"'{category}' is not one of the default categories",
                severity="warning",
            ))

        return ValidationResult(issues=issues)

    def validate_expense(self, expense: Expense) -> ValidationResult:
        """Validate a full record (used before add/update)."""
        return self.validate(expense.description, expense.amount, expense.category)

    def ensure_valid(self, expense: Expense) -> None:
        """
        Raise if the record has error-level issues.

        Raises:
            ExpenseValidationError: carrying the full ValidationResult
        """
        result = self.validate_expense(expense)
        if result.has_errors:
            raise ExpenseValidationError(result)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Text shown to the user next to the form."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []
        for issue in result.issues:
            prefix = "Error" if issue.severity == "error" else "Note"
            lines.append(f"{prefix}: {issue.message}")
            if issue.suggested_fix:
                lines.append(f"  Tip: {issue.suggested_fix}")
        return "\n".join(lines)
