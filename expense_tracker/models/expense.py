"""
Core Data Models for Expense Tracker

The expense record is the only entity in the system. Every layer
(store, repository, use cases, controller, UI) passes these around.

DESIGN DECISION: Records are frozen pydantic models.
A record is never patched field by field; an edit produces a new record
with the same id (see Expense.copy_with) which then replaces the old one
wholesale. Freezing also means a shallow copy of a list of records is a
safe snapshot.

The model deliberately does NOT enforce UI conventions (non-empty
description, positive amount, known category). Those checks belong to
the validation layer above the store.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Default categories offered by the UI.

    The store accepts any category string; this is a convenience list,
    not a closed set.
    """
    FOOD = "Food"
    TRANSPORT = "Transport"
    UTILITIES = "Utilities"
    OTHER = "Other"


def generate_expense_id() -> str:
    """Create a new random expense id (UUID4, collisions treated as negligible)."""
    return str(uuid4())


def _category_value(v: Any) -> Any:
    if isinstance(v, Enum):
        return v.value
    return v


# =============================================================================
# EXPENSE MODELS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    The user-supplied fields of a new expense, before it gets an id.

    This is what the add form produces and what
    ExpenseController.add_expense accepts.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    description: str
    amount: Decimal
    date: datetime
    category: str = ExpenseCategory.OTHER.value

    @field_validator('category', mode='before')
    @classmethod
    def normalize_category(cls, v: Any) -> Any:
        """Store enum members by their value."""
        return _category_value(v)

    def to_expense(self, expense_id: Optional[str] = None) -> "Expense":
        """Attach an id and turn the draft into a full record."""
        return Expense(
            id=expense_id or generate_expense_id(),
            description=self.description,
            amount=self.amount,
            date=self.date,
            category=self.category,
        )


class Expense(BaseModel):
    """
    A single expense record.

    `id` is assigned once at creation and never changes. It is kept
    exactly as given; only the text labels are stripped.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    description: str = Field(
        ...,
        description="Free-text label"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount"
    )
    date: datetime = Field(
        ...,
        description="When the expense happened"
    )
    category: str = Field(
        default=ExpenseCategory.OTHER.value,
        description="Category label (see ExpenseCategory for defaults)"
    )

    @field_validator('category', mode='before')
    @classmethod
    def normalize_category(cls, v: Any) -> Any:
        """Store enum members by their value."""
        return _category_value(v)

    @field_validator('description', 'category')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    def copy_with(self, **changes: Any) -> "Expense":
        """
        Return a new record with the given fields replaced.

        The id may not be changed this way; edits keep their identity.
        Changes go through validation again, so copy_with(amount=1.5)
        yields a Decimal amount just like the constructor would.
        """
        if "id" in changes and changes["id"] != self.id:
            raise ValueError("Expense id is immutable")
        data = self.model_dump()
        data.update(changes)
        return Expense(**data)

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "expense_id": self.id,
            "amount": str(self.amount),
            "category": self.category,
            "date": self.date.isoformat(),
        }
