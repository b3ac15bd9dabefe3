"""
Application Wiring for Expense Tracker

Builds the whole chain once, innermost first:

    store -> repository -> use cases -> controller

The UI asks for an AppComponents bundle at process start and keeps it
for the lifetime of the process. Nothing here holds state of its own.
"""

from dataclasses import dataclass
from typing import Optional

from expense_tracker.config import Settings, get_settings
from expense_tracker.log_config import configure_logging, get_logger, is_configured
from expense_tracker.repositories import ExpenseRepository, StoreExpenseRepository
from expense_tracker.services.storage import (
    ExpenseStoreInterface,
    InMemoryExpenseStore,
)
from expense_tracker.state import ExpenseController
from expense_tracker.usecases import (
    AddExpenseUseCase,
    DeleteExpenseUseCase,
    GetExpensesUseCase,
    UpdateExpenseUseCase,
)
from expense_tracker.validation import ExpenseValidator

logger = get_logger(__name__)


@dataclass
class AppComponents:
    """Everything the UI needs, assembled once."""

    store: ExpenseStoreInterface
    repository: ExpenseRepository
    validator: ExpenseValidator
    controller: ExpenseController


def create_app_components(
    store: Optional[ExpenseStoreInterface] = None,
    settings: Optional[Settings] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        store: Storage backend. Defaults to a fresh in-memory store.
        settings: Settings to use. Defaults to get_settings().

    Returns:
        AppComponents with the controller ready for load()
    """
    settings = settings or get_settings()
    app_settings = settings.app

    if not is_configured():
        configure_logging(settings.logging)

    store = store or InMemoryExpenseStore()
    repository = StoreExpenseRepository(store)
    validator = ExpenseValidator(app_settings)

    # Only writes are validated; reads and deletes carry nothing to check
    write_validator = validator if app_settings.validate_on_write else None

    controller = ExpenseController(
        add_expense_use_case=AddExpenseUseCase(repository, write_validator),
        get_expenses_use_case=GetExpensesUseCase(repository),
        update_expense_use_case=UpdateExpenseUseCase(repository, write_validator),
        delete_expense_use_case=DeleteExpenseUseCase(repository),
    )

    logger.info(
        "app_components_created",
        store=type(store).__name__,
        validate_on_write=app_settings.validate_on_write,
        environment=app_settings.app_environment,
    )

    return AppComponents(
        store=store,
        repository=repository,
        validator=validator,
        controller=controller,
    )
