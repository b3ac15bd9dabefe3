"""
Streamlit Frontend for Expense Tracker

The views only read controller state and call controller methods.
They never hold expense data of their own.

Pages:
1. Expenses - the list, the running total, edit and delete actions
2. Add Expense - form for a new record
3. Settings - configuration status
"""

import asyncio
from datetime import date, datetime, time
from decimal import Decimal

import streamlit as st

from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.models.expense import Expense
from expense_tracker.orchestrator import AppComponents, create_app_components
from expense_tracker.services.storage import InMemoryExpenseStore
from expense_tracker.validation import ExpenseValidationError


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_components() -> AppComponents:
    """
    Get or create this session's application components.

    Each browser session owns its own store and controller, so change
    notifications only ever run on the session that caused them and
    the listener goes away with the session.
    """
    if "components" not in st.session_state:
        components = create_app_components()
        components.controller.subscribe(_bump_revision)
        run_async(components.controller.load())
        st.session_state.components = components
    return st.session_state.components


def format_amount(amount: Decimal) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{amount:,.2f}"


def format_date(value: datetime) -> str:
    return value.strftime(get_settings().app.date_format)


def _bump_revision():
    # Controller listener: record that state changed since the last render
    st.session_state.revision = st.session_state.get("revision", 0) + 1


def _refresh_if_changed():
    """Re-render when the controller changed state during this run."""
    if st.session_state.get("revision", 0) != st.session_state.get("rendered_revision"):
        st.rerun()


def _category_options(current: str = "") -> list[str]:
    options = list(get_settings().app.categories_list)
    if current and current not in options:
        options.append(current)
    return options


def main():
    """Main application entry point."""
    components = get_components()
    st.session_state.rendered_revision = st.session_state.get("revision", 0)

    st.sidebar.title("💸 Expense Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📋 Expenses", "➕ Add Expense", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("🧹 Reset session", key="reset-session"):
        reset_session(components)

    if page == "📋 Expenses":
        render_list_page(components)
    elif page == "➕ Add Expense":
        render_add_page(components)
    elif page == "⚙️ Settings":
        render_settings_page()


def reset_session(components: AppComponents):
    """Drop every record of this session and reload the (now empty) list."""
    if isinstance(components.store, InMemoryExpenseStore):
        components.store.clear()
    st.session_state.editing_id = None
    run_async(components.controller.load())
    _refresh_if_changed()


def render_list_page(components: AppComponents):
    """Render the expense list with total, edit and delete."""
    controller = components.controller

    st.title("📋 Expenses")

    if controller.last_error:
        st.warning(controller.last_error)

    if st.button("🔄 Reload"):
        with st.spinner("Loading expenses..."):
            run_async(controller.load())
        _refresh_if_changed()

    st.markdown("**Total spent**")
    st.markdown(
        f'<div class="big-number">{format_amount(controller.total)}</div>',
        unsafe_allow_html=True,
    )
    st.markdown("---")

    if controller.is_loading:
        st.info("Loading...")
        return

    if not controller.records:
        st.info("No expenses recorded in this session yet.")
        return

    for expense in controller.records:
        col1, col2, col3, col4 = st.columns([5, 2, 1, 1])
        with col1:
            st.markdown(f"**{expense.description}**")
            st.caption(f"{format_date(expense.date)} - {expense.category}")
        with col2:
            st.markdown(format_amount(expense.amount))
        with col3:
            if st.button("✏️", key=f"edit-{expense.id}", help="Edit"):
                st.session_state.editing_id = expense.id
                st.rerun()
        with col4:
            if st.button("🗑️", key=f"delete-{expense.id}", help="Delete"):
                try:
                    run_async(controller.delete_expense(expense.id))
                except Exception as e:
                    st.error(f"Failed to delete: {e}")
                else:
                    if st.session_state.get("editing_id") == expense.id:
                        st.session_state.editing_id = None
                    _refresh_if_changed()

    editing_id = st.session_state.get("editing_id")
    if editing_id:
        expense = controller.find(editing_id)
        if expense is None:
            st.session_state.editing_id = None
        else:
            render_edit_form(components, expense)


def render_edit_form(components: AppComponents, expense: Expense):
    """Edit form pre-filled from an existing record."""
    st.markdown("---")
    st.subheader("✏️ Edit Expense")

    options = _category_options(expense.category)

    with st.form(f"edit-form-{expense.id}"):
        description = st.text_input("Description *", value=expense.description)
        amount = st.number_input(
            "Amount *",
            value=float(expense.amount),
            step=0.01,
            format="%.2f",
        )
        expense_date = st.date_input("Date *", value=expense.date.date())
        category = st.selectbox(
            "Category *",
            options=options,
            index=options.index(expense.category),
        )

        col1, col2 = st.columns(2)
        with col1:
            save = st.form_submit_button("💾 Save Changes", type="primary")
        with col2:
            cancel = st.form_submit_button("Cancel")

    if cancel:
        st.session_state.editing_id = None
        st.rerun()

    if save:
        result = components.validator.validate(description, amount, category)
        if result.has_errors:
            st.error(components.validator.get_user_friendly_summary(result))
            return

        updated = expense.copy_with(
            description=description,
            amount=Decimal(str(amount)),
            date=datetime.combine(expense_date, expense.date.time()),
            category=category,
        )
        try:
            run_async(components.controller.update_expense(updated))
        except ExpenseValidationError as e:
            st.error(str(e))
        except Exception as e:
            st.error(f"Failed to save: {e}")
        else:
            st.session_state.editing_id = None
            st.rerun()


def render_add_page(components: AppComponents):
    """Render the new-expense form."""
    st.title("➕ Add Expense")

    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)

    options = _category_options()

    with st.form("add-form", clear_on_submit=True):
        description = st.text_input(
            "Description *",
            placeholder="e.g., Coffee",
        )
        amount = st.number_input(
            "Amount *",
            min_value=0.0,
            step=0.01,
            format="%.2f",
        )
        expense_date = st.date_input("Date *", value=date.today())
        category = st.selectbox("Category *", options=options, index=0)

        submitted = st.form_submit_button("💾 Save Expense", type="primary")

    if not submitted:
        return

    result = components.validator.validate(description, amount, category)
    if result.has_errors:
        st.error(components.validator.get_user_friendly_summary(result))
        return

    try:
        expense = run_async(
            components.controller.add_expense(
                description=description,
                amount=Decimal(str(amount)),
                date=datetime.combine(expense_date, time()),
                category=category,
            )
        )
    except ExpenseValidationError as e:
        st.error(str(e))
    except Exception as e:
        st.error(f"Failed to save: {e}")
    else:
        st.session_state.flash = (
            f"Saved {expense.description} ({format_amount(expense.amount)})"
        )
        _refresh_if_changed()


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()
    for name, key in [("Application", "app"), ("Logging", "logging")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Invalid')}")

    app_settings = get_settings().app
    st.markdown("### Current Values")
    st.markdown(f"- **Environment:** {app_settings.app_environment}")
    st.markdown(f"- **Currency:** {app_settings.currency_symbol}")
    st.markdown(f"- **Categories:** {', '.join(app_settings.categories_list)}")
    st.markdown(f"- **Validate on save:** {app_settings.validate_on_write}")

    st.markdown("---")
    st.markdown(
        "To change these, create a `.env` file. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
