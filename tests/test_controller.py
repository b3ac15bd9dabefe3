"""Tests for ExpenseController: mirror, notifications, errors, total."""

import asyncio
from datetime import datetime
from decimal import Decimal

import pytest

from expense_tracker.models.expense import ExpenseCategory, ExpenseDraft
from expense_tracker.services.storage import StorageConnectionError, StorageError
from expense_tracker.validation import ExpenseValidationError, ExpenseValidator


class Recorder:
    """Change listener that remembers what the controller looked like."""

    def __init__(self, controller):
        self.controller = controller
        self.calls = 0
        self.loading_states = []

    def __call__(self):
        self.calls += 1
        self.loading_states.append(self.controller.is_loading)


async def assert_mirrors_store(controller, store):
    assert list(controller.records) == await store.list()


class TestLoad:
    """Tests for ExpenseController.load."""

    @pytest.mark.asyncio
    async def test_load_replaces_records(self, store, controller, expense_factory):
        await store.add(expense_factory("A"))
        await store.add(expense_factory("B"))

        await controller.load()

        assert [e.id for e in controller.records] == ["A", "B"]
        assert controller.is_loading is False
        assert controller.last_error is None

    @pytest.mark.asyncio
    async def test_load_notifies_twice(self, controller):
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        await controller.load()

        assert recorder.calls == 2
        assert recorder.loading_states == [True, False]

    @pytest.mark.asyncio
    async def test_load_finishes_when_listener_raises(self, store, controller, expense_factory):
        """A listener failing on the start notification does not leave is_loading stuck."""
        await store.add(expense_factory("A"))
        calls = []

        def flaky():
            calls.append(controller.is_loading)
            if len(calls) == 1:
                raise RuntimeError("view crashed")

        controller.subscribe(flaky)
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        await controller.load()

        assert controller.is_loading is False
        assert calls == [True, False]
        assert recorder.calls == 2
        assert recorder.loading_states == [True, False]
        assert [e.id for e in controller.records] == ["A"]

    @pytest.mark.asyncio
    async def test_raising_listener_does_not_break_writes(self, store, controller):
        def broken():
            raise RuntimeError("view crashed")

        controller.subscribe(broken)

        expense = await controller.add_expense("Coffee", Decimal("4.50"), datetime(2024, 1, 1))

        assert controller.records == (expense,)
        await assert_mirrors_store(controller, store)

    @pytest.mark.asyncio
    async def test_load_failure_is_swallowed(
        self, failing_store, controller_factory, expense_factory
    ):
        controller = controller_factory(failing_store)
        await controller.add_expense(
            description="Coffee",
            amount=Decimal("4.50"),
            date=datetime(2024, 1, 1),
            category="Food",
        )
        failing_store.fail_on = {"list"}
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        await controller.load()

        assert recorder.calls == 2
        assert recorder.loading_states == [True, False]
        assert controller.is_loading is False
        assert len(controller.records) == 1
        assert "list failed" in controller.last_error

    @pytest.mark.asyncio
    async def test_load_connection_error_is_swallowed(self, failing_store, controller_factory):
        controller = controller_factory(failing_store)
        failing_store.fail_on = {"list"}
        failing_store.error_class = StorageConnectionError

        await controller.load()

        assert controller.records == ()
        assert controller.last_error == "Could not load expenses: list failed"

    @pytest.mark.asyncio
    async def test_successful_load_clears_last_error(self, failing_store, controller_factory):
        controller = controller_factory(failing_store)
        failing_store.fail_on = {"list"}
        await controller.load()
        assert controller.last_error is not None

        failing_store.fail_on = set()
        await controller.load()

        assert controller.last_error is None


class TestAddExpense:
    """Tests for ExpenseController.add_expense."""

    @pytest.mark.asyncio
    async def test_add_appends_and_notifies_once(self, store, controller):
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        expense = await controller.add_expense(
            description="Coffee",
            amount=Decimal("4.50"),
            date=datetime(2024, 1, 1),
            category=ExpenseCategory.FOOD,
        )

        assert recorder.calls == 1
        assert controller.records == (expense,)
        assert expense.category == "Food"
        await assert_mirrors_store(controller, store)

    @pytest.mark.asyncio
    async def test_each_add_gets_new_id(self, controller):
        ids = set()
        for i in range(10):
            expense = await controller.add_expense(
                description=f"Item {i}",
                amount=Decimal("1"),
                date=datetime(2024, 1, 1),
            )
            ids.add(expense.id)
        assert len(ids) == 10

    @pytest.mark.asyncio
    async def test_add_failure_propagates(self, failing_store, controller_factory):
        controller = controller_factory(failing_store)
        failing_store.fail_on = {"add"}
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        with pytest.raises(StorageError):
            await controller.add_expense(
                description="Coffee",
                amount=Decimal("4.50"),
                date=datetime(2024, 1, 1),
            )

        assert controller.records == ()
        assert recorder.calls == 0

    @pytest.mark.asyncio
    async def test_add_rejected_by_validator(self, store, controller_factory, app_settings):
        controller = controller_factory(store, ExpenseValidator(app_settings))
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        with pytest.raises(ExpenseValidationError):
            await controller.add_expense(
                description="Coffee",
                amount=Decimal("-1"),
                date=datetime(2024, 1, 1),
            )

        assert controller.records == ()
        assert store.count == 0
        assert recorder.calls == 0

    @pytest.mark.asyncio
    async def test_add_draft(self, store, controller):
        draft = ExpenseDraft(
            description="Taxi",
            amount=Decimal("12.00"),
            date=datetime(2024, 3, 3),
            category="Transport",
        )

        expense = await controller.add_draft(draft)

        assert expense.description == "Taxi"
        assert expense.category == "Transport"
        await assert_mirrors_store(controller, store)


class TestUpdateExpense:
    """Tests for ExpenseController.update_expense."""

    @pytest.mark.asyncio
    async def test_update_replaces_in_place(self, store, controller):
        first = await controller.add_expense("A", Decimal("1"), datetime(2024, 1, 1))
        second = await controller.add_expense("B", Decimal("2"), datetime(2024, 1, 2))
        third = await controller.add_expense("C", Decimal("3"), datetime(2024, 1, 3))
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        edited = second.copy_with(description="B2", amount=20)
        await controller.update_expense(edited)

        assert controller.records == (first, edited, third)
        assert recorder.calls == 1
        await assert_mirrors_store(controller, store)

    @pytest.mark.asyncio
    async def test_update_without_local_match_does_not_notify(
        self, store, controller, expense_factory
    ):
        # Record present in the store but never loaded into the mirror
        hidden = expense_factory("hidden")
        await store.add(hidden)
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        await controller.update_expense(hidden.copy_with(description="Edited"))

        assert recorder.calls == 0
        assert controller.records == ()
        assert (await store.list())[0].description == "Edited"

    @pytest.mark.asyncio
    async def test_update_failure_leaves_state(self, failing_store, controller_factory):
        controller = controller_factory(failing_store)
        expense = await controller.add_expense("A", Decimal("1"), datetime(2024, 1, 1))
        failing_store.fail_on = {"update"}
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        with pytest.raises(StorageError):
            await controller.update_expense(expense.copy_with(description="Edited"))

        assert controller.records == (expense,)
        assert recorder.calls == 0


class TestDeleteExpense:
    """Tests for ExpenseController.delete_expense."""

    @pytest.mark.asyncio
    async def test_delete_removes_and_notifies(self, store, controller):
        keep = await controller.add_expense("Keep", Decimal("1"), datetime(2024, 1, 1))
        drop = await controller.add_expense("Drop", Decimal("2"), datetime(2024, 1, 1))
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        await controller.delete_expense(drop.id)

        assert controller.records == (keep,)
        assert recorder.calls == 1
        await assert_mirrors_store(controller, store)

    @pytest.mark.asyncio
    async def test_delete_unknown_id_still_notifies(self, store, controller):
        await controller.add_expense("Keep", Decimal("1"), datetime(2024, 1, 1))
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        await controller.delete_expense("missing")

        assert len(controller.records) == 1
        assert recorder.calls == 1
        await assert_mirrors_store(controller, store)

    @pytest.mark.asyncio
    async def test_delete_failure_leaves_state(self, failing_store, controller_factory):
        controller = controller_factory(failing_store)
        expense = await controller.add_expense("A", Decimal("1"), datetime(2024, 1, 1))
        failing_store.fail_on = {"delete"}
        recorder = Recorder(controller)
        controller.subscribe(recorder)

        with pytest.raises(StorageError):
            await controller.delete_expense(expense.id)

        assert controller.records == (expense,)
        assert recorder.calls == 0


class TestTotal:
    """Tests for the derived total."""

    def test_empty_total_is_zero(self, controller):
        assert controller.total == Decimal("0")
        assert controller.total == 0.0

    @pytest.mark.asyncio
    async def test_total_sums_amounts(self, controller):
        await controller.add_expense("Lunch", 10.50, datetime(2024, 1, 1))
        await controller.add_expense("Bus", 5.25, datetime(2024, 1, 1))

        assert controller.total == Decimal("15.75")

    @pytest.mark.asyncio
    async def test_total_follows_edits_and_deletes(self, controller):
        lunch = await controller.add_expense("Lunch", Decimal("10.50"), datetime(2024, 1, 1))
        bus = await controller.add_expense("Bus", Decimal("5.25"), datetime(2024, 1, 1))

        await controller.update_expense(lunch.copy_with(amount=Decimal("12.00")))
        assert controller.total == Decimal("17.25")

        await controller.delete_expense(bus.id)
        assert controller.total == Decimal("12.00")


class TestSubscriptions:
    """Tests for the listener registry."""

    @pytest.mark.asyncio
    async def test_unsubscribe_callable(self, controller):
        recorder = Recorder(controller)
        unsubscribe = controller.subscribe(recorder)

        unsubscribe()
        await controller.load()

        assert recorder.calls == 0
        assert controller.listener_count == 0

    @pytest.mark.asyncio
    async def test_duplicate_subscription_registers_once(self, controller):
        recorder = Recorder(controller)
        controller.subscribe(recorder)
        controller.subscribe(recorder)

        await controller.load()

        assert recorder.calls == 2

    def test_unsubscribe_unknown_listener_is_ignored(self, controller):
        controller.unsubscribe(lambda: None)
        assert controller.listener_count == 0

    @pytest.mark.asyncio
    async def test_listeners_called_in_order(self, controller):
        calls = []
        controller.subscribe(lambda: calls.append("first"))
        controller.subscribe(lambda: calls.append("second"))

        await controller.delete_expense("anything")

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_listener_can_unsubscribe_itself(self, controller):
        calls = []

        def once():
            calls.append("once")
            controller.unsubscribe(once)

        controller.subscribe(once)
        await controller.load()

        assert calls == ["once"]

    def test_records_are_read_only(self, controller):
        assert isinstance(controller.records, tuple)


class TestConcurrentWrites:
    """Overlapping writes both complete and the mirror still matches."""

    @pytest.mark.asyncio
    async def test_concurrent_adds(self, store, controller):
        results = await asyncio.gather(*[
            controller.add_expense(f"Item {i}", Decimal("1"), datetime(2024, 1, 1))
            for i in range(5)
        ])

        assert len(controller.records) == 5
        assert {e.id for e in results} == {e.id for e in controller.records}
        await assert_mirrors_store(controller, store)


class TestEndToEnd:
    """Add then delete through the controller."""

    @pytest.mark.asyncio
    async def test_add_then_delete(self, store, controller):
        when = datetime(2024, 6, 1, 8, 15)

        expense = await controller.add_expense(
            description="Coffee",
            amount=4.50,
            date=when,
            category="Food",
        )

        listed = await store.list()
        assert len(listed) == 1
        assert listed[0].id == expense.id
        assert listed[0].id
        assert listed[0].description == "Coffee"
        assert listed[0].amount == Decimal("4.50")
        assert listed[0].date == when
        assert listed[0].category == "Food"

        await controller.delete_expense(expense.id)

        assert await store.list() == []
        assert controller.records == ()
