"""Tests for AddExpenseUseCase."""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.add_expense import AddExpenseUseCase
from src.application.use_cases.change_events import EXPENSES_CHANGED, EventBus
from src.domain.errors import (
    CategoryNotVisible,
    FutureDate,
    InvalidAmount,
    StoreWriteError,
)
from src.domain.models import Category
from src.domain.services.fingerprint import compute_fingerprint


TODAY = date(2025, 7, 15)


class FakeExpenseStore:
    def __init__(self, fail_insert: bool = False) -> None:
        self.expenses = []
        self.categories = [
            Category(id=1, name="Food"),
            Category(id=2, name="Rent", visible=False),
            Category(id=3, name="Old", active=False),
        ]
        self.fail_insert = fail_insert

    def insert(self, draft) -> int:
        if self.fail_insert:
            raise StoreWriteError("Could not save the expense.")
        expense_id = len(self.expenses) + 1
        self.expenses.append(draft.to_expense(expense_id))
        return expense_id

    def list_all(self):
        return list(self.expenses)

    def list_categories(self):
        return list(self.categories)


def _build(store):
    bus = EventBus()
    events = []
    bus.subscribe(EXPENSES_CHANGED, events.append)
    use_case = AddExpenseUseCase(
        store,
        event_bus=bus,
        logger=MagicMock(),
        today=lambda: TODAY,
    )
    return use_case, events


def test_execute_persists_and_announces_expense() -> None:
    store = FakeExpenseStore()
    use_case, events = _build(store)

    result = use_case.execute("1500", TODAY, 1, "  lunch  ")

    assert result.expense.id == 1
    assert result.expense.amount == Decimal("1500")
    assert result.expense.note == "lunch"
    assert result.expense.date == datetime(2025, 7, 15)
    assert store.expenses == [result.expense]
    assert result.fingerprint == compute_fingerprint(store.expenses)
    assert len(events) == 1
    assert events[0].payload == {
        "fingerprint": result.fingerprint,
        "expense_id": 1,
    }


def test_execute_truncates_long_note() -> None:
    store = FakeExpenseStore()
    use_case, _ = _build(store)

    result = use_case.execute(Decimal("10"), TODAY, 1, "x" * 150)

    assert len(result.expense.note) == 100


@pytest.mark.parametrize(
    ("amount", "spent_at", "category_id", "error"),
    [
        ("0", TODAY, 1, InvalidAmount),
        ("100000000000", TODAY, 1, InvalidAmount),
        ("10", date(2025, 7, 16), 1, FutureDate),
        ("10", TODAY, 2, CategoryNotVisible),
        ("10", TODAY, 3, CategoryNotVisible),
        ("10", TODAY, 99, CategoryNotVisible),
    ],
)
def test_invalid_input_is_rejected_without_event(
    amount, spent_at, category_id, error
) -> None:
    store = FakeExpenseStore()
    use_case, events = _build(store)

    with pytest.raises(error):
        use_case.execute(amount, spent_at, category_id)

    assert store.expenses == []
    assert events == []


def test_store_failure_propagates_without_event() -> None:
    store = FakeExpenseStore(fail_insert=True)
    use_case, events = _build(store)

    with pytest.raises(StoreWriteError):
        use_case.execute("10", TODAY, 1)

    assert events == []


def test_each_write_changes_fingerprint() -> None:
    store = FakeExpenseStore()
    use_case, events = _build(store)

    first = use_case.execute("10", TODAY, 1)
    second = use_case.execute("10", TODAY, 1)

    assert first.fingerprint != second.fingerprint
    assert [event.payload["expense_id"] for event in events] == [1, 2]
