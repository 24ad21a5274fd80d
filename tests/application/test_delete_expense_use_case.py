"""Tests for DeleteExpenseUseCase."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.change_events import EXPENSES_CHANGED, EventBus
from src.application.use_cases.delete_expense import DeleteExpenseUseCase
from src.domain.errors import StoreWriteError
from src.domain.models import Expense
from src.domain.services.fingerprint import compute_fingerprint


class FakeExpenseStore:
    def __init__(self, fail_delete: bool = False) -> None:
        self.expenses = [
            Expense(id=1, amount=Decimal("1000"), date=datetime(2025, 7, 1), category_id=1),
            Expense(id=2, amount=Decimal("500"), date=datetime(2025, 7, 2), category_id=2),
        ]
        self.fail_delete = fail_delete

    def delete_expense(self, expense_id: int) -> bool:
        if self.fail_delete:
            raise StoreWriteError("Could not delete the expense.")
        remaining = [e for e in self.expenses if e.id != expense_id]
        deleted = len(remaining) != len(self.expenses)
        self.expenses = remaining
        return deleted

    def list_all(self):
        return list(self.expenses)


def _build(store):
    bus = EventBus()
    events = []
    bus.subscribe(EXPENSES_CHANGED, events.append)
    return DeleteExpenseUseCase(store, event_bus=bus, logger=MagicMock()), events


def test_execute_deletes_and_announces_new_fingerprint() -> None:
    store = FakeExpenseStore()
    use_case, events = _build(store)

    assert use_case.execute(1) is True

    assert [e.id for e in store.expenses] == [2]
    assert len(events) == 1
    assert events[0].payload == {
        "fingerprint": compute_fingerprint(store.expenses),
        "expense_id": 1,
    }


def test_execute_for_missing_expense_announces_nothing() -> None:
    use_case, events = _build(FakeExpenseStore())

    assert use_case.execute(99) is False
    assert events == []


def test_store_error_propagates_without_event() -> None:
    use_case, events = _build(FakeExpenseStore(fail_delete=True))

    with pytest.raises(StoreWriteError):
        use_case.execute(1)
    assert events == []
