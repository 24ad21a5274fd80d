"""Tests for expense domain models."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.domain.models import Expense, ExpenseDraft, YearMonth


def test_expenses_with_same_id_are_interchangeable() -> None:
    """Identity is the id: other fields do not affect equality or hashing."""
    first = Expense(id=7, amount=Decimal("100"), date=datetime(2025, 7, 1))
    second = Expense(id=7, amount=Decimal("999"), date=datetime(2024, 1, 1))

    assert first == second
    assert len({first, second}) == 1
    assert {first: "a"}[second] == "a"


def test_expenses_with_different_ids_differ() -> None:
    first = Expense(id=1, amount=Decimal("100"), date=datetime(2025, 7, 1))
    second = Expense(id=2, amount=Decimal("100"), date=datetime(2025, 7, 1))

    assert first != second


def test_draft_to_expense_keeps_fields() -> None:
    draft = ExpenseDraft(
        amount=Decimal("1500"),
        date=datetime(2025, 7, 1, 12, 30),
        note="Lunch",
        category_id=3,
    )

    expense = draft.to_expense(42)

    assert expense.id == 42
    assert expense.amount == Decimal("1500")
    assert expense.date == datetime(2025, 7, 1, 12, 30)
    assert expense.note == "Lunch"
    assert expense.category_id == 3
    assert expense.user_id == 1


def test_year_month_navigation_wraps_years() -> None:
    assert YearMonth(2025, 1).previous() == YearMonth(2024, 12)
    assert YearMonth(2024, 12).next() == YearMonth(2025, 1)
    assert YearMonth(2025, 7).next() == YearMonth(2025, 8)


def test_year_month_contains_ignores_day_and_time() -> None:
    month = YearMonth(2025, 7)

    assert month.contains(date(2025, 7, 31))
    assert month.contains(datetime(2025, 7, 1, 0, 0))
    assert not month.contains(date(2024, 7, 15))
    assert not month.contains(date(2025, 8, 1))


def test_year_month_parse_and_label() -> None:
    month = YearMonth.parse("2025-07")

    assert month == YearMonth(2025, 7)
    assert month.label == "2025-07"
    assert str(YearMonth(987, 3)) == "0987-03"
    assert YearMonth.current(date(2025, 2, 14)) == YearMonth(2025, 2)


@pytest.mark.parametrize("value", ["2025", "2025-13", "July 2025", "2025-0x"])
def test_year_month_parse_rejects_bad_labels(value: str) -> None:
    with pytest.raises(ValueError):
        YearMonth.parse(value)
