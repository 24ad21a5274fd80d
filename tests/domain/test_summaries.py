"""Tests for the aggregate value objects."""

from decimal import Decimal

from src.domain.models import DailyTotals
from src.utils.decimal_utils import coerce_decimal


def test_daily_totals_read_helpers() -> None:
    daily = DailyTotals(
        by_day={
            "2025-07-03": Decimal("300"),
            "2025-07-01": Decimal("900"),
            "2025-07-02": Decimal("900"),
        }
    )

    assert daily.total == Decimal("2100")
    assert daily.active_days == 3
    assert daily.peak_day == "2025-07-01"
    assert [key for key, _ in daily.sorted_days()] == [
        "2025-07-03",
        "2025-07-02",
        "2025-07-01",
    ]
    assert daily.sorted_days(descending=False)[0] == ("2025-07-01", Decimal("900"))


def test_empty_daily_totals() -> None:
    daily = DailyTotals()

    assert daily.total == Decimal("0")
    assert daily.active_days == 0
    assert daily.peak_day is None
    assert daily.is_computing is False


def test_coerce_decimal_normalizes_store_values() -> None:
    assert coerce_decimal("1500.50") == Decimal("1500.50")
    assert coerce_decimal(12) == Decimal("12")
    assert coerce_decimal(None) == Decimal("0")
