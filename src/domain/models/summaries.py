"""Domain models for monthly expense aggregates."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class DailyTotals:
    """Spending per calendar day for the selected month.

    Attributes:
        by_day: Mapping of ``YYYY-MM-DD`` day-keys to summed amounts. Days
            without expenses have no entry.
        is_computing: Whether a recomputation is in flight.
    """

    by_day: dict[str, Decimal] = field(default_factory=dict)
    is_computing: bool = False

    @property
    def total(self) -> Decimal:
        """Return the month total across all days."""
        return sum(self.by_day.values(), Decimal("0"))

    @property
    def active_days(self) -> int:
        """Return the number of days with at least one expense."""
        return len(self.by_day)

    @property
    def peak_day(self) -> str | None:
        """Return the day-key with the highest total, earliest on ties."""
        if not self.by_day:
            return None
        return max(sorted(self.by_day), key=lambda key: self.by_day[key])

    def sorted_days(self, descending: bool = True) -> list[tuple[str, Decimal]]:
        """Return ``(day_key, total)`` pairs ordered by day."""
        return sorted(self.by_day.items(), reverse=descending)


@dataclass(frozen=True)
class CategoryTotalRow:
    """Total spent in one category for the selected month."""

    category_id: int
    name: str
    amount: Decimal


@dataclass(frozen=True)
class CategoryTotals:
    """Per-category totals for the selected month.

    Attributes:
        rows: One row per known category, sorted by amount descending with
            ties kept in category list order.
        grand_total: Sum of all row amounts.
        unassigned_total: Month spending whose category is missing from the
            category list. It is never part of ``rows``.
    """

    rows: list[CategoryTotalRow] = field(default_factory=list)
    grand_total: Decimal = Decimal("0")
    unassigned_total: Decimal = Decimal("0")


__all__ = ["DailyTotals", "CategoryTotalRow", "CategoryTotals"]
