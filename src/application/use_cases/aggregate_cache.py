"""Cache of month-scoped expense subsets and their aggregates.

The cache is a plain owned object: the coordinator holds one instance and
resolves staleness through ``sync`` before every read, so a cached value is
never served for another month or an outdated fingerprint.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.domain.models import Expense, YearMonth
from src.domain.services.aggregation import filter_month


class Surface(str, Enum):
    """Aggregation surfaces shown to the user."""

    DAILY = "daily"
    CATEGORY = "category"


@dataclass
class MonthExpensesCache:
    """Expenses of the last filtered month."""

    month: YearMonth | None = None
    expenses: list[Expense] = field(default_factory=list)

    def get(
        self,
        month: YearMonth,
        loader: Callable[[], Iterable[Expense]],
    ) -> list[Expense]:
        """Return the subset for ``month``, filtering on a miss.

        Args:
            month: Requested month; only year and month must match.
            loader: Returns the full expense collection on a miss.
        """
        if self.month is not None and self.month == month:
            return self.expenses
        self.expenses = filter_month(loader(), month)
        self.month = month
        return self.expenses

    def clear(self) -> None:
        self.month = None
        self.expenses = []


@dataclass
class AggregateCache:
    """Per-surface aggregates keyed by (month, fingerprint)."""

    month: YearMonth | None = None
    fingerprint: int | None = None
    month_expenses: MonthExpensesCache = field(
        default_factory=MonthExpensesCache
    )
    values: dict[Surface, Any] = field(default_factory=dict)

    def sync(self, month: YearMonth, fingerprint: int) -> bool:
        """Align the cache key, clearing everything when it changes.

        Returns:
            bool: True when cached data was invalidated.
        """
        if self.month == month and self.fingerprint == fingerprint:
            return False
        stale = self.month is not None
        self.invalidate()
        self.month = month
        self.fingerprint = fingerprint
        return stale

    def matches(self, month: YearMonth, fingerprint: int) -> bool:
        return self.month == month and self.fingerprint == fingerprint

    def get(self, surface: Surface) -> Any | None:
        return self.values.get(surface)

    def put(self, surface: Surface, value: Any) -> None:
        self.values[surface] = value

    def invalidate(self) -> None:
        """Drop both layers and forget the current key."""
        self.month = None
        self.fingerprint = None
        self.month_expenses.clear()
        self.values.clear()


__all__ = ["Surface", "MonthExpensesCache", "AggregateCache"]
