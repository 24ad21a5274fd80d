"""Use case computing a month's daily and category totals in one pass."""

from dataclasses import dataclass

from src.application.ports.expense_store import ExpenseStorePort
from src.domain.models import CategoryTotals, DailyTotals, YearMonth
from src.domain.services.aggregation import (
    compute_category_totals,
    compute_daily_totals,
    deleted_category_usage,
    filter_month,
    orphaned_category_usage,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class MonthlySummary:
    """Aggregates of one month."""

    month: YearMonth
    daily: DailyTotals
    categories: CategoryTotals
    expense_count: int


class GetMonthlySummaryUseCase:
    """Compute the monthly summary directly from the store."""

    def __init__(self, store: ExpenseStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, month: YearMonth) -> MonthlySummary:
        """Return daily and category totals for ``month``."""
        expenses = self._store.list_all()
        categories = self._store.list_categories()
        month_expenses = filter_month(expenses, month)
        self._logger.info(
            f"Summarizing {len(month_expenses)} of {len(expenses)} expenses "
            f"for {month}"
        )
        for category_id, count in orphaned_category_usage(
            month_expenses,
            categories,
        ):
            self._logger.warning(
                f"{count} expenses in {month} reference missing category "
                f"{category_id}"
            )
        for category_id, name, count in deleted_category_usage(
            month_expenses,
            categories,
        ):
            self._logger.info(
                f"{count} expenses in {month} use deleted category "
                f"{name} (id={category_id})"
            )
        return MonthlySummary(
            month=month,
            daily=DailyTotals(by_day=compute_daily_totals(month_expenses, month)),
            categories=compute_category_totals(month_expenses, categories, month),
            expense_count=len(month_expenses),
        )


__all__ = ["GetMonthlySummaryUseCase", "MonthlySummary"]
