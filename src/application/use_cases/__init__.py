"""Application use cases package."""

from .add_expense import AddExpenseResult, AddExpenseUseCase
from .aggregate_cache import AggregateCache, MonthExpensesCache, Surface
from .change_events import (
    AGGREGATES_PUBLISHED,
    CATEGORIES_CHANGED,
    EXPENSES_CHANGED,
    MONTH_SELECTED,
    Event,
    EventBus,
)
from .delete_expense import DeleteExpenseUseCase
from .get_monthly_summary import GetMonthlySummaryUseCase, MonthlySummary
from .manage_categories import ManageCategoriesUseCase
from .summary_coordinator import ExpenseSummaryCoordinator, SurfaceState

__all__ = [
    "AddExpenseResult",
    "AddExpenseUseCase",
    "AggregateCache",
    "MonthExpensesCache",
    "Surface",
    "AGGREGATES_PUBLISHED",
    "CATEGORIES_CHANGED",
    "EXPENSES_CHANGED",
    "MONTH_SELECTED",
    "Event",
    "EventBus",
    "DeleteExpenseUseCase",
    "GetMonthlySummaryUseCase",
    "ManageCategoriesUseCase",
    "MonthlySummary",
    "ExpenseSummaryCoordinator",
    "SurfaceState",
]
