"""Domain models package."""

from .expenses import Category, Expense, ExpenseDraft, YearMonth
from .summaries import CategoryTotalRow, CategoryTotals, DailyTotals

__all__ = [
    "Category",
    "Expense",
    "ExpenseDraft",
    "YearMonth",
    "CategoryTotalRow",
    "CategoryTotals",
    "DailyTotals",
]
