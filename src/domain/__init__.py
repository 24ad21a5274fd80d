"""Domain package for expense records, categories and aggregates."""

from .constants import DEFAULT_USER_ID, MAX_EXPENSE_AMOUNT, RECENT_SAMPLE_SIZE
from .errors import (
    CategoryNotVisible,
    ExpenseValidationError,
    FutureDate,
    InvalidAmount,
    StoreWriteError,
)
from .models import (
    Category,
    CategoryTotalRow,
    CategoryTotals,
    DailyTotals,
    Expense,
    ExpenseDraft,
    YearMonth,
)
from .policies import visible_categories, visible_category_ids
from .services import (
    build_expense_draft,
    compute_category_totals,
    compute_daily_totals,
    compute_fingerprint,
    day_key,
    filter_month,
    format_amount_input,
    truncate_note,
)

__all__ = [
    "DEFAULT_USER_ID",
    "MAX_EXPENSE_AMOUNT",
    "RECENT_SAMPLE_SIZE",
    "CategoryNotVisible",
    "ExpenseValidationError",
    "FutureDate",
    "InvalidAmount",
    "StoreWriteError",
    "Category",
    "CategoryTotalRow",
    "CategoryTotals",
    "DailyTotals",
    "Expense",
    "ExpenseDraft",
    "YearMonth",
    "visible_categories",
    "visible_category_ids",
    "build_expense_draft",
    "compute_category_totals",
    "compute_daily_totals",
    "compute_fingerprint",
    "day_key",
    "filter_month",
    "format_amount_input",
    "truncate_note",
]
