"""Domain services package."""

from .aggregation import (
    compute_category_totals,
    compute_daily_totals,
    day_key,
    deleted_category_usage,
    expenses_in_category,
    expenses_on_day,
    filter_month,
    is_in_month,
    orphaned_category_usage,
)
from .category_display import (
    category_name,
    find_category,
    is_category_deleted,
    resolve_category_color,
    resolve_category_icon,
)
from .fingerprint import compute_fingerprint
from .normalization import format_amount_input, truncate_note
from .validation import (
    build_expense_draft,
    parse_amount,
    validate_category_visible,
    validate_not_future,
)

__all__ = [
    "compute_category_totals",
    "compute_daily_totals",
    "day_key",
    "deleted_category_usage",
    "expenses_in_category",
    "expenses_on_day",
    "filter_month",
    "is_in_month",
    "orphaned_category_usage",
    "category_name",
    "find_category",
    "is_category_deleted",
    "resolve_category_color",
    "resolve_category_icon",
    "compute_fingerprint",
    "format_amount_input",
    "truncate_note",
    "build_expense_draft",
    "parse_amount",
    "validate_category_visible",
    "validate_not_future",
]
