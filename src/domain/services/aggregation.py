"""Month-scoped aggregation of expense records.

Both reductions take the full expense set and filter it to the target month
first. Daily totals are sparse (only days with spending); category totals are
dense (one row per known category) and sorted by amount with a stable sort so
equal totals keep the category list order.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.models import (
    Category,
    CategoryTotalRow,
    CategoryTotals,
    Expense,
    YearMonth,
)


def is_in_month(expense: Expense, year: int, month: int) -> bool:
    """Return True when the expense date falls in ``year``/``month``."""
    return expense.date.month == month and expense.date.year == year


def filter_month(
    expenses: Iterable[Expense],
    month: YearMonth,
) -> list[Expense]:
    """Return the expenses dated inside ``month``, keeping input order."""
    return [
        expense
        for expense in expenses
        if is_in_month(expense, month.year, month.month)
    ]


def day_key(value: date) -> str:
    """Return the zero-padded ``YYYY-MM-DD`` key for a date or datetime."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def compute_daily_totals(
    expenses: Iterable[Expense],
    month: YearMonth,
) -> dict[str, Decimal]:
    """Sum expense amounts per calendar day of ``month``.

    Args:
        expenses: Full expense collection.
        month: Target month.

    Returns:
        dict[str, Decimal]: Day-key to total, without zero entries.
    """
    totals: dict[str, Decimal] = {}
    for expense in filter_month(expenses, month):
        key = day_key(expense.date)
        totals[key] = totals.get(key, Decimal("0")) + expense.amount
    return totals


def compute_category_totals(
    expenses: Iterable[Expense],
    categories: Sequence[Category],
    month: YearMonth,
    logger: Logger | None = None,
) -> CategoryTotals:
    """Sum expense amounts per category for ``month``.

    The category list drives the output: every category gets a row, zero
    totals included. Expenses pointing at a category missing from the list
    contribute to no row; their sum is reported as ``unassigned_total``.

    Args:
        expenses: Full expense collection.
        categories: All known categories, hidden ones included.
        month: Target month.
        logger: Optional logger for data-quality warnings.

    Returns:
        CategoryTotals: Dense rows sorted by amount descending.
    """
    by_category: dict[int, Decimal] = {}
    for expense in filter_month(expenses, month):
        by_category[expense.category_id] = (
            by_category.get(expense.category_id, Decimal("0")) + expense.amount
        )

    rows = [
        CategoryTotalRow(
            category_id=category.id,
            name=category.name,
            amount=by_category.pop(category.id, Decimal("0")),
        )
        for category in categories
    ]
    rows.sort(key=lambda row: row.amount, reverse=True)

    unassigned_total = sum(by_category.values(), Decimal("0"))
    if by_category and logger is not None:
        logger.warning(
            f"Excluded {unassigned_total} from category totals for {month}: "
            f"unknown category ids {sorted(by_category)}"
        )
    return CategoryTotals(
        rows=rows,
        grand_total=sum((row.amount for row in rows), Decimal("0")),
        unassigned_total=unassigned_total,
    )


def expenses_on_day(
    expenses: Iterable[Expense],
    day: date,
) -> list[Expense]:
    """Return the expenses recorded on the calendar day of ``day``."""
    key = day_key(day)
    return [expense for expense in expenses if day_key(expense.date) == key]


def expenses_in_category(
    expenses: Iterable[Expense],
    category_id: int,
) -> list[Expense]:
    """Return the expenses assigned to ``category_id``."""
    return [
        expense for expense in expenses if expense.category_id == category_id
    ]


def orphaned_category_usage(
    expenses: Iterable[Expense],
    categories: Iterable[Category],
) -> list[tuple[int, int]]:
    """Count expenses per category id missing from the category list.

    Returns:
        list[tuple[int, int]]: ``(category_id, usage_count)`` pairs, most
        used first.
    """
    known_ids = {category.id for category in categories}
    usage: dict[int, int] = {}
    for expense in expenses:
        if expense.category_id not in known_ids:
            usage[expense.category_id] = usage.get(expense.category_id, 0) + 1
    return sorted(usage.items(), key=lambda item: item[1], reverse=True)


def deleted_category_usage(
    expenses: Iterable[Expense],
    categories: Iterable[Category],
) -> list[tuple[int, str, int]]:
    """Count expenses still assigned to logically deleted categories.

    Returns:
        list[tuple[int, str, int]]: ``(category_id, name, usage_count)``
        for deleted categories in use, most used first.
    """
    deleted = {
        category.id: category.name
        for category in categories
        if not category.active
    }
    usage: dict[int, int] = {}
    for expense in expenses:
        if expense.category_id in deleted:
            usage[expense.category_id] = usage.get(expense.category_id, 0) + 1
    return sorted(
        (
            (category_id, deleted[category_id], count)
            for category_id, count in usage.items()
        ),
        key=lambda item: item[2],
        reverse=True,
    )


__all__ = [
    "is_in_month",
    "filter_month",
    "day_key",
    "compute_daily_totals",
    "compute_category_totals",
    "expenses_on_day",
    "expenses_in_category",
    "orphaned_category_usage",
    "deleted_category_usage",
]
