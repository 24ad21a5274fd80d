"""CLI adapter printing a month's daily and category totals."""

import os

from src.domain.models import YearMonth
from src.infrastructure.container import build_monthly_summary_use_case
from src.infrastructure.logging.logger import get_app_logger


def _parse_month(value: str | None, logger) -> YearMonth:
    """Parse a ``YYYY-MM`` label, falling back to the current month.

    Args:
        value: Month label from the environment.
        logger: Logger used for warnings.

    Returns:
        YearMonth: Parsed month, or the current one when missing or invalid.
    """
    if not value:
        return YearMonth.current()
    try:
        return YearMonth.parse(value)
    except ValueError:
        logger.warning(f"Invalid month '{value}'. Expected format YYYY-MM.")
        return YearMonth.current()


def main() -> None:
    """Print the summary of ``KAKEIBO_MONTH`` (current month by default)."""
    logger = get_app_logger()
    month = _parse_month(os.getenv("KAKEIBO_MONTH"), logger)
    summary = build_monthly_summary_use_case().execute(month)

    print(f"Summary for {summary.month} ({summary.expense_count} expenses)")
    print(f"Total: {summary.daily.total}")
    print("Daily totals:")
    for key, total in summary.daily.sorted_days(descending=False):
        print(f"  {key}  {total}")
    print("Category totals:")
    for row in summary.categories.rows:
        print(f"  {row.name:<20} {row.amount}")
    if summary.categories.unassigned_total:
        print(f"  {'(unknown category)':<20} {summary.categories.unassigned_total}")


if __name__ == "__main__":  # pragma: no cover
    main()
