"""Cheap change detection over the expense collection."""

from collections.abc import Collection
import heapq

from src.domain.constants import RECENT_SAMPLE_SIZE
from src.domain.models import Expense


def compute_fingerprint(
    expenses: Collection[Expense],
    sample_size: int = RECENT_SAMPLE_SIZE,
) -> int:
    """Summarize the collection size and its most recently added entries.

    Only the ``sample_size`` expenses with the highest ids contribute their
    id, amount and timestamp, so an edit to an older record goes unnoticed.

    Args:
        expenses: Full expense collection.
        sample_size: Number of recent expenses to sample.

    Returns:
        int: Non-cryptographic fingerprint value.
    """
    recent = heapq.nlargest(sample_size, expenses, key=lambda e: e.id)
    sample = tuple(
        (expense.id, expense.amount, expense.date.timestamp())
        for expense in recent
    )
    return hash((len(expenses), sample))


__all__ = ["compute_fingerprint"]
