"""Validation rules applied before an expense reaches the store."""

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from src.domain.constants import DEFAULT_USER_ID, MAX_EXPENSE_AMOUNT
from src.domain.errors import CategoryNotVisible, FutureDate, InvalidAmount
from src.domain.models import ExpenseDraft
from src.domain.services.normalization import truncate_note


def parse_amount(raw) -> Decimal:
    """Parse an amount and check it lies in ``(0, 99_999_999_999]``.

    Args:
        raw: Amount as text, int, float or Decimal.

    Returns:
        Decimal: Parsed amount.

    Raises:
        InvalidAmount: If the value is not numeric, not finite or out of range.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidAmount("Amount is required.")
    text = raw.strip() if isinstance(raw, str) else str(raw)
    if not text:
        raise InvalidAmount("Amount is required.")
    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidAmount(f"Amount must be numeric, got {raw!r}.") from exc
    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {raw!r}.")
    if amount <= 0:
        raise InvalidAmount("Amount must be greater than zero.")
    if amount > MAX_EXPENSE_AMOUNT:
        raise InvalidAmount(f"Amount must not exceed {MAX_EXPENSE_AMOUNT}.")
    return amount


def validate_not_future(spent_at: date, today: date | None = None) -> None:
    """Reject dates after today's calendar day.

    Raises:
        FutureDate: If ``spent_at`` is strictly after today.
    """
    today = today or date.today()
    spent_day = spent_at.date() if isinstance(spent_at, datetime) else spent_at
    if spent_day > today:
        raise FutureDate(f"Expense date {spent_day} is in the future.")


def validate_category_visible(
    category_id: int,
    visible_category_ids: Iterable[int],
) -> None:
    """Reject categories that are not offered for new expenses.

    Raises:
        CategoryNotVisible: If the id is not in the visible set.
    """
    if category_id not in set(visible_category_ids):
        raise CategoryNotVisible(
            f"Category {category_id} is not available for new expenses."
        )


def build_expense_draft(
    amount,
    spent_at: date,
    category_id: int,
    note: str | None = "",
    *,
    visible_category_ids: Iterable[int],
    today: date | None = None,
    user_id: int = DEFAULT_USER_ID,
) -> ExpenseDraft:
    """Validate raw input and return a draft ready for the store.

    Rules run in order: amount, date, category. The note is truncated, never
    rejected.

    Args:
        amount: Raw amount input.
        spent_at: Date or date-time of the expense.
        category_id: Selected category.
        note: Optional free text.
        visible_category_ids: Ids of the categories currently visible.
        today: Override for the current calendar day.
        user_id: Owner identity.

    Returns:
        ExpenseDraft: Validated draft.
    """
    parsed_amount = parse_amount(amount)
    validate_not_future(spent_at, today)
    validate_category_visible(category_id, visible_category_ids)
    if not isinstance(spent_at, datetime):
        spent_at = datetime.combine(spent_at, datetime.min.time())
    return ExpenseDraft(
        amount=parsed_amount,
        date=spent_at,
        note=truncate_note(note),
        category_id=category_id,
        user_id=user_id,
    )


__all__ = [
    "parse_amount",
    "validate_not_future",
    "validate_category_visible",
    "build_expense_draft",
]
