"""Use case recording a new expense."""

from dataclasses import dataclass
from datetime import date
import threading
from typing import Callable

from src.application.ports.expense_store import ExpenseStorePort
from src.application.use_cases.change_events import EXPENSES_CHANGED, EventBus
from src.domain.constants import DEFAULT_USER_ID, RECENT_SAMPLE_SIZE
from src.domain.models import Expense
from src.domain.policies import visible_category_ids
from src.domain.services.fingerprint import compute_fingerprint
from src.domain.services.validation import build_expense_draft
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class AddExpenseResult:
    """Outcome of a successful write.

    Attributes:
        expense: Persisted expense with its store-assigned id.
        fingerprint: Fingerprint of the collection after the write.
    """

    expense: Expense
    fingerprint: int


class AddExpenseUseCase:
    """Validate, persist and announce a new expense.

    Validation failures and store errors propagate to the caller; in both
    cases nothing is announced, so cached aggregates stay untouched.
    """

    def __init__(
        self,
        store: ExpenseStorePort,
        event_bus: EventBus | None = None,
        logger=None,
        today: Callable[[], date] = date.today,
        user_id: int = DEFAULT_USER_ID,
        sample_size: int = RECENT_SAMPLE_SIZE,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port persisting expenses.
            event_bus: Channel notified after each successful write.
            logger: Optional logger compatible with logging.Logger-like API.
            today: Returns the current calendar day.
            user_id: Owner identity written with each expense.
            sample_size: Recent expenses sampled by the fingerprint.
        """
        self._store = store
        self._event_bus = event_bus or EventBus()
        self._logger = logger or get_app_logger()
        self._today = today
        self._user_id = user_id
        self._sample_size = sample_size
        self._write_lock = threading.Lock()

    def execute(
        self,
        amount,
        spent_at: date,
        category_id: int,
        note: str | None = "",
    ) -> AddExpenseResult:
        """Record an expense.

        Args:
            amount: Raw amount input.
            spent_at: Date or date-time of the expense.
            category_id: Selected category; must be visible.
            note: Optional note, truncated to 100 characters.

        Returns:
            AddExpenseResult: Persisted expense and the new fingerprint.

        Raises:
            InvalidAmount: If the amount is invalid.
            FutureDate: If the date is after today.
            CategoryNotVisible: If the category cannot receive expenses.
            StoreWriteError: If the store rejects the write.
        """
        with self._write_lock:
            draft = build_expense_draft(
                amount,
                spent_at,
                category_id,
                note,
                visible_category_ids=visible_category_ids(
                    self._store.list_categories()
                ),
                today=self._today(),
                user_id=self._user_id,
            )
            expense_id = self._store.insert(draft)
            expense = draft.to_expense(expense_id)
            fingerprint = compute_fingerprint(
                self._store.list_all(),
                self._sample_size,
            )
        self._logger.info(
            f"Added expense id={expense_id} amount={expense.amount} "
            f"category={expense.category_id}"
        )
        self._event_bus.publish(
            EXPENSES_CHANGED,
            {"fingerprint": fingerprint, "expense_id": expense_id},
        )
        return AddExpenseResult(expense=expense, fingerprint=fingerprint)


__all__ = ["AddExpenseUseCase", "AddExpenseResult"]
