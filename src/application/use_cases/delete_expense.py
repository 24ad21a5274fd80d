"""Use case removing a recorded expense."""

import threading

from src.application.ports.expense_store import ExpenseStorePort
from src.application.use_cases.change_events import EXPENSES_CHANGED, EventBus
from src.domain.constants import RECENT_SAMPLE_SIZE
from src.domain.services.fingerprint import compute_fingerprint
from src.infrastructure.logging.logger import get_app_logger


class DeleteExpenseUseCase:
    """Delete an expense and announce the new collection fingerprint."""

    def __init__(
        self,
        store: ExpenseStorePort,
        event_bus: EventBus | None = None,
        logger=None,
        sample_size: int = RECENT_SAMPLE_SIZE,
    ) -> None:
        self._store = store
        self._event_bus = event_bus or EventBus()
        self._logger = logger or get_app_logger()
        self._sample_size = sample_size
        self._write_lock = threading.Lock()

    def execute(self, expense_id: int) -> bool:
        """Delete ``expense_id``.

        Returns:
            bool: False when no such expense existed; nothing is announced.

        Raises:
            StoreWriteError: If the store rejects the delete.
        """
        with self._write_lock:
            if not self._store.delete_expense(expense_id):
                self._logger.warning(f"Expense id={expense_id} not found")
                return False
            fingerprint = compute_fingerprint(
                self._store.list_all(),
                self._sample_size,
            )
        self._logger.info(f"Deleted expense id={expense_id}")
        self._event_bus.publish(
            EXPENSES_CHANGED,
            {"fingerprint": fingerprint, "expense_id": expense_id},
        )
        return True


__all__ = ["DeleteExpenseUseCase"]
