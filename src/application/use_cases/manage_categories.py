"""Use case changing category visibility and deleting categories."""

from src.application.ports.expense_store import ExpenseStorePort
from src.application.use_cases.change_events import CATEGORIES_CHANGED, EventBus
from src.domain.services.aggregation import expenses_in_category
from src.infrastructure.logging.logger import get_app_logger


class ManageCategoriesUseCase:
    """Apply category settings and announce them to aggregate consumers.

    Hidden and deleted categories stay in the category list, so expenses
    recorded under them keep their totals and names.
    """

    def __init__(
        self,
        store: ExpenseStorePort,
        event_bus: EventBus | None = None,
        logger=None,
    ) -> None:
        self._store = store
        self._event_bus = event_bus or EventBus()
        self._logger = logger or get_app_logger()

    def set_visibility(self, category_id: int, visible: bool) -> bool:
        """Show or hide a category in the new-expense form.

        Returns:
            bool: True when an active category was updated.
        """
        if not self._store.set_category_visibility(category_id, visible):
            self._logger.warning(
                f"Category id={category_id} is missing or deleted"
            )
            return False
        self._logger.info(
            f"Category id={category_id} visible={visible}"
        )
        self._event_bus.publish(
            CATEGORIES_CHANGED,
            {"category_id": category_id, "reason": "visibility"},
        )
        return True

    def delete(self, category_id: int) -> bool:
        """Logically delete a category.

        Returns:
            bool: False for default, unknown or already deleted categories.
        """
        usage = len(expenses_in_category(self._store.list_all(), category_id))
        if not self._store.delete_category(category_id):
            self._logger.warning(
                f"Category id={category_id} cannot be deleted"
            )
            return False
        if usage:
            self._logger.warning(
                f"Deleted category id={category_id} is still used by "
                f"{usage} expenses"
            )
        self._logger.info(f"Deleted category id={category_id}")
        self._event_bus.publish(
            CATEGORIES_CHANGED,
            {"category_id": category_id, "reason": "deleted"},
        )
        return True


__all__ = ["ManageCategoriesUseCase"]
