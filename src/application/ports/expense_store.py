"""Port for durable expense storage."""

from typing import Protocol

from src.domain.models import Category, Expense, ExpenseDraft


class ExpenseStorePort(Protocol):
    """Port exposing persistence of expenses and read access to categories.

    The store owns identity assignment. Implementations raise
    ``StoreWriteError`` when a write cannot be persisted.
    """

    def insert(self, draft: ExpenseDraft) -> int:
        """Persist a validated draft and return its new id."""

    def delete_expense(self, expense_id: int) -> bool:
        """Remove an expense and report whether it existed."""

    def set_category_visibility(self, category_id: int, visible: bool) -> bool:
        """Show or hide an active category for new expenses."""

    def delete_category(self, category_id: int) -> bool:
        """Logically delete a non-default category."""

    def list_all(self) -> list[Expense]:
        """Return every stored expense, in no particular order."""

    def list_categories(self) -> list[Category]:
        """Return all categories, hidden and deleted ones included."""


__all__ = ["ExpenseStorePort"]
