"""SQLAlchemy-backed expense store."""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.expense_store import ExpenseStorePort
from src.domain.constants import DEFAULT_CATEGORIES
from src.domain.errors import StoreWriteError
from src.domain.models import Category, Expense, ExpenseDraft
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


_ID_COLUMN = {
    "sqlite": "INTEGER PRIMARY KEY AUTOINCREMENT",
    "postgresql": "SERIAL PRIMARY KEY",
}

CREATE_CATEGORIES_SQL = """
CREATE TABLE IF NOT EXISTS categories (
    id {id_column},
    name TEXT NOT NULL UNIQUE,
    icon TEXT NOT NULL DEFAULT 'tag.fill',
    color TEXT NOT NULL DEFAULT 'gray',
    is_default INTEGER NOT NULL DEFAULT 0,
    is_visible INTEGER NOT NULL DEFAULT 1,
    is_active INTEGER NOT NULL DEFAULT 1,
    sort_order INTEGER NOT NULL DEFAULT 0
)
"""

CREATE_EXPENSES_SQL = """
CREATE TABLE IF NOT EXISTS expenses (
    id {id_column},
    amount TEXT NOT NULL,
    spent_at TEXT NOT NULL,
    note TEXT NOT NULL DEFAULT '',
    category_id INTEGER NOT NULL,
    user_id INTEGER NOT NULL DEFAULT 1
)
"""

SEED_CATEGORY_SQL = text(
    """
    INSERT INTO categories (
        name, icon, color, is_default, is_visible, is_active, sort_order
    )
    SELECT :name, :icon, :color, 1, 1, 1, :sort_order
    WHERE NOT EXISTS (SELECT 1 FROM categories WHERE name = :name)
    """
)

INSERT_EXPENSE_SQL = text(
    """
    INSERT INTO expenses (amount, spent_at, note, category_id, user_id)
    VALUES (:amount, :spent_at, :note, :category_id, :user_id)
    RETURNING id
    """
)

SELECT_EXPENSES_SQL = text(
    """
    SELECT id, amount, spent_at, note, category_id, user_id
    FROM expenses
    ORDER BY spent_at DESC, id DESC
    """
)

UPDATE_CATEGORY_VISIBILITY_SQL = text(
    """
    UPDATE categories SET is_visible = :is_visible
    WHERE id = :category_id AND is_active = 1
    """
)

DELETE_CATEGORY_SQL = text(
    """
    UPDATE categories SET is_active = 0
    WHERE id = :category_id AND is_default = 0 AND is_active = 1
    """
)

DELETE_EXPENSE_SQL = text("DELETE FROM expenses WHERE id = :expense_id")

SELECT_CATEGORIES_SQL = text(
    """
    SELECT id, name, icon, color, is_default, is_visible, is_active, sort_order
    FROM categories
    ORDER BY sort_order, id
    """
)


class SqlAlchemyExpenseStore(ExpenseStorePort):
    """Expense store backed by SQLAlchemy.

    Amounts are stored as decimal text and dates as ISO-8601 text so values
    survive the round trip exactly on every backend.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the expenses engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def ensure_schema(self) -> None:
        """Create the tables when missing and seed the default categories."""
        engine = self._db_port.get_expenses_engine()
        id_column = _ID_COLUMN.get(engine.dialect.name, _ID_COLUMN["sqlite"])
        with engine.begin() as conn:
            conn.exec_driver_sql(
                CREATE_CATEGORIES_SQL.format(id_column=id_column)
            )
            conn.exec_driver_sql(
                CREATE_EXPENSES_SQL.format(id_column=id_column)
            )
            for name, icon, color, sort_order in DEFAULT_CATEGORIES:
                conn.execute(
                    SEED_CATEGORY_SQL,
                    {
                        "name": name,
                        "icon": icon,
                        "color": color,
                        "sort_order": sort_order,
                    },
                )
        self._logger.info(f"Expense schema ready on {engine.dialect.name}")

    def insert(self, draft: ExpenseDraft) -> int:
        """Persist a draft and return its new id.

        Raises:
            StoreWriteError: If the database rejects the write.
        """
        engine = self._db_port.get_expenses_engine()
        try:
            with engine.begin() as conn:
                expense_id = conn.execute(
                    INSERT_EXPENSE_SQL,
                    {
                        "amount": str(draft.amount),
                        "spent_at": draft.date.isoformat(),
                        "note": draft.note,
                        "category_id": draft.category_id,
                        "user_id": draft.user_id,
                    },
                ).scalar_one()
        except SQLAlchemyError as exc:
            self._logger.error(f"Failed to insert expense: {exc}")
            raise StoreWriteError("Could not save the expense.") from exc
        return int(expense_id)

    def delete_expense(self, expense_id: int) -> bool:
        """Remove an expense.

        Returns:
            bool: True when a row was deleted.

        Raises:
            StoreWriteError: If the database rejects the delete.
        """
        deleted = self._execute_write(
            DELETE_EXPENSE_SQL,
            {"expense_id": expense_id},
            "Could not delete the expense.",
        )
        return deleted > 0

    def set_category_visibility(self, category_id: int, visible: bool) -> bool:
        """Show or hide an active category for new expenses.

        Returns:
            bool: True when an active category was updated.

        Raises:
            StoreWriteError: If the database rejects the update.
        """
        updated = self._execute_write(
            UPDATE_CATEGORY_VISIBILITY_SQL,
            {"category_id": category_id, "is_visible": int(visible)},
            "Could not update the category.",
        )
        return updated > 0

    def delete_category(self, category_id: int) -> bool:
        """Mark a category as deleted, keeping it for existing expenses.

        Default categories are never deleted.

        Returns:
            bool: True when the category was marked deleted.

        Raises:
            StoreWriteError: If the database rejects the update.
        """
        updated = self._execute_write(
            DELETE_CATEGORY_SQL,
            {"category_id": category_id},
            "Could not delete the category.",
        )
        return updated > 0

    def _execute_write(self, statement, params: dict, message: str) -> int:
        engine = self._db_port.get_expenses_engine()
        try:
            with engine.begin() as conn:
                return conn.execute(statement, params).rowcount
        except SQLAlchemyError as exc:
            self._logger.error(f"{message} {exc}")
            raise StoreWriteError(message) from exc

    def list_all(self) -> list[Expense]:
        """Return every stored expense, newest first."""
        engine = self._db_port.get_expenses_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_EXPENSES_SQL).all()
        return [
            Expense(
                id=row.id,
                amount=coerce_decimal(row.amount),
                date=datetime.fromisoformat(row.spent_at),
                note=row.note or "",
                category_id=row.category_id,
                user_id=row.user_id,
            )
            for row in rows
        ]

    def list_categories(self) -> list[Category]:
        """Return every category ordered by sort order, then id."""
        engine = self._db_port.get_expenses_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_CATEGORIES_SQL).all()
        return [
            Category(
                id=row.id,
                name=row.name,
                icon=row.icon,
                color=row.color,
                visible=bool(row.is_visible),
                active=bool(row.is_active),
                is_default=bool(row.is_default),
                sort_order=row.sort_order,
            )
            for row in rows
        ]


__all__ = ["SqlAlchemyExpenseStore"]
