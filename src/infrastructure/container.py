"""Composition root for wiring infrastructure adapters."""

from concurrent.futures import Executor
from typing import Callable

from src.application.ports.database import DatabaseEnginePort
from src.application.use_cases.add_expense import AddExpenseUseCase
from src.application.use_cases.change_events import EventBus
from src.application.use_cases.delete_expense import DeleteExpenseUseCase
from src.application.use_cases.get_monthly_summary import (
    GetMonthlySummaryUseCase,
)
from src.application.use_cases.manage_categories import (
    ManageCategoriesUseCase,
)
from src.application.use_cases.summary_coordinator import (
    ExpenseSummaryCoordinator,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.expense_store import SqlAlchemyExpenseStore
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import TrackerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_expense_store(
    db_port: DatabaseEnginePort | None = None,
) -> SqlAlchemyExpenseStore:
    """Return the expense store with its schema in place."""
    resolved_db = db_port or build_database_adapter()
    store = SqlAlchemyExpenseStore(resolved_db, logger=get_app_logger())
    store.ensure_schema()
    return store


def build_summary_coordinator(
    store: SqlAlchemyExpenseStore | None = None,
    event_bus: EventBus | None = None,
    executor: Executor | None = None,
    dispatch: Callable[[Callable[[], None]], None] | None = None,
) -> ExpenseSummaryCoordinator:
    """Return a coordinator listening on ``event_bus``.

    Completions are queued for the reading thread unless ``dispatch`` hands
    them elsewhere.
    """
    settings = TrackerSettings.from_env()
    return ExpenseSummaryCoordinator(
        store or build_expense_store(),
        event_bus=event_bus,
        executor=executor,
        dispatch=dispatch,
        logger=get_app_logger(),
        sample_size=settings.fingerprint_sample,
    )


def build_add_expense_use_case(
    store: SqlAlchemyExpenseStore | None = None,
    event_bus: EventBus | None = None,
) -> AddExpenseUseCase:
    """Return the add-expense use case publishing on ``event_bus``."""
    settings = TrackerSettings.from_env()
    return AddExpenseUseCase(
        store or build_expense_store(),
        event_bus=event_bus,
        logger=get_app_logger(),
        user_id=settings.user_id,
        sample_size=settings.fingerprint_sample,
    )


def build_delete_expense_use_case(
    store: SqlAlchemyExpenseStore | None = None,
    event_bus: EventBus | None = None,
) -> DeleteExpenseUseCase:
    """Return the delete-expense use case publishing on ``event_bus``."""
    settings = TrackerSettings.from_env()
    return DeleteExpenseUseCase(
        store or build_expense_store(),
        event_bus=event_bus,
        logger=get_app_logger(),
        sample_size=settings.fingerprint_sample,
    )


def build_manage_categories_use_case(
    store: SqlAlchemyExpenseStore | None = None,
    event_bus: EventBus | None = None,
) -> ManageCategoriesUseCase:
    """Return the category settings use case publishing on ``event_bus``."""
    return ManageCategoriesUseCase(
        store or build_expense_store(),
        event_bus=event_bus,
        logger=get_app_logger(),
    )


def build_monthly_summary_use_case(
    store: SqlAlchemyExpenseStore | None = None,
) -> GetMonthlySummaryUseCase:
    """Return the one-shot monthly summary use case."""
    return GetMonthlySummaryUseCase(
        store or build_expense_store(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_expense_store",
    "build_summary_coordinator",
    "build_add_expense_use_case",
    "build_delete_expense_use_case",
    "build_manage_categories_use_case",
    "build_monthly_summary_use_case",
]
