"""Coordinator publishing monthly aggregates to the presentation layer.

Reductions run on an executor; their completions are queued and applied on
the thread that reads the views (or calls ``drain``), so cached aggregates
and published events only ever change on that owner thread.

Each surface (daily, category) moves ``IDLE -> COMPUTING -> IDLE``. A
recompute request for a surface that is already computing is dropped, and a
finished computation is published only if its month and fingerprint still
match the current selection and nothing was invalidated since it started;
otherwise it is discarded and the surface is recomputed for the current
selection.
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from functools import partial
import queue
import threading
from typing import Any, Callable

from src.application.ports.expense_store import ExpenseStorePort
from src.application.use_cases.aggregate_cache import AggregateCache, Surface
from src.application.use_cases.change_events import (
    AGGREGATES_PUBLISHED,
    CATEGORIES_CHANGED,
    EXPENSES_CHANGED,
    MONTH_SELECTED,
    Event,
    EventBus,
)
from src.domain.constants import RECENT_SAMPLE_SIZE
from src.domain.models import (
    Category,
    CategoryTotals,
    DailyTotals,
    Expense,
    YearMonth,
)
from src.domain.services.aggregation import (
    compute_category_totals,
    compute_daily_totals,
)
from src.domain.services.fingerprint import compute_fingerprint
from src.infrastructure.logging.logger import get_app_logger


class SurfaceState(str, Enum):
    IDLE = "idle"
    COMPUTING = "computing"


@dataclass(frozen=True)
class AggregationSnapshot:
    """Inputs captured when a recomputation starts."""

    month: YearMonth
    fingerprint: int
    month_expenses: list[Expense]
    categories: list[Category]
    generation: int = 0


def compute_surface(surface: Surface, snapshot: AggregationSnapshot, logger=None):
    """Run the reduction backing ``surface`` on a snapshot."""
    if surface is Surface.DAILY:
        return compute_daily_totals(snapshot.month_expenses, snapshot.month)
    return compute_category_totals(
        snapshot.month_expenses,
        snapshot.categories,
        snapshot.month,
        logger,
    )


class ExpenseSummaryCoordinator:
    """Keep daily and category aggregates in step with store and month."""

    def __init__(
        self,
        store: ExpenseStorePort,
        event_bus: EventBus | None = None,
        executor: Executor | None = None,
        dispatch: Callable[[Callable[[], None]], None] | None = None,
        cache: AggregateCache | None = None,
        logger=None,
        month: YearMonth | None = None,
        sample_size: int = RECENT_SAMPLE_SIZE,
    ) -> None:
        """Initialize the coordinator.

        Args:
            store: Port providing expenses and categories.
            event_bus: Channel carrying change notifications.
            executor: Runs reductions off the calling thread. A thread pool
                with one worker per surface is created when omitted.
            dispatch: Hands completion callbacks to the thread owning
                presentation state. When omitted, callbacks are queued and
                run by ``drain`` on the reading thread.
            cache: Aggregate cache owned by this coordinator.
            logger: Optional logger compatible with logging.Logger-like API.
            month: Initially selected month, the current one by default.
            sample_size: Recent expenses sampled by the fingerprint.
        """
        self._store = store
        self._event_bus = event_bus or EventBus()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=len(Surface),
            thread_name_prefix="kakeibo-aggregates",
        )
        self._completions: queue.SimpleQueue = queue.SimpleQueue()
        self._dispatch = dispatch or self._completions.put
        self._cache = cache or AggregateCache()
        self._logger = logger or get_app_logger()
        self._month = month or YearMonth.current()
        self._sample_size = sample_size
        self._states = {surface: SurfaceState.IDLE for surface in Surface}
        self._published: dict[Surface, tuple[YearMonth, Any]] = {}
        self._lock = threading.RLock()
        self._closed = False
        self._generation = 0
        self._event_bus.subscribe(EXPENSES_CHANGED, self._on_expenses_changed)
        self._event_bus.subscribe(
            CATEGORIES_CHANGED,
            self._on_categories_changed,
        )

    @property
    def selected_month(self) -> YearMonth:
        return self._month

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def state(self, surface: Surface) -> SurfaceState:
        with self._lock:
            return self._states[surface]

    def subscribe(self, handler: Callable[[Event], None]) -> None:
        """Register a presentation handler for published aggregates."""
        self._event_bus.subscribe(AGGREGATES_PUBLISHED, handler)

    def start(self) -> list[Future]:
        """Compute every surface for the initial display."""
        return self._request_all()

    def select_month(self, month: YearMonth) -> bool:
        """Switch the selected month and recompute every surface.

        Returns:
            bool: False when ``month`` was already selected.
        """
        with self._lock:
            if month == self._month:
                return False
            previous = self._month
            self._month = month
            self._invalidate()
        self._logger.info(f"Selected month changed from {previous} to {month}")
        self._event_bus.publish(
            MONTH_SELECTED,
            {"month": month, "previous": previous},
        )
        self._request_all()
        return True

    def refresh(self, force: bool = False) -> bool:
        """Re-read the store and recompute when its fingerprint moved.

        Args:
            force: Recompute even when the fingerprint is unchanged.

        Returns:
            bool: True when a recomputation was triggered.
        """
        expenses = self._store.list_all()
        fingerprint = compute_fingerprint(expenses, self._sample_size)
        with self._lock:
            changed = force or fingerprint != self._cache.fingerprint
            if changed:
                self._invalidate()
        if changed:
            self._request_all()
        return changed

    def request_recompute(self, surface: Surface) -> Future | None:
        """Start a background recomputation for ``surface``.

        Returns:
            Future | None: The submitted computation, or None when the
            surface is already computing or the coordinator is closed.
        """
        with self._lock:
            if self._closed:
                return None
            if self._states[surface] is SurfaceState.COMPUTING:
                self._logger.debug(
                    f"Skipped {surface.value} recompute: already computing"
                )
                return None
            self._states[surface] = SurfaceState.COMPUTING
            try:
                snapshot = self._take_snapshot()
                future = self._executor.submit(
                    compute_surface,
                    surface,
                    snapshot,
                    self._logger,
                )
            except Exception:
                self._states[surface] = SurfaceState.IDLE
                raise
        self._logger.debug(
            f"Recomputing {surface.value} totals for {snapshot.month}"
        )
        future.add_done_callback(
            lambda done: self._dispatch(
                partial(self._complete, surface, snapshot, done)
            )
        )
        return future

    def ensure_current(self) -> list[Future]:
        """Request every idle surface with nothing published for the month.

        Returns:
            list[Future]: Computations started by this call.
        """
        self.drain()
        with self._lock:
            missing = [
                surface
                for surface in Surface
                if self._states[surface] is SurfaceState.IDLE
                and self._published_value(surface) is None
            ]
        futures = []
        for surface in missing:
            future = self.request_recompute(surface)
            if future is not None:
                futures.append(future)
        return futures

    def drain(self) -> int:
        """Apply queued completions on the calling thread.

        Returns:
            int: Number of completions applied.
        """
        applied = 0
        while True:
            try:
                callback = self._completions.get_nowait()
            except queue.Empty:
                return applied
            callback()
            applied += 1

    def daily_totals(self) -> DailyTotals:
        """Return daily totals for the selected month, recomputing if stale."""
        by_day = self._read_through(Surface.DAILY)
        return DailyTotals(
            by_day=dict(by_day),
            is_computing=self.state(Surface.DAILY) is SurfaceState.COMPUTING,
        )

    def category_totals(self) -> CategoryTotals:
        """Return category totals for the selected month, recomputing if stale."""
        return self._read_through(Surface.CATEGORY)

    def daily_view(self) -> DailyTotals:
        """Return the last published daily totals for the selected month.

        Queued completions are applied first. The mapping is empty until a
        computation for the selected month has completed.
        """
        self.drain()
        with self._lock:
            by_day = self._published_value(Surface.DAILY) or {}
            return DailyTotals(
                by_day=dict(by_day),
                is_computing=(
                    self._states[Surface.DAILY] is SurfaceState.COMPUTING
                ),
            )

    def category_view(self) -> CategoryTotals | None:
        """Return the last published category totals for the selected month."""
        self.drain()
        with self._lock:
            return self._published_value(Surface.CATEGORY)

    def close(self) -> None:
        """Stop listening for changes and release the owned executor."""
        with self._lock:
            self._closed = True
        self._event_bus.unsubscribe(EXPENSES_CHANGED, self._on_expenses_changed)
        self._event_bus.unsubscribe(
            CATEGORIES_CHANGED,
            self._on_categories_changed,
        )
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def _invalidate(self) -> None:
        """Drop cached aggregates and outdate computations in flight."""
        self._cache.invalidate()
        self._generation += 1

    def _request_all(self) -> list[Future]:
        futures = []
        for surface in Surface:
            future = self.request_recompute(surface)
            if future is not None:
                futures.append(future)
        return futures

    def _take_snapshot(self) -> AggregationSnapshot:
        expenses = self._store.list_all()
        categories = self._store.list_categories()
        fingerprint = compute_fingerprint(expenses, self._sample_size)
        if self._cache.sync(self._month, fingerprint):
            self._logger.debug(f"Aggregate cache invalidated for {self._month}")
        month_expenses = self._cache.month_expenses.get(
            self._month,
            lambda: expenses,
        )
        return AggregationSnapshot(
            month=self._month,
            fingerprint=fingerprint,
            month_expenses=month_expenses,
            categories=categories,
            generation=self._generation,
        )

    def _read_through(self, surface: Surface):
        self.drain()
        with self._lock:
            snapshot = self._take_snapshot()
            value = self._cache.get(surface)
            if value is not None:
                return value
            value = compute_surface(surface, snapshot, self._logger)
            self._cache.put(surface, value)
            self._published[surface] = (snapshot.month, value)
        self._event_bus.publish(
            AGGREGATES_PUBLISHED,
            {"surface": surface, "month": snapshot.month, "value": value},
        )
        return value

    def _published_value(self, surface: Surface):
        entry = self._published.get(surface)
        if entry is None or entry[0] != self._month:
            return None
        return entry[1]

    def _complete(
        self,
        surface: Surface,
        snapshot: AggregationSnapshot,
        future: Future,
    ) -> None:
        with self._lock:
            self._states[surface] = SurfaceState.IDLE
            value = future.result()
            current = (
                snapshot.generation == self._generation
                and snapshot.month == self._month
                and self._cache.matches(snapshot.month, snapshot.fingerprint)
            )
            if current:
                self._cache.put(surface, value)
                self._published[surface] = (snapshot.month, value)
        if not current:
            self._logger.info(
                f"Discarded stale {surface.value} totals for {snapshot.month}"
            )
            self.request_recompute(surface)
            return
        self._logger.info(
            f"Published {surface.value} totals for {snapshot.month}"
        )
        self._event_bus.publish(
            AGGREGATES_PUBLISHED,
            {"surface": surface, "month": snapshot.month, "value": value},
        )

    def _on_expenses_changed(self, event: Event) -> None:
        fingerprint = event.payload.get("fingerprint")
        with self._lock:
            if fingerprint is not None and fingerprint == self._cache.fingerprint:
                return
            self._invalidate()
        self._logger.info(
            f"Expenses changed (fingerprint={fingerprint}); recomputing"
        )
        self._request_all()

    def _on_categories_changed(self, event: Event) -> None:
        with self._lock:
            self._invalidate()
        self._logger.info(
            f"Categories changed ({event.payload.get('reason')}); recomputing"
        )
        self._request_all()


__all__ = [
    "SurfaceState",
    "AggregationSnapshot",
    "ExpenseSummaryCoordinator",
    "compute_surface",
]
