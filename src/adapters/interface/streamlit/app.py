"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
import time
from typing import NamedTuple

import altair as alt
import streamlit as st

from src.application.use_cases.add_expense import AddExpenseUseCase
from src.application.use_cases.change_events import EventBus
from src.application.use_cases.delete_expense import DeleteExpenseUseCase
from src.application.use_cases.manage_categories import (
    ManageCategoriesUseCase,
)
from src.application.use_cases.summary_coordinator import (
    ExpenseSummaryCoordinator,
)
from src.domain.constants import DELETED_CATEGORY_SUFFIX
from src.domain.errors import ExpenseValidationError, StoreWriteError
from src.domain.models import (
    Category,
    CategoryTotals,
    DailyTotals,
    Expense,
    YearMonth,
)
from src.domain.policies import visible_categories
from src.domain.services.aggregation import (
    day_key,
    expenses_in_category,
    expenses_on_day,
    filter_month,
)
from src.domain.services.category_display import (
    category_name,
    find_category,
    is_category_deleted,
    resolve_category_color,
    resolve_category_icon,
)
from src.domain.services.normalization import format_amount_input
from src.infrastructure.container import (
    build_add_expense_use_case,
    build_delete_expense_use_case,
    build_expense_store,
    build_manage_categories_use_case,
    build_summary_coordinator,
)
from src.infrastructure.expense_store import SqlAlchemyExpenseStore
from src.infrastructure.logging.logger import get_usage_logger


POLL_TIMEOUT = 0.5
POLL_INTERVAL = 0.05


class Services(NamedTuple):
    store: SqlAlchemyExpenseStore
    coordinator: ExpenseSummaryCoordinator
    add_expense: AddExpenseUseCase
    delete_expense: DeleteExpenseUseCase
    manage_categories: ManageCategoriesUseCase


@st.cache_resource(show_spinner=False)
def _load_services() -> Services:
    """Build the store, coordinator and writers once per server process.

    The coordinator and the writers share one event bus, so every write
    announces itself to the coordinator. The first computation starts here;
    its results are applied by whichever script run reads the views next.
    """
    event_bus = EventBus()
    store = build_expense_store()
    coordinator = build_summary_coordinator(store=store, event_bus=event_bus)
    coordinator.start()
    return Services(
        store=store,
        coordinator=coordinator,
        add_expense=build_add_expense_use_case(store=store, event_bus=event_bus),
        delete_expense=build_delete_expense_use_case(
            store=store,
            event_bus=event_bus,
        ),
        manage_categories=build_manage_categories_use_case(
            store=store,
            event_bus=event_bus,
        ),
    )


def _await_totals(
    coordinator: ExpenseSummaryCoordinator,
    timeout: float,
) -> tuple[DailyTotals, CategoryTotals | None]:
    """Poll the published views until both surfaces settle or time runs out.

    Nothing is computed here; background results are only applied.
    """
    deadline = time.monotonic() + timeout
    while True:
        daily = coordinator.daily_view()
        categories = coordinator.category_view()
        settled = not daily.is_computing and categories is not None
        if settled or time.monotonic() >= deadline:
            return daily, categories
        time.sleep(POLL_INTERVAL)


def _format_currency(value: Decimal) -> str:
    """Format yen amounts, keeping cents only when present."""
    if value == value.to_integral_value():
        return f"¥{value:,.0f}"
    return f"¥{value:,.2f}"


def _month_options(today: date, span: int = 24) -> list[YearMonth]:
    """Return the current month followed by the ``span`` previous months."""
    months = [YearMonth.current(today)]
    for _ in range(span):
        months.append(months[-1].previous())
    return months


def _daily_rows(daily: DailyTotals) -> list[dict[str, str]]:
    """Rows for the daily totals table, most recent day first."""
    return [
        {"Date": key, "Total": _format_currency(total)}
        for key, total in daily.sorted_days(descending=True)
    ]


def _category_label(category_id: int, categories: Sequence[Category]) -> str:
    name = category_name(category_id, categories)
    if is_category_deleted(category_id, categories):
        return f"{name}{DELETED_CATEGORY_SUFFIX}"
    return name


def _expense_rows(
    expenses: Sequence[Expense],
    categories: Sequence[Category],
) -> list[dict[str, str]]:
    """Rows for the expense detail table."""
    return [
        {
            "Date": day_key(expense.date),
            "Category": _category_label(expense.category_id, categories),
            "Amount": _format_currency(expense.amount),
            "Note": expense.note,
        }
        for expense in expenses
    ]


def _category_chart_data(
    totals: CategoryTotals,
    categories: Sequence[Category],
) -> list[dict[str, str | float]]:
    """Altair-ready rows, keeping the totals order."""
    data = []
    for row in totals.rows:
        category = find_category(row.category_id, categories)
        color_tag = category.color if category else None
        icon_tag = category.icon if category else None
        name = row.name
        if is_category_deleted(row.category_id, categories):
            name = f"{name}{DELETED_CATEGORY_SUFFIX}"
        data.append(
            {
                "category": f"{resolve_category_icon(icon_tag)} {name}",
                "amount": float(row.amount),
                "amount_label": _format_currency(row.amount),
                "color": resolve_category_color(color_tag),
            }
        )
    return data


def _submit_expense(
    add_expense: AddExpenseUseCase,
    amount_text: str,
    spent_on: date,
    category_id: int,
    note: str,
) -> tuple[bool, str]:
    """Run the add-expense use case and return a user-facing message."""
    try:
        result = add_expense.execute(
            format_amount_input(amount_text),
            spent_on,
            category_id,
            note,
        )
    except ExpenseValidationError as exc:
        return False, str(exc)
    except StoreWriteError as exc:
        return False, f"{exc} Please try again."
    return True, f"Saved {_format_currency(result.expense.amount)}."


def _render_add_expense_form(
    add_expense: AddExpenseUseCase,
    categories: Sequence[Category],
) -> None:
    choices = visible_categories(categories)
    if not choices:
        st.warning("No visible categories. Enable one in the settings.")
        return
    with st.sidebar.form("add_expense", clear_on_submit=True):
        st.subheader("Add expense")
        amount_text = st.text_input("Amount", placeholder="1000")
        spent_on = st.date_input("Date", value=date.today(), max_value=date.today())
        category = st.selectbox(
            "Category",
            options=choices,
            format_func=lambda c: f"{resolve_category_icon(c.icon)} {c.name}",
        )
        note = st.text_area("Note", max_chars=100)
        submitted = st.form_submit_button("Save")
    if submitted:
        ok, message = _submit_expense(
            add_expense,
            amount_text,
            spent_on,
            category.id,
            note,
        )
        get_usage_logger().info(f"Add expense submitted: ok={ok}")
        if ok:
            st.sidebar.success(message)
        else:
            st.sidebar.error(message)


def _render_category_chart(data: list[dict[str, str | float]]) -> None:
    chart = alt.Chart(alt.Data(values=data)).mark_bar(cornerRadius=4).encode(
        x=alt.X("amount:Q", title=None),
        y=alt.Y("category:N", sort=None, title=None),
        color=alt.Color("color:N", scale=None, legend=None),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
        ],
    )
    st.altair_chart(chart, use_container_width=True)


def _render_category_settings(
    manage_categories: ManageCategoriesUseCase,
    categories: Sequence[Category],
) -> bool:
    """Render visibility toggles and category deletion.

    Returns:
        bool: True when a category setting was changed.
    """
    changed = False
    active = [category for category in categories if category.active]
    with st.sidebar.expander("Categories"):
        for category in active:
            visible = st.checkbox(
                f"{resolve_category_icon(category.icon)} {category.name}",
                value=category.visible,
                key=f"visible_{category.id}",
            )
            if visible != category.visible:
                changed |= manage_categories.set_visibility(category.id, visible)
        deletable = [category for category in active if not category.is_default]
        if not deletable:
            return changed
        target = st.selectbox(
            "Category to delete",
            options=deletable,
            format_func=lambda c: c.name,
            key="delete_category",
        )
        if st.button("Delete category", key="delete_category_button"):
            deleted = manage_categories.delete(target.id)
            get_usage_logger().info(f"Delete category submitted: ok={deleted}")
            changed |= deleted
    return changed


def _render_expense_details(
    services: Services,
    month: YearMonth,
    categories: Sequence[Category],
) -> None:
    """Render the month's expenses, filtered by day and category."""
    st.subheader("Expenses")
    month_expenses = filter_month(services.store.list_all(), month)
    if not month_expenses:
        return
    day_col, category_col = st.columns(2)
    with day_col:
        day = st.selectbox(
            "Day",
            options=[None]
            + sorted({day_key(e.date) for e in month_expenses}, reverse=True),
            format_func=lambda key: key or "All days",
            key="detail_day",
        )
    with category_col:
        category_id = st.selectbox(
            "Category",
            options=[None] + sorted({e.category_id for e in month_expenses}),
            format_func=lambda cid: (
                "All categories" if cid is None else _category_label(cid, categories)
            ),
            key="detail_category",
        )
    selected = month_expenses
    if day is not None:
        selected = expenses_on_day(selected, date.fromisoformat(day))
    if category_id is not None:
        selected = expenses_in_category(selected, category_id)
    st.dataframe(_expense_rows(selected, categories), hide_index=True)
    if not selected:
        return

    target = st.selectbox(
        "Expense to delete",
        options=selected,
        format_func=lambda e: (
            f"{day_key(e.date)} {_format_currency(e.amount)} {e.note}".strip()
        ),
        key="delete_expense",
    )
    if st.button("Delete expense", key="delete_expense_button"):
        try:
            deleted = services.delete_expense.execute(target.id)
        except StoreWriteError as exc:
            st.error(f"{exc} Please try again.")
            return
        get_usage_logger().info(f"Delete expense submitted: ok={deleted}")
        st.rerun()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Kakeibo", layout="wide")
    st.title("Kakeibo")

    services = _load_services()
    coordinator = services.coordinator
    month = st.sidebar.selectbox(
        "Month",
        options=_month_options(date.today()),
        format_func=str,
    )
    coordinator.select_month(month)
    known_categories = services.store.list_categories()
    if _render_category_settings(services.manage_categories, known_categories):
        known_categories = services.store.list_categories()
    _render_add_expense_form(services.add_expense, known_categories)

    coordinator.ensure_current()
    with st.spinner("Updating totals..."):
        daily, categories = _await_totals(coordinator, POLL_TIMEOUT)
    updating = daily.is_computing or categories is None

    total_col, days_col, peak_col = st.columns(3)
    total_col.metric("Month total", _format_currency(daily.total))
    days_col.metric("Days with spending", daily.active_days)
    peak_col.metric("Peak day", daily.peak_day or "n/a")

    daily_col, category_col = st.columns(2)
    with daily_col:
        st.subheader("Daily totals")
        if daily.by_day:
            st.dataframe(_daily_rows(daily), hide_index=True)
        elif updating:
            st.info("Totals are updating...")
        else:
            st.info(f"No expenses recorded in {month}.")
    with category_col:
        st.subheader("By category")
        if categories is None:
            st.caption("Totals are updating...")
        else:
            _render_category_chart(
                _category_chart_data(categories, known_categories)
            )
            if categories.unassigned_total:
                st.caption(
                    "Expenses without a known category: "
                    f"{_format_currency(categories.unassigned_total)}"
                )

    _render_expense_details(services, month, known_categories)
    if updating:
        st.rerun()


if __name__ == "__main__":  # pragma: no cover
    main()
