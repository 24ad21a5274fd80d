"""Tests for the Streamlit app module."""

from concurrent.futures import Future
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

from src.adapters.interface.streamlit import app
from src.application.use_cases import summary_coordinator
from src.application.use_cases.add_expense import AddExpenseResult
from src.application.use_cases.summary_coordinator import (
    ExpenseSummaryCoordinator,
)
from src.domain.errors import FutureDate, StoreWriteError
from src.domain.models import (
    Category,
    CategoryTotalRow,
    CategoryTotals,
    DailyTotals,
    Expense,
    YearMonth,
)


class _FakeAddExpense:
    def __init__(self, error=None) -> None:
        self.error = error
        self.calls = []

    def execute(self, amount, spent_at, category_id, note=""):
        self.calls.append((amount, spent_at, category_id, note))
        if self.error is not None:
            raise self.error
        expense = Expense(
            id=1,
            amount=Decimal(amount),
            date=datetime.combine(spent_at, datetime.min.time()),
            note=note,
            category_id=category_id,
        )
        return AddExpenseResult(expense=expense, fingerprint=0)


def test_format_currency_drops_zero_cents():
    assert app._format_currency(Decimal("1500")) == "¥1,500"
    assert app._format_currency(Decimal("1234567.5")) == "¥1,234,567.50"


def test_month_options_walk_backwards_from_today():
    options = app._month_options(date(2025, 2, 10), span=3)

    assert options == [
        YearMonth(2025, 2),
        YearMonth(2025, 1),
        YearMonth(2024, 12),
        YearMonth(2024, 11),
    ]


def test_daily_rows_are_newest_first():
    daily = DailyTotals(
        by_day={"2025-07-01": Decimal("1500"), "2025-07-09": Decimal("80")}
    )

    assert app._daily_rows(daily) == [
        {"Date": "2025-07-09", "Total": "¥80"},
        {"Date": "2025-07-01", "Total": "¥1,500"},
    ]


def test_category_chart_data_resolves_presentation_tags():
    totals = CategoryTotals(
        rows=[
            CategoryTotalRow(1, "Food", Decimal("1000")),
            CategoryTotalRow(7, "Gone", Decimal("0")),
        ],
        grand_total=Decimal("1000"),
    )
    categories = [Category(id=1, name="Food", icon="fork.knife", color="green")]

    data = app._category_chart_data(totals, categories)

    assert data[0] == {
        "category": "🍴 Food",
        "amount": 1000.0,
        "amount_label": "¥1,000",
        "color": "#34C759",
    }
    assert data[1]["color"] == "#8E8E93"
    assert data[1]["category"] == "❔ Gone"


def test_submit_expense_shapes_amount_and_reports_success():
    fake = _FakeAddExpense()

    ok, message = app._submit_expense(fake, "¥1,500", date(2025, 7, 1), 1, "lunch")

    assert ok is True
    assert message == "Saved ¥1,500."
    assert fake.calls == [("1500", date(2025, 7, 1), 1, "lunch")]


def test_submit_expense_reports_validation_error():
    fake = _FakeAddExpense(error=FutureDate("Expense date 2099-01-01 is in the future."))

    ok, message = app._submit_expense(fake, "10", date(2099, 1, 1), 1, "")

    assert ok is False
    assert "future" in message


def test_submit_expense_reports_store_failure():
    fake = _FakeAddExpense(error=StoreWriteError("Could not save the expense."))

    ok, message = app._submit_expense(fake, "10", date(2025, 7, 1), 1, "")

    assert ok is False
    assert message == "Could not save the expense. Please try again."


def test_category_chart_data_marks_deleted_categories():
    totals = CategoryTotals(
        rows=[CategoryTotalRow(3, "Old hobby", Decimal("300"))],
        grand_total=Decimal("300"),
    )
    categories = [Category(id=3, name="Old hobby", active=False)]

    data = app._category_chart_data(totals, categories)

    assert data[0]["category"] == "🏷️ Old hobby (deleted)"


def test_expense_rows_name_deleted_and_unknown_categories():
    categories = [
        Category(id=1, name="Food"),
        Category(id=3, name="Old hobby", active=False),
    ]
    expenses = [
        Expense(id=1, amount=Decimal("300"), date=datetime(2025, 7, 3, 9), category_id=3, note="paint"),
        Expense(id=2, amount=Decimal("80"), date=datetime(2025, 7, 4), category_id=9),
    ]

    assert app._expense_rows(expenses, categories) == [
        {"Date": "2025-07-03", "Category": "Old hobby (deleted)", "Amount": "¥300", "Note": "paint"},
        {"Date": "2025-07-04", "Category": "Unknown category", "Amount": "¥80", "Note": ""},
    ]


JULY_EXPENSES = [
    Expense(id=1, amount=Decimal("1000"), date=datetime(2025, 7, 1), category_id=1, note="lunch"),
    Expense(id=2, amount=Decimal("500"), date=datetime(2025, 7, 1), category_id=2),
    Expense(id=3, amount=Decimal("300"), date=datetime(2025, 7, 5), category_id=1),
]


def _pick_first(label, options=(), **kwargs):
    return options[0] if options else None


def _fake_streamlit(month: YearMonth, submitted: bool):
    fake_st = MagicMock()
    fake_st.sidebar.selectbox.return_value = month
    fake_st.form_submit_button.return_value = submitted
    fake_st.columns.side_effect = lambda count: [MagicMock() for _ in range(count)]
    fake_st.checkbox.side_effect = lambda label, value=True, key=None: value
    fake_st.selectbox.side_effect = _pick_first
    fake_st.button.return_value = False
    return fake_st


def _services(store, coordinator, add_expense=None, delete_expense=None, manage=None):
    return app.Services(
        store=store,
        coordinator=coordinator,
        add_expense=add_expense or _FakeAddExpense(),
        delete_expense=delete_expense or MagicMock(),
        manage_categories=manage or MagicMock(),
    )


def _settled_coordinator(daily: DailyTotals, categories: CategoryTotals):
    coordinator = MagicMock()
    coordinator.daily_view.return_value = daily
    coordinator.category_view.return_value = categories
    return coordinator


def test_main_renders_selected_month(monkeypatch):
    """main should select the month and render both published surfaces."""
    month = YearMonth(2025, 7)
    fake_st = _fake_streamlit(month, submitted=False)
    store = MagicMock()
    store.list_categories.return_value = [Category(id=1, name="Food")]
    store.list_all.return_value = []
    coordinator = _settled_coordinator(
        DailyTotals(by_day={"2025-07-01": Decimal("1500")}),
        CategoryTotals(
            rows=[CategoryTotalRow(1, "Food", Decimal("1500"))],
            grand_total=Decimal("1500"),
        ),
    )
    add_expense = _FakeAddExpense()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_load_services",
        lambda: _services(store, coordinator, add_expense),
    )

    app.main()

    fake_st.set_page_config.assert_called_once()
    coordinator.select_month.assert_called_once_with(month)
    coordinator.ensure_current.assert_called_once()
    coordinator.daily_totals.assert_not_called()
    coordinator.category_totals.assert_not_called()
    rows, kwargs = fake_st.dataframe.call_args
    assert rows[0] == [{"Date": "2025-07-01", "Total": "¥1,500"}]
    assert kwargs["hide_index"] is True
    fake_st.altair_chart.assert_called_once()
    fake_st.spinner.assert_called_once_with("Updating totals...")
    fake_st.rerun.assert_not_called()
    assert add_expense.calls == []


def test_main_warns_without_visible_categories(monkeypatch):
    """main should skip the form when no category can receive expenses."""
    fake_st = _fake_streamlit(YearMonth(2025, 9), submitted=False)
    store = MagicMock()
    store.list_categories.return_value = [
        Category(id=1, name="Food", visible=False, is_default=True)
    ]
    store.list_all.return_value = []
    coordinator = _settled_coordinator(DailyTotals(), CategoryTotals())
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_services", lambda: _services(store, coordinator))

    app.main()

    fake_st.warning.assert_called_once()
    fake_st.sidebar.form.assert_not_called()
    fake_st.info.assert_called_once_with("No expenses recorded in 2025-09.")


class _UnscheduledExecutor:
    def __init__(self) -> None:
        self.submitted = []

    def submit(self, fn, *args, **kwargs):
        self.submitted.append(fn)
        return Future()


def test_main_never_computes_totals_on_script_thread(monkeypatch):
    """While background work is pending, main shows a placeholder and reruns."""
    month = YearMonth(2025, 7)
    fake_st = _fake_streamlit(month, submitted=False)
    store = MagicMock()
    store.list_categories.return_value = [Category(id=1, name="Food")]
    store.list_all.return_value = list(JULY_EXPENSES)
    computed = []
    monkeypatch.setattr(
        summary_coordinator,
        "compute_surface",
        lambda *args: computed.append(args),
    )
    executor = _UnscheduledExecutor()
    coordinator = ExpenseSummaryCoordinator(
        store,
        executor=executor,
        logger=MagicMock(),
        month=month,
    )
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "POLL_TIMEOUT", 0)
    monkeypatch.setattr(app, "_load_services", lambda: _services(store, coordinator))

    app.main()

    assert computed == []
    assert len(executor.submitted) == 2
    fake_st.info.assert_called_once_with("Totals are updating...")
    fake_st.altair_chart.assert_not_called()
    fake_st.rerun.assert_called_once()


def test_category_settings_toggle_visibility_and_delete(monkeypatch):
    fake_st = _fake_streamlit(YearMonth(2025, 7), submitted=False)
    fake_st.checkbox.side_effect = (
        lambda label, value=True, key=None: False if key == "visible_2" else value
    )
    fake_st.button.side_effect = lambda label, key=None: label == "Delete category"
    manage = MagicMock()
    manage.set_visibility.return_value = True
    manage.delete.return_value = True
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    categories = [
        Category(id=1, name="Food", is_default=True),
        Category(id=2, name="Hobby"),
        Category(id=3, name="Old", active=False),
    ]

    changed = app._render_category_settings(manage, categories)

    assert changed is True
    manage.set_visibility.assert_called_once_with(2, False)
    manage.delete.assert_called_once_with(2)
    delete_options = fake_st.selectbox.call_args.kwargs["options"]
    assert [c.id for c in delete_options] == [2]
    assert fake_st.checkbox.call_count == 2


def test_expense_details_filter_by_day_and_delete(monkeypatch):
    fake_st = _fake_streamlit(YearMonth(2025, 7), submitted=False)

    def choose(label, options=(), **kwargs):
        if kwargs.get("key") == "detail_day":
            return "2025-07-01"
        if kwargs.get("key") == "detail_category":
            return 1
        return _pick_first(label, options)

    fake_st.selectbox.side_effect = choose
    fake_st.button.side_effect = lambda label, key=None: label == "Delete expense"
    store = MagicMock()
    store.list_all.return_value = list(JULY_EXPENSES) + [
        Expense(id=4, amount=Decimal("90"), date=datetime(2025, 8, 1), category_id=1)
    ]
    delete_expense = MagicMock()
    delete_expense.execute.return_value = True
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    services = _services(store, MagicMock(), delete_expense=delete_expense)

    app._render_expense_details(
        services,
        YearMonth(2025, 7),
        [Category(id=1, name="Food"), Category(id=2, name="Fun")],
    )

    day_options = fake_st.selectbox.call_args_list[0].kwargs["options"]
    assert day_options == [None, "2025-07-05", "2025-07-01"]
    rows, _ = fake_st.dataframe.call_args
    assert rows[0] == [
        {"Date": "2025-07-01", "Category": "Food", "Amount": "¥1,000", "Note": "lunch"}
    ]
    delete_expense.execute.assert_called_once_with(1)
    fake_st.rerun.assert_called_once()


def test_expense_details_report_delete_failure(monkeypatch):
    fake_st = _fake_streamlit(YearMonth(2025, 7), submitted=False)
    fake_st.button.return_value = True
    store = MagicMock()
    store.list_all.return_value = list(JULY_EXPENSES)
    delete_expense = MagicMock()
    delete_expense.execute.side_effect = StoreWriteError("Could not delete the expense.")
    monkeypatch.setattr(app, "st", fake_st)
    services = _services(store, MagicMock(), delete_expense=delete_expense)

    app._render_expense_details(services, YearMonth(2025, 7), [])

    fake_st.error.assert_called_once_with(
        "Could not delete the expense. Please try again."
    )
    fake_st.rerun.assert_not_called()
