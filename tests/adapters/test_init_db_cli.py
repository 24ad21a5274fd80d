"""Tests for the init_db_cli adapter."""

from unittest.mock import MagicMock

from src.adapters import init_db_cli
from src.domain.models import Category


def test_main_prepares_store_and_lists_categories(monkeypatch, capsys):
    """The CLI should build the store and print every category."""
    fake_logger = MagicMock()
    fake_store = MagicMock()
    fake_store.list_categories.return_value = [
        Category(id=1, name="Food"),
        Category(id=4, name="Rent", visible=False),
    ]
    monkeypatch.setattr(init_db_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(init_db_cli, "build_expense_store", lambda: fake_store)

    init_db_cli.main()

    output = capsys.readouterr().out.splitlines()
    assert output == ["  1  Food", "  4  Rent (hidden)"]
    fake_logger.info.assert_called_once()
