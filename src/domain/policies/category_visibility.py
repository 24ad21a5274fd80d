"""Policies deciding which categories accept new expenses."""

from collections.abc import Iterable

from src.domain.models import Category


def is_selectable_category(category: Category) -> bool:
    """Return True when the category can receive new expenses."""
    return category.visible and category.active


def visible_categories(categories: Iterable[Category]) -> list[Category]:
    """Return the categories offered for new expenses, in list order."""
    return [c for c in categories if is_selectable_category(c)]


def visible_category_ids(categories: Iterable[Category]) -> set[int]:
    """Return the ids of the categories offered for new expenses."""
    return {c.id for c in visible_categories(categories)}


__all__ = [
    "is_selectable_category",
    "visible_categories",
    "visible_category_ids",
]
