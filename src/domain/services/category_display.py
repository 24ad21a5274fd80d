"""Lookup of category presentation hints."""

from collections.abc import Iterable

from src.domain.constants import (
    CATEGORY_COLORS,
    CATEGORY_ICONS,
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
    UNKNOWN_CATEGORY_NAME,
)
from src.domain.models import Category


def resolve_category_color(tag: str | None) -> str:
    """Return the hex color for a color tag, gray when unknown."""
    return CATEGORY_COLORS.get(tag or "", CATEGORY_COLORS[DEFAULT_CATEGORY_COLOR])


def resolve_category_icon(tag: str | None) -> str:
    """Return the glyph for an icon tag, a question mark when unknown."""
    return CATEGORY_ICONS.get(tag or "", CATEGORY_ICONS[DEFAULT_CATEGORY_ICON])


def find_category(
    category_id: int,
    categories: Iterable[Category],
) -> Category | None:
    """Return the category with ``category_id`` or None."""
    for category in categories:
        if category.id == category_id:
            return category
    return None


def category_name(category_id: int, categories: Iterable[Category]) -> str:
    """Resolve a display name, including deleted and unknown categories.

    Deleted categories keep their stored name so historical expenses stay
    readable.

    Args:
        category_id: Category referenced by an expense.
        categories: All known categories.

    Returns:
        str: Category name, or a placeholder when the category is missing
        from the list.
    """
    category = find_category(category_id, categories)
    if category is None:
        return UNKNOWN_CATEGORY_NAME
    return category.name


def is_category_deleted(
    category_id: int,
    categories: Iterable[Category],
) -> bool:
    """Return True when the category exists but was logically deleted."""
    category = find_category(category_id, categories)
    return category is not None and not category.active


__all__ = [
    "resolve_category_color",
    "resolve_category_icon",
    "find_category",
    "category_name",
    "is_category_deleted",
]
