"""Domain policies package."""

from .category_visibility import (
    is_selectable_category,
    visible_categories,
    visible_category_ids,
)

__all__ = [
    "is_selectable_category",
    "visible_categories",
    "visible_category_ids",
]
