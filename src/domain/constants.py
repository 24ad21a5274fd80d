"""Domain constants for expense tracking."""

from decimal import Decimal

DEFAULT_USER_ID = 1

MAX_EXPENSE_AMOUNT = Decimal("99999999999")
MAX_NOTE_LENGTH = 100
MAX_AMOUNT_INTEGER_DIGITS = 10
MAX_AMOUNT_FRACTION_DIGITS = 2

RECENT_SAMPLE_SIZE = 10

DEFAULT_CATEGORY_COLOR = "gray"
DEFAULT_CATEGORY_ICON = "questionmark.circle"
UNKNOWN_CATEGORY_NAME = "Unknown category"
DELETED_CATEGORY_SUFFIX = " (deleted)"

# Color tags stored with categories, mapped to hex values for charts.
CATEGORY_COLORS = {
    "green": "#34C759",
    "blue": "#007AFF",
    "purple": "#AF52DE",
    "orange": "#FF9500",
    "red": "#FF3B30",
    "yellow": "#FFCC00",
    "pink": "#FF2D55",
    DEFAULT_CATEGORY_COLOR: "#8E8E93",
}

# Icon tags stored with categories, mapped to glyphs for text surfaces.
CATEGORY_ICONS = {
    "fork.knife": "🍴",
    "car.fill": "🚗",
    "gamecontroller.fill": "🎮",
    "house.fill": "🏠",
    "cart.fill": "🛒",
    "tag.fill": "🏷️",
    "trash.circle": "🗑️",
    DEFAULT_CATEGORY_ICON: "❔",
}

# (name, icon, color, sort_order)
DEFAULT_CATEGORIES = (
    ("Food", "fork.knife", "green", 1),
    ("Transport", "car.fill", "blue", 2),
    ("Entertainment", "gamecontroller.fill", "purple", 3),
    ("Rent", "house.fill", "orange", 4),
)


__all__ = [
    "DEFAULT_USER_ID",
    "MAX_EXPENSE_AMOUNT",
    "MAX_NOTE_LENGTH",
    "MAX_AMOUNT_INTEGER_DIGITS",
    "MAX_AMOUNT_FRACTION_DIGITS",
    "RECENT_SAMPLE_SIZE",
    "DEFAULT_CATEGORY_COLOR",
    "DEFAULT_CATEGORY_ICON",
    "UNKNOWN_CATEGORY_NAME",
    "DELETED_CATEGORY_SUFFIX",
    "CATEGORY_COLORS",
    "CATEGORY_ICONS",
    "DEFAULT_CATEGORIES",
]
