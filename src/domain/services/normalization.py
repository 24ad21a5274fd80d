"""Domain normalization helpers for expense input."""

import re

from src.domain.constants import (
    MAX_AMOUNT_FRACTION_DIGITS,
    MAX_AMOUNT_INTEGER_DIGITS,
    MAX_NOTE_LENGTH,
)

_NON_AMOUNT_CHARS = re.compile(r"[^0-9.]")


def format_amount_input(raw: str | None) -> str:
    """Shape free-form amount input into a parseable decimal string.

    Only digits and a single decimal point survive. Extra points are folded
    into the fractional part, the fraction is cut to two digits and the
    integer part to ten digits. Shaping an already shaped value returns it
    unchanged.

    Args:
        raw: Text typed by the user.

    Returns:
        str: Shaped amount text, possibly empty.
    """
    if not raw:
        return ""
    filtered = _NON_AMOUNT_CHARS.sub("", raw)
    integer_part, sep, fraction = filtered.partition(".")
    integer_part = integer_part[:MAX_AMOUNT_INTEGER_DIGITS]
    if not sep:
        return integer_part
    fraction = fraction.replace(".", "")[:MAX_AMOUNT_FRACTION_DIGITS]
    return f"{integer_part}.{fraction}"


def truncate_note(note: str | None) -> str:
    """Trim surrounding whitespace and keep at most 100 characters.

    Args:
        note: Raw note text.

    Returns:
        str: Note ready for persistence.
    """
    if not note:
        return ""
    return note.strip()[:MAX_NOTE_LENGTH]


__all__ = ["format_amount_input", "truncate_note"]
