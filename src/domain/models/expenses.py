"""Domain models for expense records and categories."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from src.domain.constants import DEFAULT_USER_ID


@dataclass(frozen=True, eq=False)
class Expense:
    """A persisted expense entry.

    Identity is the store-assigned ``id``: two expenses compare equal and
    hash the same when their ids match, whatever their other fields hold.

    Attributes:
        id: Store-assigned identity (``0`` before persistence).
        amount: Positive currency amount.
        date: Date-time of the expense; aggregation uses the calendar day.
        note: Free text, at most 100 characters once trimmed.
        category_id: Identifier of the category the expense belongs to.
        user_id: Owner identity, always ``1`` in single-user mode.
    """

    id: int
    amount: Decimal
    date: datetime
    note: str = ""
    category_id: int = 0
    user_id: int = DEFAULT_USER_ID

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expense):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True)
class ExpenseDraft:
    """A validated expense that has not been persisted yet."""

    amount: Decimal
    date: datetime
    note: str
    category_id: int
    user_id: int = DEFAULT_USER_ID

    def to_expense(self, expense_id: int) -> Expense:
        """Return the persisted expense for the store-assigned id."""
        return Expense(
            id=expense_id,
            amount=self.amount,
            date=self.date,
            note=self.note,
            category_id=self.category_id,
            user_id=self.user_id,
        )


@dataclass(frozen=True)
class Category:
    """Expense category configured from the settings surface.

    Attributes:
        id: Category identity.
        name: Display name.
        icon: Opaque icon tag resolved by the presentation lookup table.
        color: Opaque color tag resolved by the presentation lookup table.
        visible: Whether the category is offered for new expenses.
        active: False once the category has been logically deleted.
        is_default: Whether the category belongs to the seeded defaults.
        sort_order: Position in the category list.
    """

    id: int
    name: str
    icon: str = "tag.fill"
    color: str = "gray"
    visible: bool = True
    active: bool = True
    is_default: bool = False
    sort_order: int = 0


@dataclass(frozen=True, order=True)
class YearMonth:
    """Calendar month selector used to scope aggregations."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        """Return the month containing ``value`` (date or datetime)."""
        return cls(value.year, value.month)

    @classmethod
    def current(cls, today: date | None = None) -> "YearMonth":
        """Return the month containing today (or the given day)."""
        return cls.from_date(today or date.today())

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """Parse a ``YYYY-MM`` label.

        Raises:
            ValueError: If the label is malformed.
        """
        year_text, sep, month_text = value.strip().partition("-")
        if not sep or not year_text.isdigit() or not month_text.isdigit():
            raise ValueError(f"Expected YYYY-MM, got {value!r}")
        return cls(int(year_text), int(month_text))

    def contains(self, value: date) -> bool:
        """Return True when ``value`` falls inside this month."""
        return value.month == self.month and value.year == self.year

    def previous(self) -> "YearMonth":
        if self.month == 1:
            return YearMonth(self.year - 1, 12)
        return YearMonth(self.year, self.month - 1)

    def next(self) -> "YearMonth":
        if self.month == 12:
            return YearMonth(self.year + 1, 1)
        return YearMonth(self.year, self.month + 1)

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def __str__(self) -> str:
        return self.label


__all__ = ["Expense", "ExpenseDraft", "Category", "YearMonth"]
