"""Errors raised at the expense write boundary."""


class ExpenseValidationError(ValueError):
    """Base class for expense validation failures."""


class InvalidAmount(ExpenseValidationError):
    """Amount is not a positive number within the accepted range."""


class FutureDate(ExpenseValidationError):
    """Expense date falls after the current calendar day."""


class CategoryNotVisible(ExpenseValidationError):
    """Category is unknown or hidden from new-expense selection."""


class StoreWriteError(RuntimeError):
    """The underlying store failed to persist an expense."""


__all__ = [
    "ExpenseValidationError",
    "InvalidAmount",
    "FutureDate",
    "CategoryNotVisible",
    "StoreWriteError",
]
