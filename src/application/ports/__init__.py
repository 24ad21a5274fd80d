"""Application ports package."""

from .database import DatabaseEnginePort
from .expense_store import ExpenseStorePort

__all__ = [
    "DatabaseEnginePort",
    "ExpenseStorePort",
]
