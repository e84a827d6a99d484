"""
Services Package

Storage backends used by the Expense Tracker.
"""

from expense_tracker.services.storage import (
    AuditStorageInterface,
    ExpenseRepositoryInterface,
    InMemoryAuditStorage,
    InMemoryExpenseRepository,
    JsonFileExpenseRepository,
    NotFoundError,
    StorageError,
    build_sample_expenses,
)

__all__ = [
    "AuditStorageInterface",
    "ExpenseRepositoryInterface",
    "InMemoryAuditStorage",
    "InMemoryExpenseRepository",
    "JsonFileExpenseRepository",
    "NotFoundError",
    "StorageError",
    "build_sample_expenses",
]
