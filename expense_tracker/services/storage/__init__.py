"""
Storage Services Package

Provides the abstract repository interface and its implementations.
The app persists to a local JSON file; tests use the in-memory variant.
"""

from expense_tracker.services.storage.interface import (
    AuditStorageInterface,
    ExpenseRepositoryInterface,
    NotFoundError,
    StorageError,
)
from expense_tracker.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryExpenseRepository,
)
from expense_tracker.services.storage.json_file import JsonFileExpenseRepository
from expense_tracker.services.storage.sample_data import build_sample_expenses

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "ExpenseRepositoryInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryExpenseRepository",
    "JsonFileExpenseRepository",
    # Seed data
    "build_sample_expenses",
]
