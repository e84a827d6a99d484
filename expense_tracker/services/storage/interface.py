"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Use in-memory storage for testing
2. Persist to a local JSON document in the app
3. Keep the analytics decoupled from storage entirely

The interface is intentionally simple - just the operations the
expense list needs. Every mutation replaces the stored list with a new
list value; records are never changed in place.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from expense_tracker.models.audit import AuditEvent
from expense_tracker.models.expense import Expense, ExpenseFormData


class ExpenseRepositoryInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def list_all(self) -> list[Expense]:
        """
        Return all expenses in stored order (newest insertions first).

        The returned list is a fresh copy; callers may reorder it freely.
        """
        pass

    @abstractmethod
    def get_by_id(self, expense_id: str) -> Optional[Expense]:
        """
        Retrieve an expense by its ID.

        Returns:
            The expense if found, None otherwise
        """
        pass

    @abstractmethod
    def create(self, data: ExpenseFormData) -> Expense:
        """
        Create an expense from validated form data.

        A fresh id and creation timestamp are assigned, the amount is
        parsed and the description trimmed.

        Returns:
            The stored expense

        Raises:
            StorageError: If the data cannot be stored
        """
        pass

    @abstractmethod
    def update(self, expense_id: str, data: ExpenseFormData) -> Expense:
        """
        Replace date, amount, category and description of an expense.

        The id and creation timestamp never change.

        Raises:
            NotFoundError: If the expense doesn't exist
            StorageError: If the update cannot be stored
        """
        pass

    @abstractmethod
    def delete(self, expense_id: str) -> bool:
        """
        Delete an expense by ID.

        Returns:
            True if an expense was removed, False if the id was unknown
        """
        pass

    @abstractmethod
    def delete_many(self, expense_ids: Iterable[str]) -> int:
        """
        Delete every expense whose id is in `expense_ids`.

        Returns:
            Number of expenses removed
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass
