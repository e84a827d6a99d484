"""
In-Memory Storage

The expense list lives in a tuple that is swapped for a new tuple on every
mutation. Readers that grabbed the previous list keep a consistent snapshot.

Used directly by tests and as the fallback when the data file is unusable.
JsonFileExpenseRepository builds on it and adds persistence.
"""

from collections import deque
from datetime import datetime
from typing import Iterable, Optional

from expense_tracker.models.audit import AuditEvent
from expense_tracker.models.expense import Expense, ExpenseFormData
from expense_tracker.services.storage.interface import (
    AuditStorageInterface,
    ExpenseRepositoryInterface,
    NotFoundError,
    StorageError,
)
from expense_tracker.utils.formatters import parse_amount


class InMemoryExpenseRepository(ExpenseRepositoryInterface):
    """
    Expense repository backed by an in-process list.

    Constructed once with the initial dataset (e.g. sample data).
    """

    def __init__(self, initial_expenses: Iterable[Expense] = ()):
        self._expenses: tuple[Expense, ...] = tuple(initial_expenses)

    # ---------- persistence hook ----------

    def _commit(self, expenses: tuple[Expense, ...]) -> None:
        """Install a new list value. Subclasses persist it first."""
        self._expenses = expenses

    # ---------- helpers ----------

    @staticmethod
    def _fields_from_form(data: ExpenseFormData) -> dict:
        amount = parse_amount(data.amount)
        if amount is None:
            raise StorageError(f"Invalid amount: {data.amount!r}")
        return {
            "date": data.date,
            "amount": amount,
            "category": data.category,
            "description": data.description.strip(),
        }

    # ---------- public API ----------

    def list_all(self) -> list[Expense]:
        return list(self._expenses)

    def get_by_id(self, expense_id: str) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def create(self, data: ExpenseFormData) -> Expense:
        expense = Expense(
            created_at=datetime.now().isoformat(),
            **self._fields_from_form(data),
        )
        self._commit((expense,) + self._expenses)
        return expense

    def update(self, expense_id: str, data: ExpenseFormData) -> Expense:
        existing = self.get_by_id(expense_id)
        if existing is None:
            raise NotFoundError(f"Expense {expense_id} not found")

        updated = existing.model_copy(update=self._fields_from_form(data))
        self._commit(tuple(
            updated if e.id == expense_id else e
            for e in self._expenses
        ))
        return updated

    def delete(self, expense_id: str) -> bool:
        return self.delete_many([expense_id]) > 0

    def delete_many(self, expense_ids: Iterable[str]) -> int:
        ids = set(expense_ids)
        remaining = tuple(e for e in self._expenses if e.id not in ids)
        removed = len(self._expenses) - len(remaining)
        if removed:
            self._commit(remaining)
        return removed


class InMemoryAuditStorage(AuditStorageInterface):
    """Bounded, append-only audit log kept in memory."""

    def __init__(self, max_events: int = 1000):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
