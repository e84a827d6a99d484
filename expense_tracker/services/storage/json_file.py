"""
JSON File Storage

Persists the expense list as a single JSON document:

    {"expenses": [{...}, {...}]}

DESIGN DECISION: The document is read once at startup and rewritten in full
after every mutation. Writes go to a temp file that then replaces the real
one, so a crash mid-write never leaves a half-written document behind.

Unreadable data never blocks the app and is never thrown away:
- A corrupt document is moved aside to `<name>.corrupt` and the store
  starts over from the initial dataset.
- Individual records that fail validation (e.g. a category label this
  version doesn't know) are kept verbatim and written back on every save.
  They are not visible to the app, so derived totals undercount them.
Both cases are logged.
"""

import json
from pathlib import Path
from typing import Any, Iterable

import structlog
from pydantic import ValidationError

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import StorageError
from expense_tracker.services.storage.memory import InMemoryExpenseRepository


logger = structlog.get_logger(__name__)


class JsonFileExpenseRepository(InMemoryExpenseRepository):
    """Expense repository persisted to a local JSON file."""

    def __init__(self, path: Path, initial_expenses: Iterable[Expense] = ()):
        self.path = Path(path)
        self._unreadable: list[Any] = []
        super().__init__(self._load(tuple(initial_expenses)))

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".corrupt")

    @property
    def unreadable_count(self) -> int:
        """Stored records that are preserved but could not be loaded."""
        return len(self._unreadable)

    # ---------- lifecycle ----------

    def _load(self, initial: tuple[Expense, ...]) -> tuple[Expense, ...]:
        if not self.path.exists():
            logger.info(
                "expense_store_initialized",
                path=str(self.path),
                seeded=len(initial),
            )
            self._write(initial)
            return initial

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(
                "expense_store_unreadable",
                path=str(self.path),
                error=str(e),
            )
            return self._start_over(initial)

        records = data.get("expenses") if isinstance(data, dict) else None
        if not isinstance(records, list):
            logger.warning("expense_store_malformed", path=str(self.path))
            return self._start_over(initial)

        expenses = []
        for index, record in enumerate(records):
            try:
                expenses.append(Expense.model_validate(record))
            except ValidationError as e:
                logger.warning(
                    "expense_record_unreadable",
                    path=str(self.path),
                    index=index,
                    error_count=e.error_count(),
                )
                self._unreadable.append(record)
        return tuple(expenses)

    def _start_over(self, initial: tuple[Expense, ...]) -> tuple[Expense, ...]:
        """Move the damaged document aside and seed a fresh one."""
        try:
            self.path.replace(self.corrupt_path)
        except OSError as e:
            raise StorageError(
                f"Could not move unreadable {self.path} aside: {e}"
            ) from e
        logger.warning(
            "expense_store_quarantined",
            path=str(self.path),
            moved_to=str(self.corrupt_path),
        )
        self._write(initial)
        return initial

    # ---------- core IO ----------

    def _write(self, expenses: tuple[Expense, ...]) -> None:
        records = [e.model_dump(mode="json") for e in expenses]
        payload = {"expenses": records + self._unreadable}
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            tmp.replace(self.path)
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}") from e

    def _commit(self, expenses: tuple[Expense, ...]) -> None:
        self._write(expenses)
        super()._commit(expenses)
