"""
Tests for the expense repositories.
"""

import json
from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.models.audit import AuditEvent, AuditEventType
from expense_tracker.models.expense import Category, ExpenseFormData
from expense_tracker.services.storage import (
    InMemoryAuditStorage,
    InMemoryExpenseRepository,
    JsonFileExpenseRepository,
    NotFoundError,
    StorageError,
    build_sample_expenses,
)

from tests.helpers import make_expense


def form(**overrides) -> ExpenseFormData:
    values = dict(
        date="2024-02-09",
        amount="12.50",
        category=Category.FOOD,
        description="  Lunch with team  ",
    )
    values.update(overrides)
    return ExpenseFormData(**values)


class TestInMemoryRepository:
    """CRUD behaviour shared by every repository."""

    def test_initial_dataset(self, two_expenses):
        repo = InMemoryExpenseRepository(two_expenses)
        assert [e.id for e in repo.list_all()] == ["a", "b"]

    def test_list_all_returns_copy(self, two_expenses):
        repo = InMemoryExpenseRepository(two_expenses)
        listed = repo.list_all()
        listed.clear()
        assert len(repo.list_all()) == 2

    def test_create_prepends_and_normalizes(self, two_expenses):
        repo = InMemoryExpenseRepository(two_expenses)
        created = repo.create(form())
        assert repo.list_all()[0] == created
        assert created.amount == Decimal("12.50")
        assert created.description == "Lunch with team"
        assert created.id not in {"a", "b"}
        assert created.created_at

    def test_create_assigns_unique_ids(self):
        repo = InMemoryExpenseRepository()
        first = repo.create(form())
        second = repo.create(form())
        assert first.id != second.id

    def test_create_rejects_unparseable_amount(self):
        repo = InMemoryExpenseRepository()
        with pytest.raises(StorageError):
            repo.create(form(amount="twelve"))

    def test_update_keeps_identity(self, two_expenses):
        repo = InMemoryExpenseRepository(two_expenses)
        updated = repo.update("a", form(amount="99", category=Category.OTHER))
        assert updated.id == "a"
        assert updated.created_at == two_expenses[0].created_at
        assert updated.amount == Decimal("99")
        assert updated.category == Category.OTHER
        assert repo.get_by_id("a") == updated

    def test_update_does_not_mutate_old_snapshot(self, two_expenses):
        repo = InMemoryExpenseRepository(two_expenses)
        snapshot = repo.list_all()
        repo.update("a", form(amount="99"))
        assert snapshot[0].amount == Decimal("50")

    def test_update_unknown_raises(self):
        repo = InMemoryExpenseRepository()
        with pytest.raises(NotFoundError):
            repo.update("missing", form())

    def test_delete(self, two_expenses):
        repo = InMemoryExpenseRepository(two_expenses)
        assert repo.delete("a") is True
        assert repo.delete("a") is False
        assert [e.id for e in repo.list_all()] == ["b"]

    def test_delete_many(self, two_expenses):
        repo = InMemoryExpenseRepository(two_expenses)
        assert repo.delete_many(["a", "b", "zzz"]) == 2
        assert repo.list_all() == []

    def test_get_by_id_missing(self):
        assert InMemoryExpenseRepository().get_by_id("nope") is None


class TestJsonFileRepository:
    """Persistence to a local JSON document."""

    def test_seeds_when_missing(self, tmp_path, two_expenses):
        path = tmp_path / "nested" / "expenses.json"
        repo = JsonFileExpenseRepository(path, two_expenses)
        assert path.exists()
        assert [e.id for e in repo.list_all()] == ["a", "b"]

    def test_round_trip_after_mutation(self, tmp_path, two_expenses):
        path = tmp_path / "expenses.json"
        repo = JsonFileExpenseRepository(path, two_expenses)
        created = repo.create(form())
        repo.delete("b")

        reopened = JsonFileExpenseRepository(path, [])
        assert [e.id for e in reopened.list_all()] == [created.id, "a"]
        assert reopened.get_by_id(created.id).amount == Decimal("12.50")

    def test_existing_file_wins_over_initial(self, tmp_path, two_expenses):
        path = tmp_path / "expenses.json"
        JsonFileExpenseRepository(path, two_expenses[:1])
        repo = JsonFileExpenseRepository(path, two_expenses)
        assert [e.id for e in repo.list_all()] == ["a"]

    def test_corrupt_file_falls_back_to_initial(self, tmp_path, two_expenses):
        path = tmp_path / "expenses.json"
        path.write_text("{not json", encoding="utf-8")
        repo = JsonFileExpenseRepository(path, two_expenses)
        assert len(repo.list_all()) == 2

    def test_corrupt_file_is_moved_aside(self, tmp_path, two_expenses):
        """The damaged document survives the first save under another name."""
        path = tmp_path / "expenses.json"
        path.write_text("{not json", encoding="utf-8")
        repo = JsonFileExpenseRepository(path, two_expenses)
        repo.create(form())

        assert repo.corrupt_path.read_text(encoding="utf-8") == "{not json"
        on_disk = json.loads(path.read_text(encoding="utf-8"))
        assert len(on_disk["expenses"]) == 3

    def test_malformed_document_is_moved_aside(self, tmp_path, two_expenses):
        path = tmp_path / "expenses.json"
        path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        repo = JsonFileExpenseRepository(path, two_expenses)
        assert len(repo.list_all()) == 2
        assert json.loads(repo.corrupt_path.read_text(encoding="utf-8")) == [1, 2, 3]

    def test_invalid_records_are_hidden_but_kept(self, tmp_path):
        """A record the app can't load is never dropped from the file."""
        path = tmp_path / "expenses.json"
        legacy = {"id": "bad", "date": "2024-01-01", "amount": 500, "category": "Savings",
                  "description": "Old category", "created_at": "2024-01-01T10:00:00"}
        path.write_text(json.dumps({"expenses": [
            {"id": "ok", "date": "2024-01-01", "amount": 5, "category": "Food",
             "description": "Snack", "created_at": "2024-01-01T10:00:00"},
            legacy,
        ]}), encoding="utf-8")
        repo = JsonFileExpenseRepository(path)
        assert [e.id for e in repo.list_all()] == ["ok"]
        assert repo.unreadable_count == 1

        created = repo.create(form())
        repo.delete("ok")

        on_disk = json.loads(path.read_text(encoding="utf-8"))["expenses"]
        assert [r["id"] for r in on_disk] == [created.id, "bad"]
        assert on_disk[-1] == legacy

        reopened = JsonFileExpenseRepository(path)
        assert [e.id for e in reopened.list_all()] == [created.id]
        assert reopened.unreadable_count == 1

    def test_invalid_dates_survive_loading(self, tmp_path):
        path = tmp_path / "expenses.json"
        JsonFileExpenseRepository(path, [make_expense("not-a-date", 10, expense_id="x")])
        repo = JsonFileExpenseRepository(path)
        assert repo.get_by_id("x").date == "not-a-date"

    def test_write_failure_raises_storage_error(self, tmp_path, two_expenses):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileExpenseRepository(blocker / "expenses.json", two_expenses)


class TestSampleData:
    """First-run demo dataset."""

    def test_sample_dates_relative_to_today(self):
        today = date(2024, 2, 10)
        samples = build_sample_expenses(today)
        assert len(samples) == 10
        assert samples[0].date == "2024-02-10"
        assert samples[-1].date == "2024-01-06"
        assert len({e.id for e in samples}) == 10


class TestAuditStorage:
    """In-memory audit log."""

    def test_recent_events_newest_first(self):
        storage = InMemoryAuditStorage(max_events=2)
        for n in range(3):
            storage.append_event(AuditEvent(
                event_type=AuditEventType.EXPENSE_DELETED,
                description=f"event {n}",
            ))
        assert [e.description for e in storage.get_recent_events()] == ["event 2", "event 1"]
