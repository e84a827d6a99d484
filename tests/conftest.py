"""Shared fixtures for the Expense Tracker tests."""

from datetime import date

import pytest

from expense_tracker.config import AppSettings
from expense_tracker.models.expense import Category, Expense

from tests.helpers import make_expense


@pytest.fixture
def now() -> date:
    return date(2024, 2, 10)


@pytest.fixture
def two_expenses() -> list[Expense]:
    """The two-record scenario: one January Food, one February Bills."""
    return [
        make_expense("2024-01-15", 50, Category.FOOD, "Groceries", expense_id="a"),
        make_expense("2024-02-01", 30, Category.BILLS, "Phone bill", expense_id="b"),
    ]


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(
        max_expense_amount=1_000_000,
        description_min_length=2,
        description_max_length=200,
        recent_expenses_count=5,
        trend_months=6,
    )
