"""Demo expenses shown to first-time users."""

from datetime import date, datetime, timedelta
from decimal import Decimal

from expense_tracker.models.expense import Category, Expense


# (days ago, amount, category, description)
_SAMPLE_ROWS = [
    (0, "45.50", Category.FOOD, "Grocery shopping at Whole Foods"),
    (1, "120.00", Category.BILLS, "Monthly internet subscription"),
    (2, "25.00", Category.TRANSPORTATION, "Uber ride to airport"),
    (3, "89.99", Category.SHOPPING, "New headphones from Amazon"),
    (5, "15.00", Category.ENTERTAINMENT, "Netflix subscription"),
    (7, "32.50", Category.FOOD, "Dinner at Italian restaurant"),
    (10, "200.00", Category.BILLS, "Electric bill"),
    (15, "60.00", Category.ENTERTAINMENT, "Concert tickets"),
    (20, "18.75", Category.FOOD, "Coffee shop and pastries"),
    (35, "150.00", Category.SHOPPING, "Clothing from H&M"),
]


def build_sample_expenses(today: date) -> list[Expense]:
    """Sample expenses dated relative to `today`, newest first."""
    created_at = datetime.now().isoformat()
    return [
        Expense(
            date=(today - timedelta(days=days_ago)).isoformat(),
            amount=Decimal(amount),
            category=category,
            description=description,
            created_at=created_at,
        )
        for days_ago, amount, category, description in _SAMPLE_ROWS
    ]
