"""Test data builders."""

from decimal import Decimal
from typing import Optional

from expense_tracker.models.expense import Category, Expense


def make_expense(
    date_str: str,
    amount,
    category: Category = Category.FOOD,
    description: str = "Test expense",
    expense_id: Optional[str] = None,
) -> Expense:
    """Build an expense with sensible defaults."""
    kwargs = {}
    if expense_id is not None:
        kwargs["id"] = expense_id
    return Expense(
        date=date_str,
        amount=Decimal(str(amount)),
        category=category,
        description=description,
        created_at="2024-01-01T00:00:00",
        **kwargs,
    )
