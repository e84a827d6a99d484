"""
CSV Export

Serializes an already filtered and ordered expense list. Columns:

    Date,Amount,Category,Description

The date is human formatted ("Jan 15, 2024"), the amount has two fixed
decimals, and the description is always quoted with inner quotes doubled.
The formatted date contains a comma, so it is quoted as well.
"""

from typing import Sequence

from expense_tracker.models.expense import Expense
from expense_tracker.utils.formatters import format_date


CSV_HEADERS = ["Date", "Amount", "Category", "Description"]


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def expense_to_row(expense: Expense) -> list[str]:
    return [
        _quote(format_date(expense.date)),
        f"{expense.amount:.2f}",
        expense.category.value,
        _quote(expense.description),
    ]


def expenses_to_csv(expenses: Sequence[Expense]) -> str:
    """Render expenses as CSV text, header first, rows joined by newlines."""
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(expense_to_row(e)) for e in expenses)
    return "\n".join(lines)
