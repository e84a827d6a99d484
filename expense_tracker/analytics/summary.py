"""
Spending Summary Aggregation

DESIGN DECISION: The summary is a pure function of the expense list and an
explicit reference date. Nothing here reads the wall clock, touches storage
or logs, so two calls with the same inputs always return the same summary.

An expense whose date does not parse still counts toward the overall total
and the category breakdown. It is only left out of the date-based figures
(this month's total and the monthly trend).
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from expense_tracker.models.expense import (
    Category,
    Expense,
    MonthlyTotal,
    SpendingSummary,
)


RECENT_EXPENSES_COUNT = 5
TREND_MONTHS = 6

DateLike = Union[date, datetime]


def parse_expense_date(value: Optional[str]) -> Optional[date]:
    """
    Parse an expense date string.

    Returns None for missing or malformed values instead of raising.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value).date()
    except (TypeError, ValueError):
        return None


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def _as_date(now: DateLike) -> date:
    return now.date() if isinstance(now, datetime) else now


def trailing_months(now: DateLike, count: int = TREND_MONTHS) -> list[str]:
    """
    Month keys for the `count` calendar months ending at `now`, oldest first.

    Example: trailing_months(date(2024, 2, 10), 3) -> ["2023-12", "2024-01", "2024-02"]
    """
    today = _as_date(now)
    keys = []
    for offset in range(count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - offset
        year, month = divmod(index, 12)
        keys.append(f"{year:04d}-{month + 1:02d}")
    return keys


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all amounts."""
    return sum((e.amount for e in expenses), Decimal("0"))


def _recent_sort_key(expense: Expense) -> tuple[bool, date]:
    parsed = parse_expense_date(expense.date)
    # Unparseable dates rank below every valid date
    return (parsed is not None, parsed or date.min)


def _top_category(by_category: dict[Category, Decimal]) -> Category:
    best = None
    for category in Category:
        if best is None or by_category[best] < by_category[category]:
            best = category
    return best


def get_spending_summary(
    expenses: Sequence[Expense],
    now: DateLike,
    recent_count: int = RECENT_EXPENSES_COUNT,
    trend_months: int = TREND_MONTHS,
) -> SpendingSummary:
    """
    Reduce an expense list into a SpendingSummary.

    Args:
        expenses: Snapshot of the expense list (never modified)
        now: Reference date; "this month" and the trend window anchor on it
        recent_count: How many recent expenses to include
        trend_months: Width of the monthly trend series

    Returns:
        SpendingSummary with totals, breakdown, top category, recent
        expenses and the monthly trend
    """
    today = _as_date(now)
    current_month = month_key(today)

    by_category = {category: Decimal("0") for category in Category}
    monthly = {key: Decimal("0") for key in trailing_months(today, trend_months)}
    total = Decimal("0")
    monthly_total = Decimal("0")

    for expense in expenses:
        total += expense.amount
        by_category[expense.category] += expense.amount

        parsed = parse_expense_date(expense.date)
        if parsed is None:
            continue

        key = month_key(parsed)
        if key == current_month:
            monthly_total += expense.amount
        if key in monthly:
            monthly[key] += expense.amount

    top_category = _top_category(by_category) if expenses else None

    recent = sorted(expenses, key=_recent_sort_key, reverse=True)[:recent_count]

    return SpendingSummary(
        total=total,
        monthly_total=monthly_total,
        by_category=by_category,
        top_category=top_category,
        recent_expenses=recent,
        monthly_data=[
            MonthlyTotal(month=key, total=amount)
            for key, amount in monthly.items()
        ],
        expense_count=len(expenses),
    )
