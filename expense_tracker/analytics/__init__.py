"""Spending analytics: summary aggregation and the filter/sort engine."""

from expense_tracker.analytics.filters import (
    filter_expenses,
    matches_search,
    query_expenses,
    select_for_export,
    sort_expenses,
)
from expense_tracker.analytics.summary import (
    get_spending_summary,
    parse_expense_date,
    total_amount,
    trailing_months,
)

__all__ = [
    "filter_expenses",
    "get_spending_summary",
    "matches_search",
    "parse_expense_date",
    "query_expenses",
    "select_for_export",
    "sort_expenses",
    "total_amount",
    "trailing_months",
]
