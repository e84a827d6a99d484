"""
Expense Filtering and Sorting

DESIGN DECISION: Date bounds are compared as strings. Expense dates are
YYYY-MM-DD, and for that format lexicographic order is calendar order, so
no parsing is needed on the hot path.

Both filtering and sorting are stable: records that tie keep the order they
had in the input.
"""

from typing import Collection, Optional, Sequence

from expense_tracker.models.expense import (
    Category,
    Expense,
    FilterCriteria,
    SortOrder,
)


def matches_search(expense: Expense, search: str) -> bool:
    """Case-insensitive substring match on description or category label."""
    if not search:
        return True
    needle = search.lower()
    return (
        needle in expense.description.lower()
        or needle in expense.category.value.lower()
    )


def filter_expenses(
    expenses: Sequence[Expense],
    search: str = "",
    category: Optional[Category] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> list[Expense]:
    """
    Keep the expenses that satisfy every criterion.

    Args:
        expenses: Expense list (not modified)
        search: Free text matched against description and category
        category: Only this category; None keeps all
        date_from: Inclusive lower bound (YYYY-MM-DD); empty means unbounded
        date_to: Inclusive upper bound (YYYY-MM-DD); empty means unbounded

    Returns:
        Matching expenses in their original relative order
    """
    return [
        e for e in expenses
        if matches_search(e, search)
        and (category is None or e.category == category)
        and (not date_from or e.date >= date_from)
        and (not date_to or e.date <= date_to)
    ]


def sort_expenses(
    expenses: Sequence[Expense],
    order: SortOrder = SortOrder.DATE_DESC,
) -> list[Expense]:
    """Return a new list in the requested order."""
    order = SortOrder(order)
    if order in (SortOrder.DATE_DESC, SortOrder.DATE_ASC):
        return sorted(
            expenses,
            key=lambda e: e.date,
            reverse=order == SortOrder.DATE_DESC,
        )
    return sorted(
        expenses,
        key=lambda e: e.amount,
        reverse=order == SortOrder.AMOUNT_DESC,
    )


def query_expenses(
    expenses: Sequence[Expense],
    criteria: Optional[FilterCriteria] = None,
    order: SortOrder = SortOrder.DATE_DESC,
) -> list[Expense]:
    """Filter with `criteria`, then sort by `order`."""
    criteria = criteria or FilterCriteria()
    filtered = filter_expenses(
        expenses,
        search=criteria.search,
        category=criteria.category,
        date_from=criteria.date_from,
        date_to=criteria.date_to,
    )
    return sort_expenses(filtered, order)


def select_for_export(
    expenses: Sequence[Expense],
    selected_ids: Collection[str],
) -> list[Expense]:
    """
    Narrow an already ordered list to the selected ids.

    An empty selection exports everything that is shown.
    """
    if not selected_ids:
        return list(expenses)
    wanted = set(selected_ids)
    return [e for e in expenses if e.id in wanted]
