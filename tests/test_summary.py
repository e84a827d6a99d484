"""
Tests for the spending summary aggregation.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from expense_tracker.analytics.summary import (
    get_spending_summary,
    parse_expense_date,
    total_amount,
    trailing_months,
)
from expense_tracker.models.expense import Category

from tests.helpers import make_expense


class TestSummaryScenario:
    """The two-record January/February scenario."""

    def test_totals(self, two_expenses, now):
        """Total counts everything, monthly total only February."""
        summary = get_spending_summary(two_expenses, now)
        assert summary.total == Decimal("80")
        assert summary.monthly_total == Decimal("30")

    def test_by_category(self, two_expenses, now):
        """Each expense lands in its own category bucket."""
        summary = get_spending_summary(two_expenses, now)
        assert summary.by_category[Category.FOOD] == Decimal("50")
        assert summary.by_category[Category.BILLS] == Decimal("30")

    def test_top_category(self, two_expenses, now):
        """Food has the largest sum."""
        summary = get_spending_summary(two_expenses, now)
        assert summary.top_category == Category.FOOD

    def test_datetime_now_accepted(self, two_expenses):
        """A datetime reference behaves like its date."""
        summary = get_spending_summary(two_expenses, datetime(2024, 2, 10, 23, 59))
        assert summary.monthly_total == Decimal("30")


class TestSummaryInvariants:
    """Properties that hold for any input."""

    def test_sum_is_order_independent(self, now):
        """Total equals the arithmetic sum regardless of order."""
        expenses = [
            make_expense("2024-02-01", "10.10"),
            make_expense("2023-05-01", "0.20", Category.OTHER),
            make_expense("2024-01-31", "99.99", Category.SHOPPING),
        ]
        forward = get_spending_summary(expenses, now)
        backward = get_spending_summary(list(reversed(expenses)), now)
        assert forward.total == Decimal("110.29")
        assert backward.total == forward.total

    def test_every_category_present(self, now):
        """Categories without expenses still report zero."""
        summary = get_spending_summary([make_expense("2024-02-01", 5)], now)
        assert set(summary.by_category) == set(Category)
        assert summary.by_category[Category.ENTERTAINMENT] == Decimal("0")
        assert summary.by_category[Category.OTHER] == Decimal("0")

    def test_tie_goes_to_earlier_category(self, now):
        """Equal sums are broken by canonical enumeration order."""
        expenses = [
            make_expense("2024-02-01", 40, Category.SHOPPING),
            make_expense("2024-02-02", 40, Category.TRANSPORTATION),
        ]
        summary = get_spending_summary(expenses, now)
        assert summary.top_category == Category.TRANSPORTATION

    def test_empty_input(self, now):
        """An empty list gives zeros and no top category."""
        summary = get_spending_summary([], now)
        assert summary.total == Decimal("0")
        assert summary.monthly_total == Decimal("0")
        assert summary.top_category is None
        assert summary.recent_expenses == []
        assert len(summary.monthly_data) == 6
        assert all(m.total == Decimal("0") for m in summary.monthly_data)
        assert summary.average_amount == Decimal("0")

    def test_same_inputs_same_output(self, two_expenses, now):
        """The summary is deterministic."""
        assert get_spending_summary(two_expenses, now) == get_spending_summary(two_expenses, now)

    def test_input_not_mutated(self, now):
        """Sorting for recent expenses works on a copy."""
        expenses = [
            make_expense("2024-01-01", 1, expense_id="old"),
            make_expense("2024-02-01", 1, expense_id="new"),
        ]
        get_spending_summary(expenses, now)
        assert [e.id for e in expenses] == ["old", "new"]


class TestInvalidDates:
    """Unparseable dates only affect date-based figures."""

    def test_not_a_date(self, now):
        """Counted in total, excluded from this month and the trend."""
        expenses = [make_expense("not-a-date", 10, Category.OTHER)]
        summary = get_spending_summary(expenses, now)
        assert summary.total == Decimal("10")
        assert summary.by_category[Category.OTHER] == Decimal("10")
        assert summary.monthly_total == Decimal("0")
        assert all(m.total == Decimal("0") for m in summary.monthly_data)

    def test_impossible_calendar_date(self, now):
        """February 30th does not parse."""
        summary = get_spending_summary([make_expense("2024-02-30", 10)], now)
        assert summary.monthly_total == Decimal("0")
        assert summary.total == Decimal("10")

    @pytest.mark.parametrize("value", ["", None, "2024/02/01", "yesterday"])
    def test_parse_returns_none(self, value):
        """Malformed values never raise."""
        assert parse_expense_date(value) is None

    def test_parse_valid(self):
        assert parse_expense_date("2024-02-29") == date(2024, 2, 29)


class TestMonthlyWindow:
    """The trailing six-month series."""

    def test_always_six_months_ending_now(self, now):
        """Window ends at the current month, oldest first."""
        expenses = [make_expense(f"20{y}-01-01", 1) for y in range(10, 24)]
        summary = get_spending_summary(expenses, now)
        assert [m.month for m in summary.monthly_data] == [
            "2023-09", "2023-10", "2023-11", "2023-12", "2024-01", "2024-02",
        ]

    def test_buckets_and_out_of_window(self, now):
        """Amounts land in their month; older months are dropped."""
        expenses = [
            make_expense("2024-02-09", 5),
            make_expense("2024-02-01", 7),
            make_expense("2023-09-30", 3),
            make_expense("2023-08-31", 100),
        ]
        summary = get_spending_summary(expenses, now)
        totals = {m.month: m.total for m in summary.monthly_data}
        assert totals["2024-02"] == Decimal("12")
        assert totals["2023-09"] == Decimal("3")
        assert "2023-08" not in totals
        assert summary.total == Decimal("115")

    def test_month_window_crosses_year(self):
        assert trailing_months(date(2024, 2, 10), 3) == ["2023-12", "2024-01", "2024-02"]

    def test_month_bounds_inclusive(self):
        """First and last day of the month both count."""
        expenses = [make_expense("2024-03-01", 1), make_expense("2024-03-31", 2)]
        summary = get_spending_summary(expenses, date(2024, 3, 15))
        assert summary.monthly_total == Decimal("3")


class TestRecentExpenses:
    """The five most recent expenses."""

    def test_five_newest_by_date(self, now):
        expenses = [make_expense(f"2024-01-{d:02d}", d, expense_id=str(d)) for d in range(1, 9)]
        summary = get_spending_summary(expenses, now)
        assert [e.id for e in summary.recent_expenses] == ["8", "7", "6", "5", "4"]

    def test_equal_dates_keep_input_order(self, now):
        expenses = [
            make_expense("2024-01-05", 1, expense_id="first"),
            make_expense("2024-01-05", 2, expense_id="second"),
        ]
        summary = get_spending_summary(expenses, now)
        assert [e.id for e in summary.recent_expenses] == ["first", "second"]

    def test_invalid_dates_sort_last(self, now):
        expenses = [
            make_expense("garbage", 1, expense_id="bad"),
            make_expense("2020-01-01", 1, expense_id="old"),
        ]
        summary = get_spending_summary(expenses, now)
        assert [e.id for e in summary.recent_expenses] == ["old", "bad"]

    def test_total_amount_helper(self, two_expenses):
        assert total_amount(two_expenses) == Decimal("80")
        assert total_amount([]) == Decimal("0")
