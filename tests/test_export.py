"""
Tests for CSV export and display formatting.
"""

from decimal import Decimal

import pytest

from expense_tracker.export import CSV_HEADERS, expenses_to_csv
from expense_tracker.models.expense import Category
from expense_tracker.utils.formatters import (
    format_currency,
    format_date,
    format_date_short,
    format_month_year,
    parse_amount,
)

from tests.helpers import make_expense


class TestCsvExport:
    """CSV layout."""

    def test_header_only_for_empty_list(self):
        assert expenses_to_csv([]) == "Date,Amount,Category,Description"

    def test_row_format(self):
        csv_text = expenses_to_csv([
            make_expense("2024-01-15", 50, Category.FOOD, "Groceries"),
        ])
        lines = csv_text.split("\n")
        assert lines[0] == ",".join(CSV_HEADERS)
        assert lines[1] == '"Jan 15, 2024",50.00,Food,"Groceries"'

    def test_quotes_are_doubled(self):
        csv_text = expenses_to_csv([
            make_expense("2024-01-15", "3.5", Category.OTHER, 'The "good" coffee'),
        ])
        assert csv_text.split("\n")[1].endswith(',Other,"The ""good"" coffee"')

    def test_amount_two_decimals(self):
        csv_text = expenses_to_csv([make_expense("2024-01-15", Decimal("7.5"))])
        assert ",7.50," in csv_text

    def test_rows_keep_input_order(self):
        csv_text = expenses_to_csv([
            make_expense("2024-03-01", 1, description="third"),
            make_expense("2024-01-01", 1, description="first"),
        ])
        rows = csv_text.split("\n")[1:]
        assert rows[0].endswith('"third"')
        assert rows[1].endswith('"first"')

    def test_unparseable_date_exported_as_is(self):
        csv_text = expenses_to_csv([make_expense("not-a-date", 1)])
        assert csv_text.split("\n")[1].startswith('"not-a-date",')


class TestFormatters:
    """Human-readable formatting."""

    def test_format_currency(self):
        assert format_currency(Decimal("1234.5")) == "€1,234.50"
        assert format_currency(0) == "€0.00"
        assert format_currency(Decimal("-3"), "USD") == "-$3.00"

    def test_format_currency_unknown_code(self):
        assert format_currency(5, "CHF") == "CHF 5.00"

    def test_format_date(self):
        assert format_date("2024-01-05") == "Jan 5, 2024"
        assert format_date("garbage") == "garbage"

    def test_format_date_short(self):
        assert format_date_short("2024-01-05") == "01/05/2024"

    def test_format_month_year(self):
        assert format_month_year("2024-01") == "Jan 2024"
        assert format_month_year("2024-13") == "2024-13"

    @pytest.mark.parametrize("raw,expected", [
        ("12.5", Decimal("12.5")),
        (" 3 ", Decimal("3")),
        ("", None),
        (None, None),
        ("abc", None),
        ("nan", None),
    ])
    def test_parse_amount(self, raw, expected):
        assert parse_amount(raw) == expected
