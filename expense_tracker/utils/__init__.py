"""Formatting helpers shared by the UI and the CSV export."""

from expense_tracker.utils.formatters import (
    format_currency,
    format_date,
    format_date_short,
    format_month_year,
    parse_amount,
    today_string,
)

__all__ = [
    "format_currency",
    "format_date",
    "format_date_short",
    "format_month_year",
    "parse_amount",
    "today_string",
]
