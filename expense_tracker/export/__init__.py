"""CSV export package."""

from expense_tracker.export.csv_export import CSV_HEADERS, expense_to_row, expenses_to_csv

__all__ = ["CSV_HEADERS", "expense_to_row", "expenses_to_csv"]
