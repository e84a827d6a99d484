"""Display formatting and small parsing helpers."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from expense_tracker.analytics.summary import parse_expense_date


CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "INR": "₹",
}


def format_currency(amount: Union[Decimal, float, int], currency_code: str = "EUR") -> str:
    """
    Format an amount with two decimals and a thousands separator.

    Example: format_currency(Decimal("1234.5")) -> "€1,234.50"
    """
    symbol = CURRENCY_SYMBOLS.get(currency_code.upper(), currency_code.upper() + " ")
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_date(value: str) -> str:
    """'2024-01-05' -> 'Jan 5, 2024'. Unparseable values come back unchanged."""
    parsed = parse_expense_date(value)
    if parsed is None:
        return value
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_date_short(value: str) -> str:
    """'2024-01-05' -> '01/05/2024'. Unparseable values come back unchanged."""
    parsed = parse_expense_date(value)
    if parsed is None:
        return value
    return parsed.strftime("%m/%d/%Y")


def format_month_year(month: str) -> str:
    """'2024-01' -> 'Jan 2024'. Unparseable values come back unchanged."""
    parsed = parse_expense_date(f"{month}-01")
    if parsed is None:
        return month
    return parsed.strftime("%b %Y")


def today_string(today: Optional[date] = None) -> str:
    """Today's date as YYYY-MM-DD."""
    today = today or datetime.now().date()
    return today.isoformat()


def parse_amount(raw: Union[str, Decimal, float, int, None]) -> Optional[Decimal]:
    """
    Parse a user-entered amount.

    Returns None when the value is empty or not a finite number.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value
