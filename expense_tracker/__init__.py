"""
Expense Tracker - Source Package

A single-user personal expense tracker: record expenses, browse and
filter them, see spending summaries and export to CSV.

DESIGN PRINCIPLES:
1. Analytics are pure functions of the expense list and a given date
2. Records are immutable; every change produces a new list
3. Bad historical data degrades figures, never crashes the app
4. Every change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
