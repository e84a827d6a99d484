"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    CATEGORY_COLORS,
    CATEGORY_ICONS,
    Category,
    Expense,
    ExpenseFormData,
    FilterCriteria,
    MonthlyTotal,
    SortOrder,
    SpendingSummary,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CATEGORY_COLORS",
    "CATEGORY_ICONS",
    "Category",
    "Expense",
    "ExpenseFormData",
    "FilterCriteria",
    "MonthlyTotal",
    "SortOrder",
    "SpendingSummary",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
