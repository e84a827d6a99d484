"""
Core Data Models for the Expense Tracker

These models define the schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Be serializable for local storage and export
3. Keep the category set closed so breakdowns are exhaustive

DESIGN DECISION: Expense records are frozen. Every change goes through the
repository, which replaces the record with a new copy instead of mutating it.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Category(str, Enum):
    """
    Supported expense categories.

    DESIGN DECISION: The definition order below is the canonical
    enumeration order. Top-category ties are broken by it.
    """
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"


CATEGORY_COLORS: dict[Category, str] = {
    Category.FOOD: "#f97316",
    Category.TRANSPORTATION: "#3b82f6",
    Category.ENTERTAINMENT: "#a855f7",
    Category.SHOPPING: "#ec4899",
    Category.BILLS: "#ef4444",
    Category.OTHER: "#6b7280",
}

CATEGORY_ICONS: dict[Category, str] = {
    Category.FOOD: "🍽️",
    Category.TRANSPORTATION: "🚗",
    Category.ENTERTAINMENT: "🎬",
    Category.SHOPPING: "🛍️",
    Category.BILLS: "📄",
    Category.OTHER: "📦",
}


class SortOrder(str, Enum):
    """Orders offered on the expense list."""
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"


# =============================================================================
# EXPENSE RECORDS
# =============================================================================

def _new_expense_id() -> str:
    return str(uuid4())


def _now_iso() -> str:
    return datetime.now().isoformat()


class Expense(BaseModel):
    """
    A single logged expense.

    `date` stays a plain ISO string. Imported or historical records may carry
    a value that does not parse; the analytics layer tolerates those instead
    of rejecting the whole record.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=_new_expense_id,
        min_length=1,
        description="Opaque unique identifier"
    )
    date: str = Field(
        ...,
        description="Expense date as YYYY-MM-DD"
    )
    amount: Decimal = Field(
        ...,
        description="Amount spent"
    )
    category: Category = Field(
        ...,
        description="Expense category"
    )
    description: str = Field(
        ...,
        description="What the money was spent on"
    )
    created_at: str = Field(
        default_factory=_now_iso,
        description="ISO timestamp of insertion (provenance only)"
    )


class ExpenseFormData(BaseModel):
    """
    Raw values as entered in the expense form.

    CRITICAL: This is UNVALIDATED input. It must pass ExpenseValidator
    before the repository turns it into an Expense.
    """

    date: str = ""
    amount: str = ""
    category: Category = Category.FOOD
    description: str = ""

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseFormData":
        """Prefill the form from an existing record (edit flow)."""
        return cls(
            date=expense.date,
            amount=str(expense.amount),
            category=expense.category,
            description=expense.description,
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'future_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating an expense form."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def errors_by_field(self) -> dict[str, str]:
        """First error message per field, for showing next to form inputs."""
        errors: dict[str, str] = {}
        for issue in self.issues:
            if issue.severity == "error":
                errors.setdefault(issue.field, issue.message)
        return errors


# =============================================================================
# DERIVED VIEWS
# =============================================================================

class MonthlyTotal(BaseModel):
    """Spending for one calendar month."""

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month key as YYYY-MM"
    )
    total: Decimal = Decimal("0")


class SpendingSummary(BaseModel):
    """
    Aggregate view over the full expense list.

    Derived on every change and never persisted.
    """

    total: Decimal = Decimal("0")
    monthly_total: Decimal = Decimal("0")
    by_category: dict[Category, Decimal] = Field(default_factory=dict)
    top_category: Optional[Category] = None
    recent_expenses: list[Expense] = Field(default_factory=list)
    monthly_data: list[MonthlyTotal] = Field(default_factory=list)
    expense_count: int = Field(default=0, ge=0)

    @property
    def average_amount(self) -> Decimal:
        """Average amount per expense (0 when there are none)."""
        if self.expense_count == 0:
            return Decimal("0")
        return self.total / self.expense_count


class FilterCriteria(BaseModel):
    """
    Criteria used to narrow the expense list.

    `category=None` means all categories. Missing or empty date bounds
    are unbounded.
    """

    search: str = ""
    category: Optional[Category] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None

    @property
    def is_active(self) -> bool:
        """True when any criterion actually narrows the list."""
        return bool(
            self.search or self.category or self.date_from or self.date_to
        )
