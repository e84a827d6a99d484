"""
Expense Form Validation

DESIGN DECISION: The form is validated field by field and at most one issue
is reported per field: the first rule that fails. This is what the form
shows next to each input.

Rules:
- date: required, a valid YYYY-MM-DD date, not in the future
- amount: required, a positive number, not above the configured maximum
- description: required, trimmed length within the configured bounds

IMPORTANT: Validation NEVER silently fixes issues. The repository trims
the description on save; the validator only reports.

The analytics layer does not re-validate stored records, so anything that
reaches storage through another route (imports, old data) is still
handled gracefully there.
"""

import re
from datetime import date
from decimal import Decimal
from typing import Optional

from expense_tracker.analytics.summary import parse_expense_date
from expense_tracker.config import AppSettings, get_settings
from expense_tracker.models.expense import (
    ExpenseFormData,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.utils.formatters import parse_amount


# Stored dates are compared as text, so only the canonical form is accepted
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class ExpenseValidator:
    """Validates expense form input before it reaches the repository."""

    def __init__(self, settings: Optional[AppSettings] = None):
        """
        Initialize validator.

        Args:
            settings: Limits to enforce. Defaults to the application settings.
        """
        self._settings = settings or get_settings().app

    def _validate_date(self, value: str, today: date) -> Optional[ValidationIssue]:
        if not value:
            return ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
            )
        parsed = parse_expense_date(value) if DATE_PATTERN.fullmatch(value) else None
        if parsed is None:
            return ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message="Date must be a valid date (YYYY-MM-DD)",
            )
        if parsed > today:
            return ValidationIssue(
                field="date",
                issue_type="future_date",
                message="Date cannot be in the future",
            )
        return None

    def _validate_amount(self, value: str) -> Optional[ValidationIssue]:
        if not value or not value.strip():
            return ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
            )
        amount = parse_amount(value)
        if amount is None or amount <= 0:
            return ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be a positive number",
            )
        if amount > Decimal(str(self._settings.max_expense_amount)):
            return ValidationIssue(
                field="amount",
                issue_type="too_large",
                message="Amount is too large",
            )
        return None

    def _validate_description(self, value: str) -> Optional[ValidationIssue]:
        trimmed = value.strip()
        min_length = self._settings.description_min_length
        max_length = self._settings.description_max_length

        if not trimmed:
            return ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
            )
        if len(trimmed) < min_length:
            return ValidationIssue(
                field="description",
                issue_type="too_short",
                message=f"Description must be at least {min_length} characters",
            )
        if len(value) > max_length:
            return ValidationIssue(
                field="description",
                issue_type="too_long",
                message=f"Description must be under {max_length} characters",
            )
        return None

    def validate(self, form: ExpenseFormData, today: date) -> ValidationResult:
        """
        Validate a submitted expense form.

        Args:
            form: Raw form values
            today: The current date; later dates are rejected

        Returns:
            ValidationResult with at most one issue per field
        """
        checks = (
            self._validate_date(form.date, today),
            self._validate_amount(form.amount),
            self._validate_description(form.description),
        )
        return ValidationResult(issues=[issue for issue in checks if issue])

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Summary of validation results for display above the form."""
        if result.is_valid:
            return "✅ All fields look good."

        lines = ["❌ Please fix the following:"]
        for issue in result.issues:
            if issue.severity == "error":
                lines.append(f"   • {issue.message}")
        return "\n".join(lines)
