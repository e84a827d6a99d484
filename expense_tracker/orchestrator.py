"""
Main Orchestrator for the Expense Tracker

This module ties together all the components and defines the flows the UI
calls:
1. Add / edit expense (form → validate → save → audit)
2. Delete one or many expenses
3. Dashboard summary and the filtered, sorted expense list
4. CSV export of the current view

DESIGN DECISION: The orchestrator owns "now". The analytics functions take
the reference date as an argument; the service reads it from an injectable
clock so tests can pin it.
"""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Collection, Iterable, Optional
from uuid import UUID

import structlog

from expense_tracker.analytics import (
    get_spending_summary,
    query_expenses,
    select_for_export,
    total_amount,
)
from expense_tracker.audit import AuditLogger, create_correlation_id
from expense_tracker.config import get_settings
from expense_tracker.export import expenses_to_csv
from expense_tracker.models.expense import (
    Expense,
    ExpenseFormData,
    FilterCriteria,
    SortOrder,
    SpendingSummary,
    ValidationResult,
)
from expense_tracker.services.storage import (
    ExpenseRepositoryInterface,
    InMemoryAuditStorage,
    InMemoryExpenseRepository,
    JsonFileExpenseRepository,
    StorageError,
    build_sample_expenses,
)
from expense_tracker.validation import ExpenseValidator


logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


class ExpenseValidationError(Exception):
    """Submitted form data failed validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(issue.message for issue in result.issues)
        super().__init__(f"Invalid expense: {messages}")


class ExpenseService:
    """
    Orchestrates every user action on the expense list.

    Flow for writes:
    1. Validate the form (reject with ExpenseValidationError)
    2. Save through the repository
    3. Audit the change

    Reads never touch the audit log.
    """

    def __init__(
        self,
        repository: ExpenseRepositoryInterface,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Clock = datetime.now,
        recent_count: Optional[int] = None,
        trend_months: Optional[int] = None,
    ):
        app_settings = None
        if recent_count is None or trend_months is None:
            app_settings = get_settings().app
        self._repository = repository
        self._validator = validator or ExpenseValidator(app_settings)
        self._audit_logger = audit_logger
        self._clock = clock
        self._recent_count = (
            app_settings.recent_expenses_count if recent_count is None else recent_count
        )
        self._trend_months = (
            app_settings.trend_months if trend_months is None else trend_months
        )

    # ---------- reads ----------

    def list_expenses(self) -> list[Expense]:
        return self._repository.list_all()

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        return self._repository.get_by_id(expense_id)

    def get_summary(self) -> SpendingSummary:
        """Dashboard summary as of the clock's current time."""
        return get_spending_summary(
            self._repository.list_all(),
            now=self._clock(),
            recent_count=self._recent_count,
            trend_months=self._trend_months,
        )

    def query(
        self,
        criteria: Optional[FilterCriteria] = None,
        order: SortOrder = SortOrder.DATE_DESC,
    ) -> list[Expense]:
        """The expense list as shown: filtered, then sorted."""
        return query_expenses(self._repository.list_all(), criteria, order)

    @staticmethod
    def filtered_total(expenses: Iterable[Expense]) -> Decimal:
        return total_amount(expenses)

    # ---------- writes ----------

    def validate(self, form: ExpenseFormData) -> ValidationResult:
        return self._validator.validate(form, today=self._clock().date())

    def _check(
        self,
        form: ExpenseFormData,
        expense_id: Optional[str],
        correlation_id: UUID,
    ) -> None:
        result = self.validate(form)
        if result.is_valid:
            return
        if self._audit_logger:
            self._audit_logger.log_validation_failed(
                issues=[
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in result.issues
                ],
                expense_id=expense_id,
                correlation_id=correlation_id,
            )
        raise ExpenseValidationError(result)

    def add_expense(
        self,
        form: ExpenseFormData,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Validate and store a new expense.

        Raises:
            ExpenseValidationError: If the form is invalid
            StorageError: If the expense could not be saved
        """
        correlation_id = correlation_id or create_correlation_id()
        self._check(form, None, correlation_id)

        try:
            expense = self._repository.create(form)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(
                    operation="create",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_expense_created(
                expense_id=expense.id,
                category=expense.category.value,
                amount=str(expense.amount),
                correlation_id=correlation_id,
            )
        return expense

    def update_expense(
        self,
        expense_id: str,
        form: ExpenseFormData,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Validate and apply an edit. The id and creation time are kept.

        Raises:
            ExpenseValidationError: If the form is invalid
            NotFoundError: If the expense doesn't exist
            StorageError: If the change could not be saved
        """
        correlation_id = correlation_id or create_correlation_id()
        self._check(form, expense_id, correlation_id)

        before = self._repository.get_by_id(expense_id)
        try:
            updated = self._repository.update(expense_id, form)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(
                    operation="update",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            changed = [
                name for name in ("date", "amount", "category", "description")
                if before is None or getattr(before, name) != getattr(updated, name)
            ]
            self._audit_logger.log_expense_updated(
                expense_id=expense_id,
                changed_fields=changed,
                correlation_id=correlation_id,
            )
        return updated

    def delete_expense(
        self,
        expense_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        removed = self._repository.delete(expense_id)
        if removed and self._audit_logger:
            self._audit_logger.log_expense_deleted(
                expense_id=expense_id,
                correlation_id=correlation_id,
            )
        return removed

    def delete_expenses(
        self,
        expense_ids: Collection[str],
        correlation_id: Optional[UUID] = None,
    ) -> int:
        """Bulk delete; returns how many expenses were removed."""
        ids = list(expense_ids)
        removed = self._repository.delete_many(ids)
        if self._audit_logger:
            self._audit_logger.log_expenses_bulk_deleted(
                expense_ids=ids,
                removed=removed,
                correlation_id=correlation_id,
            )
        return removed

    # ---------- export ----------

    def export_csv(
        self,
        criteria: Optional[FilterCriteria] = None,
        order: SortOrder = SortOrder.DATE_DESC,
        selected_ids: Collection[str] = (),
        filename: str = "expenses.csv",
    ) -> str:
        """
        CSV text for the current view.

        When `selected_ids` is non-empty only those rows are exported,
        in view order.
        """
        rows = select_for_export(self.query(criteria, order), selected_ids)
        content = expenses_to_csv(rows)
        if self._audit_logger:
            self._audit_logger.log_export_generated(
                row_count=len(rows),
                filename=filename,
            )
        return content


def create_app_components(
    use_storage: bool = True,
    data_path: Optional[Path] = None,
) -> tuple[ExpenseService, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the JSON data file.
                    Set to False for a throwaway in-memory session.
        data_path: Override for the configured data file.

    Returns:
        (expense_service, audit_logger)
    """
    settings = get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    audit_logger = AuditLogger(InMemoryAuditStorage())

    today = datetime.now().date()
    initial = build_sample_expenses(today) if storage_settings.seed_sample_data else []

    repository: ExpenseRepositoryInterface
    if use_storage:
        path = data_path or storage_settings.data_path
        try:
            repository = JsonFileExpenseRepository(path, initial)
        except StorageError as e:
            # Data file not usable - continue in memory
            logger.warning("storage_unavailable", path=str(path), error=str(e))
            audit_logger.log_storage_error(operation="open", error_message=str(e))
            repository = InMemoryExpenseRepository(initial)
    else:
        repository = InMemoryExpenseRepository(initial)

    service = ExpenseService(
        repository=repository,
        validator=ExpenseValidator(app_settings),
        audit_logger=audit_logger,
        recent_count=app_settings.recent_expenses_count,
        trend_months=app_settings.trend_months,
    )
    return service, audit_logger
