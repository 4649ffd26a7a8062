"""
Request Validation

DESIGN DECISION: A bad flag value is not an error condition.
The validator reports issues; the command prints the first one
and ends without touching any data. The process still exits 0.

Checks run in a fixed order so the message a user sees for a
given bad input is always the same.

IMPORTANT: Validation NEVER silently fixes input.
"""

import math
from decimal import Decimal
from typing import Optional

from expense_tracker.models.commands import (
    AddExpenseRequest,
    ExportRequest,
    SetBudgetRequest,
    SummaryRequest,
    UpdateExpenseRequest,
    ValidationIssue,
    ValidationResult,
)


AMOUNT_MESSAGE = "Amount must be a positive value."
BUDGET_AMOUNT_MESSAGE = "Budget amount must be a positive value."
AMOUNT_RANGE_MESSAGE = "Amount is out of range."
MONTH_MESSAGE = "Invalid month. Please enter a value between 1 and 12."
YEAR_MESSAGE = "Invalid year. Please enter a positive year."
TEXT_MESSAGE = "Text contains characters that cannot be stored."
EXPORT_FILE_MESSAGE = "Please specify an export file using --file"


class CommandValidator:
    """Validates subcommand requests before they reach the record store."""

    @staticmethod
    def _check_amount(
        amount: Optional[Decimal],
        message: str,
        issues: list[ValidationIssue],
    ) -> None:
        if amount is None or not amount.is_finite() or amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_positive",
                message=message,
            ))
            return

        # Amounts are stored as JSON numbers and must survive the trip.
        stored = float(amount)
        if math.isinf(stored) or stored == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=AMOUNT_RANGE_MESSAGE,
            ))

    @staticmethod
    def _check_text(field: str, value: Optional[str], issues: list[ValidationIssue]) -> None:
        """Reject text that cannot be written as UTF-8 (e.g. undecodable argv bytes)."""
        if not value:
            return
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            issues.append(ValidationIssue(
                field=field,
                issue_type="not_encodable",
                message=TEXT_MESSAGE,
            ))

    @staticmethod
    def _check_month(month: Optional[int], issues: list[ValidationIssue]) -> None:
        if month is None or not 1 <= month <= 12:
            issues.append(ValidationIssue(
                field="month",
                issue_type="out_of_range",
                message=MONTH_MESSAGE,
            ))

    def validate_add(self, request: AddExpenseRequest) -> ValidationResult:
        issues: list[ValidationIssue] = []
        self._check_amount(request.amount, AMOUNT_MESSAGE, issues)
        self._check_text("description", request.description, issues)
        self._check_text("category", request.category, issues)
        return ValidationResult(command="add", issues=issues)

    def validate_update(self, request: UpdateExpenseRequest) -> ValidationResult:
        """The amount is optional on update, but must be positive when given."""
        issues: list[ValidationIssue] = []
        if request.amount is not None:
            self._check_amount(request.amount, AMOUNT_MESSAGE, issues)
        self._check_text("description", request.description, issues)
        self._check_text("category", request.category, issues)
        return ValidationResult(command="update", issues=issues)

    def validate_summary(self, request: SummaryRequest) -> ValidationResult:
        """Month 0 means no month filter, like leaving the flag out."""
        issues: list[ValidationIssue] = []
        if request.month:
            self._check_month(request.month, issues)
        return ValidationResult(command="summary", issues=issues)

    def validate_budget(self, request: SetBudgetRequest) -> ValidationResult:
        issues: list[ValidationIssue] = []
        self._check_amount(request.amount, BUDGET_AMOUNT_MESSAGE, issues)
        self._check_month(request.month, issues)
        if request.year is not None and request.year < 0:
            issues.append(ValidationIssue(
                field="year",
                issue_type="out_of_range",
                message=YEAR_MESSAGE,
            ))
        return ValidationResult(command="budget", issues=issues)

    def validate_export(self, request: ExportRequest) -> ValidationResult:
        issues: list[ValidationIssue] = []
        if not request.file.strip():
            issues.append(ValidationIssue(
                field="file",
                issue_type="missing",
                message=EXPORT_FILE_MESSAGE,
            ))
        return ValidationResult(command="export", issues=issues)
