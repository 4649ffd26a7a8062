"""
Command Request and Result Models

Each subcommand receives its parsed flags as one of the request models below.

CRITICAL: Requests are PROPOSED input, not trusted data.
Fields are deliberately unconstrained here; the CommandValidator
decides what is acceptable and reports problems as messages
instead of raising.
"""

from calendar import month_name
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# REQUESTS
# =============================================================================

class AddExpenseRequest(BaseModel):
    """Flags of the `add` subcommand."""

    description: str
    amount: Decimal
    category: Optional[str] = None


class UpdateExpenseRequest(BaseModel):
    """
    Flags of the `update` subcommand.

    Only fields that are set (non-empty / non-zero) are applied.
    """

    expense_id: int
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category: Optional[str] = None


class DeleteExpenseRequest(BaseModel):
    """Flags of the `delete` subcommand."""

    expense_id: int


class SummaryRequest(BaseModel):
    """Flags of the `summary` subcommand."""

    month: Optional[int] = None
    category: Optional[str] = None
    budget: Optional[Decimal] = Field(
        default=None,
        description="Budget to check against; takes precedence over a stored one when > 0"
    )


class SetBudgetRequest(BaseModel):
    """Flags of the `budget` subcommand."""

    amount: Decimal
    month: int
    year: Optional[int] = Field(
        default=None,
        description="Defaults to the current year when unset or 0"
    )


class ExportRequest(BaseModel):
    """Flags of the `export` subcommand."""

    file: str


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'not_positive', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Message shown to the user"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating one request."""

    command: str
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        """The issue reported to the user; checks run in a fixed order."""
        return next((i for i in self.issues if i.severity == "error"), None)


# =============================================================================
# RESULTS
# =============================================================================

class CommandResult(BaseModel):
    """
    Outcome of running one subcommand.

    `success` is False for validation notices and not-found notices;
    those still end the process normally.
    """

    command: str
    success: bool
    message: str = ""
    expense_id: Optional[int] = None


class SummaryReport(BaseModel):
    """
    Totals computed by the `summary` subcommand.

    When `month` is set, `total` only covers that month of `year`.
    """

    total: Decimal = Decimal("0")
    expense_count: int = 0
    category: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None

    # Budget comparison (monthly summaries only)
    budget_limit: Optional[Decimal] = None
    budget_source: Optional[str] = Field(
        default=None,
        pattern="^(provided|stored)$",
    )

    @property
    def month_label(self) -> str:
        return month_name[self.month] if self.month else ""

    @property
    def over_budget(self) -> bool:
        return self.budget_limit is not None and self.total > self.budget_limit
