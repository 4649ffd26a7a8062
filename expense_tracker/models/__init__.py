"""
Data Models Package

This package contains all Pydantic models used by the expense tracker.
"""

from expense_tracker.models.expense import Budget, Expense
from expense_tracker.models.commands import (
    AddExpenseRequest,
    CommandResult,
    DeleteExpenseRequest,
    ExportRequest,
    SetBudgetRequest,
    SummaryReport,
    SummaryRequest,
    UpdateExpenseRequest,
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
    # Records
    "Budget",
    "Expense",
    # Commands
    "AddExpenseRequest",
    "CommandResult",
    "DeleteExpenseRequest",
    "ExportRequest",
    "SetBudgetRequest",
    "SummaryReport",
    "SummaryRequest",
    "UpdateExpenseRequest",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
