"""
Audit Models for Expense Tracker

Every change to the data files is described by an audit event.
This provides:
1. A trace of what each invocation changed
2. Debugging information when a save or load goes wrong

DESIGN DECISION: Audit events are only logged, never written to the data files.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_NOT_FOUND = "expense_not_found"

    # Budgets
    BUDGET_SET = "budget_set"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Persistence
    DATA_LOADED = "data_loaded"
    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"
    EXPORT_COMPLETED = "export_completed"
    EXPORT_FAILED = "export_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget', 'file')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, amount)
        event = AuditEventBuilder.save_failed("expenses", path, error)
    """

    @staticmethod
    def expense_added(expense_id: int, description: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense added: {description} - {amount}",
            details={
                "amount": amount,
            },
        )

    @staticmethod
    def expense_updated(expense_id: int, fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense updated: {', '.join(fields) or 'no changes'}",
            details={
                "fields": fields,
            },
        )

    @staticmethod
    def expense_deleted(expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=str(expense_id),
            description="Expense deleted",
        )

    @staticmethod
    def expense_not_found(expense_id: int, command: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"{command}: no expense with this ID",
            details={
                "command": command,
            },
        )

    @staticmethod
    def budget_set(month: int, year: int, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=f"{year:04d}-{month:02d}",
            description=f"Budget set: {amount}",
            details={
                "month": month,
                "year": year,
                "amount": amount,
            },
        )

    @staticmethod
    def validation_failed(command: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"{command} validation failed with {len(issues)} issues",
            details={
                "command": command,
                "issues": issues,
            },
        )

    @staticmethod
    def data_loaded(expense_count: int, budget_count: int, next_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Loaded {expense_count} expenses and {budget_count} budgets",
            details={
                "expense_count": expense_count,
                "budget_count": budget_count,
                "next_id": next_id,
            },
        )

    @staticmethod
    def load_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="file",
            description="Could not load data files",
            error_message=error_message,
        )

    @staticmethod
    def save_failed(collection: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="file",
            entity_id=collection,
            description=f"Error saving {collection}",
            error_message=error_message,
        )

    @staticmethod
    def export_completed(path: str, row_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_COMPLETED,
            entity_type="file",
            entity_id=path,
            description=f"Exported {row_count} expenses",
            details={
                "row_count": row_count,
            },
        )

    @staticmethod
    def export_failed(path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="file",
            entity_id=path,
            description="Could not write export file",
            error_message=error_message,
        )
