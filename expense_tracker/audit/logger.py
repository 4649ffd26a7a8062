"""
Audit Logger

DESIGN DECISION: Every change to the data files is logged.
This provides:
1. Traceability of what an invocation did
2. Debugging capability when a file cannot be read or written

The audit logger writes to stderr only, so command output on stdout
stays clean.
"""

import logging
import sys

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "WARNING", json_logs: bool = False) -> None:
    """
    Configure stdlib logging and structlog for the CLI.

    Logs go to stderr. The console renderer is used unless json_logs is set.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Turns audit events into structured log lines at the level
    matching the event severity.
    """

    def __init__(self, name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(name)
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> None:
        """
        Log an audit event.

        The event is also kept in `events` for the rest of the run.
        """
        self.events.append(event)
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_expense_added(self, expense_id: int, description: str, amount: str) -> None:
        """Log expense creation."""
        self.log(AuditEventBuilder.expense_added(expense_id, description, amount))

    def log_expense_updated(self, expense_id: int, fields: list[str]) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id, fields))

    def log_expense_deleted(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id))

    def log_expense_not_found(self, expense_id: int, command: str) -> None:
        self.log(AuditEventBuilder.expense_not_found(expense_id, command))

    def log_budget_set(self, month: int, year: int, amount: str) -> None:
        self.log(AuditEventBuilder.budget_set(month, year, amount))

    def log_validation_failed(self, command: str, issues: list[dict]) -> None:
        """Log a rejected request."""
        self.log(AuditEventBuilder.validation_failed(command, issues))

    def log_data_loaded(self, expense_count: int, budget_count: int, next_id: int) -> None:
        self.log(AuditEventBuilder.data_loaded(expense_count, budget_count, next_id))

    def log_load_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.load_failed(error_message))

    def log_save_failed(self, collection: str, error_message: str) -> None:
        """Log a failed write of one collection."""
        self.log(AuditEventBuilder.save_failed(collection, error_message))

    def log_export_completed(self, path: str, row_count: int) -> None:
        self.log(AuditEventBuilder.export_completed(path, row_count))

    def log_export_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.export_failed(path, error_message))
