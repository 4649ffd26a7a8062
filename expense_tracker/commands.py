"""
Command Handlers for Expense Tracker

This module ties the record store, validator, reporter and repository
together and defines what each subcommand does.

DESIGN DECISION: Handlers receive everything explicitly:
- The parsed flags arrive as a request model
- The collections live in an injected RecordStore
- Persistence goes through an injected repository

Mutating handlers (add, update, delete, budget) are wrapped by
`persists`, which writes the affected collection back after the
handler returns - including when the handler only printed a notice.
A failed write is logged; the in-memory change stays for the rest
of the run and nothing is retried.
"""

import functools
import sys
from calendar import month_name
from pathlib import Path
from typing import Callable, Optional, TextIO

from expense_tracker.audit import AuditLogger
from expense_tracker.config import TrackerSettings
from expense_tracker.models.commands import (
    AddExpenseRequest,
    CommandResult,
    DeleteExpenseRequest,
    ExportRequest,
    SetBudgetRequest,
    SummaryReport,
    SummaryRequest,
    UpdateExpenseRequest,
    ValidationResult,
)
from expense_tracker.models.expense import Budget
from expense_tracker.reports import ExpenseReporter, export_csv
from expense_tracker.services.storage import (
    ExpenseNotFoundError,
    ExpenseRepositoryInterface,
    ExportError,
    JsonFileRepository,
    LoadError,
    SaveError,
)
from expense_tracker.store import RecordStore
from expense_tracker.validation import CommandValidator


EXPENSES = "expenses"
BUDGETS = "budgets"


def persists(collection: str) -> Callable:
    """Save `collection` through the repository after the handler runs."""

    def decorator(handler: Callable) -> Callable:
        @functools.wraps(handler)
        def wrapper(self: "ExpenseCommands", *args, **kwargs):
            result = handler(self, *args, **kwargs)
            self.save(collection)
            return result
        return wrapper

    return decorator


class ExpenseCommands:
    """
    Runs subcommands against one loaded RecordStore.

    Every handler prints its user-facing output and returns a
    CommandResult describing what happened.
    """

    def __init__(
        self,
        store: RecordStore,
        repository: ExpenseRepositoryInterface,
        validator: Optional[CommandValidator] = None,
        reporter: Optional[ExpenseReporter] = None,
        audit_logger: Optional[AuditLogger] = None,
        out: Optional[TextIO] = None,
    ):
        self._store = store
        self._repository = repository
        self._validator = validator or CommandValidator()
        self._reporter = reporter or ExpenseReporter()
        self._audit_logger = audit_logger or AuditLogger()
        self._out = out

    @property
    def store(self) -> RecordStore:
        return self._store

    def _echo(self, message: str) -> None:
        print(message, file=self._out or sys.stdout)

    def _reject(self, validation: ValidationResult) -> CommandResult:
        """Print the first validation error and report a no-op."""
        issue = validation.first_error
        self._audit_logger.log_validation_failed(
            validation.command,
            [{"field": i.field, "type": i.issue_type, "message": i.message}
             for i in validation.issues],
        )
        self._echo(issue.message)
        return CommandResult(
            command=validation.command,
            success=False,
            message=issue.message,
        )

    def _not_found(self, command: str, error: ExpenseNotFoundError) -> CommandResult:
        self._audit_logger.log_expense_not_found(error.expense_id, command)
        message = str(error)
        self._echo(message)
        return CommandResult(
            command=command,
            success=False,
            message=message,
            expense_id=error.expense_id,
        )

    def save(self, collection: str) -> bool:
        """
        Write one collection back to the repository.

        Returns False (after logging) if the write failed.
        """
        try:
            if collection == EXPENSES:
                self._repository.save_expenses(self._store.expenses)
            else:
                self._repository.save_budgets(self._store.budgets)
        except SaveError as e:
            self._audit_logger.log_save_failed(collection, str(e))
            return False
        return True

    # =========================================================================
    # MUTATING COMMANDS
    # =========================================================================

    @persists(EXPENSES)
    def add(self, request: AddExpenseRequest) -> CommandResult:
        """Record a new expense."""
        validation = self._validator.validate_add(request)
        if validation.has_errors:
            return self._reject(validation)

        expense = self._store.add_expense(
            description=request.description,
            amount=request.amount,
            category=request.category,
        )
        self._audit_logger.log_expense_added(
            expense.id, expense.description, f"{expense.amount:.2f}"
        )

        message = f"Expense added successfully (ID: {expense.id})"
        self._echo(message)
        return CommandResult(
            command="add", success=True, message=message, expense_id=expense.id
        )

    @persists(EXPENSES)
    def update(self, request: UpdateExpenseRequest) -> CommandResult:
        """Overwrite the given fields of an existing expense."""
        validation = self._validator.validate_update(request)
        if validation.has_errors:
            return self._reject(validation)

        try:
            expense, changed = self._store.update_expense(
                request.expense_id,
                description=request.description,
                amount=request.amount,
                category=request.category,
            )
        except ExpenseNotFoundError as e:
            return self._not_found("update", e)

        self._audit_logger.log_expense_updated(expense.id, changed)

        message = f"Expense updated successfully (ID: {expense.id})"
        self._echo(message)
        return CommandResult(
            command="update", success=True, message=message, expense_id=expense.id
        )

    @persists(EXPENSES)
    def delete(self, request: DeleteExpenseRequest) -> CommandResult:
        """Remove an expense by ID."""
        try:
            expense = self._store.delete_expense(request.expense_id)
        except ExpenseNotFoundError as e:
            return self._not_found("delete", e)

        self._audit_logger.log_expense_deleted(expense.id)

        message = f"Expense deleted successfully (ID: {expense.id})"
        self._echo(message)
        return CommandResult(
            command="delete", success=True, message=message, expense_id=expense.id
        )

    @persists(BUDGETS)
    def set_budget(self, request: SetBudgetRequest) -> CommandResult:
        """Set the budget for one month; the year defaults to the current one."""
        validation = self._validator.validate_budget(request)
        if validation.has_errors:
            return self._reject(validation)

        year = request.year or self._store.now().year
        budget = self._store.set_budget(
            Budget(month=request.month, year=year, amount=request.amount)
        )
        self._audit_logger.log_budget_set(
            budget.month, budget.year, f"{budget.amount:.2f}"
        )

        message = (
            f"Budget set successfully for {month_name[budget.month]} {budget.year}: "
            f"{self._reporter.format_money(budget.amount)}"
        )
        self._echo(message)
        return CommandResult(command="budget", success=True, message=message)

    # =========================================================================
    # READ-ONLY COMMANDS
    # =========================================================================

    def list_expenses(self) -> CommandResult:
        """Print every expense in storage order."""
        lines = self._reporter.render_list(self._store.expenses)
        for line in lines:
            self._echo(line)
        return CommandResult(command="list", success=True, message="\n".join(lines))

    def summary(self, request: SummaryRequest) -> CommandResult:
        """Print the total, optionally for one month, with a budget check."""
        validation = self._validator.validate_summary(request)
        if validation.has_errors:
            return self._reject(validation)

        report = self.build_summary(request)
        lines = self._reporter.render_summary(report)
        for line in lines:
            self._echo(line)
        return CommandResult(command="summary", success=True, message="\n".join(lines))

    def build_summary(self, request: SummaryRequest) -> SummaryReport:
        """Compute the summary report without printing it."""
        today = self._store.now().date()
        month = request.month or None
        stored_budget = None
        if month is not None:
            stored_budget = self._store.get_budget(month, today.year)

        return self._reporter.summarize(
            self._store.expenses,
            today=today,
            month=month,
            category=request.category,
            budget_override=request.budget,
            stored_budget=stored_budget,
        )

    def export(self, request: ExportRequest) -> CommandResult:
        """
        Write all expenses to a CSV file.

        Raises:
            ExportError: If the file cannot be written (fatal for the CLI)
        """
        validation = self._validator.validate_export(request)
        if validation.has_errors:
            return self._reject(validation)

        try:
            row_count = export_csv(
                self._store.expenses,
                Path(request.file),
                date_format=self._reporter.date_format,
            )
        except ExportError as e:
            self._audit_logger.log_export_failed(request.file, str(e))
            raise

        self._audit_logger.log_export_completed(request.file, row_count)

        message = f"Expenses exported to {request.file}"
        self._echo(message)
        return CommandResult(command="export", success=True, message=message)


def create_commands(
    settings: TrackerSettings,
    repository: Optional[ExpenseRepositoryInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
    out: Optional[TextIO] = None,
) -> ExpenseCommands:
    """
    Factory function to load the data and wire the command handlers.

    Args:
        settings: Resolved settings (data paths, output formatting)
        repository: Storage backend; defaults to the configured JSON files

    Raises:
        LoadError: If either data file cannot be loaded
    """
    repository = repository or JsonFileRepository.from_settings(settings)
    audit_logger = audit_logger or AuditLogger()

    try:
        store = RecordStore.load(repository)
    except LoadError as e:
        audit_logger.log_load_failed(str(e))
        raise

    audit_logger.log_data_loaded(len(store.expenses), len(store.budgets), store.next_id)

    return ExpenseCommands(
        store=store,
        repository=repository,
        reporter=ExpenseReporter(
            currency_symbol=settings.currency_symbol,
            date_format=settings.date_format,
        ),
        audit_logger=audit_logger,
        out=out,
    )
