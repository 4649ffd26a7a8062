"""
Command Line Interface for Expense Tracker

Parses the subcommand and its flags, resolves settings, loads the data
files and hands a typed request to the matching ExpenseCommands handler.

Exit status:
    0 - command ran (including validation and not-found notices)
    1 - a data file could not be loaded, or the export could not be written
    2 - usage error (unknown subcommand, missing required flag, bad number)
"""

import argparse
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from expense_tracker import __version__
from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.commands import ExpenseCommands, create_commands
from expense_tracker.config import TrackerSettings, get_settings
from expense_tracker.models.commands import (
    AddExpenseRequest,
    DeleteExpenseRequest,
    ExportRequest,
    SetBudgetRequest,
    SummaryRequest,
    UpdateExpenseRequest,
)
from expense_tracker.services.storage import ExportError, LoadError


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _decimal(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    return amount


# =============================================================================
# SUBCOMMAND RUNNERS
# =============================================================================

def _run_add(commands: ExpenseCommands, args: argparse.Namespace) -> None:
    commands.add(AddExpenseRequest(
        description=args.description,
        amount=args.amount,
        category=args.category,
    ))


def _run_update(commands: ExpenseCommands, args: argparse.Namespace) -> None:
    commands.update(UpdateExpenseRequest(
        expense_id=args.id,
        description=args.description,
        amount=args.amount,
        category=args.category,
    ))


def _run_delete(commands: ExpenseCommands, args: argparse.Namespace) -> None:
    commands.delete(DeleteExpenseRequest(expense_id=args.id))


def _run_list(commands: ExpenseCommands, args: argparse.Namespace) -> None:
    commands.list_expenses()


def _run_summary(commands: ExpenseCommands, args: argparse.Namespace) -> None:
    commands.summary(SummaryRequest(
        month=args.month,
        category=args.category,
        budget=args.budget,
    ))


def _run_budget(commands: ExpenseCommands, args: argparse.Namespace) -> None:
    commands.set_budget(SetBudgetRequest(
        amount=args.amount,
        month=args.month,
        year=args.year,
    ))


def _run_export(commands: ExpenseCommands, args: argparse.Namespace) -> None:
    commands.export(ExportRequest(file=args.file))


# =============================================================================
# PARSER
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expense-tracker",
        description="A simple expense manager CLI application",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--data-dir",
        dest="data_dir",
        help="Directory holding expenses.json and budgets.json (defaults to the working directory).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Level for diagnostic logs on stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    add_parser = subparsers.add_parser("add", help="Add a new expense")
    add_parser.add_argument("-d", "--description", required=True, help="Description of the expense")
    add_parser.add_argument("-a", "--amount", type=_decimal, required=True, help="Amount spent")
    add_parser.add_argument("-c", "--category", help="Category of the expense")
    add_parser.set_defaults(handler=_run_add)

    update_parser = subparsers.add_parser("update", help="Update an existing expense")
    update_parser.add_argument("-i", "--id", type=int, required=True, help="Expense ID to update")
    update_parser.add_argument("-d", "--description", help="New description for the expense")
    update_parser.add_argument("-a", "--amount", type=_decimal, help="New amount for the expense")
    update_parser.add_argument("-c", "--category", help="New category for the expense")
    update_parser.set_defaults(handler=_run_update)

    delete_parser = subparsers.add_parser("delete", help="Delete an expense")
    delete_parser.add_argument("-i", "--id", type=int, required=True, help="Expense ID to delete")
    delete_parser.set_defaults(handler=_run_delete)

    list_parser = subparsers.add_parser("list", help="List all expenses")
    list_parser.set_defaults(handler=_run_list)

    summary_parser = subparsers.add_parser("summary", help="Summarize expenses")
    summary_parser.add_argument("-m", "--month", type=int, help="Month to filter expenses by (1-12)")
    summary_parser.add_argument("-c", "--category", help="Category to filter expenses by")
    summary_parser.add_argument("-b", "--budget", type=_decimal, help="Budget amount to check against")
    summary_parser.set_defaults(handler=_run_summary)

    budget_parser = subparsers.add_parser("budget", help="Set a monthly budget")
    budget_parser.add_argument("-a", "--amount", type=_decimal, required=True, help="Budget amount")
    budget_parser.add_argument("-m", "--month", type=int, required=True, help="Month to set budget for (1-12)")
    budget_parser.add_argument("-y", "--year", type=int, help="Year to set budget for (defaults to this year)")
    budget_parser.set_defaults(handler=_run_budget)

    export_parser = subparsers.add_parser("export", help="Export expenses to a CSV file")
    export_parser.add_argument("-f", "--file", required=True, help="File to export expenses to")
    export_parser.set_defaults(handler=_run_export)

    return parser


def resolve_settings(args: argparse.Namespace) -> TrackerSettings:
    """Apply command line overrides on top of environment settings."""
    settings = get_settings()
    overrides = {}
    if args.data_dir:
        overrides["data_dir"] = Path(args.data_dir)
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the `expense-tracker` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = resolve_settings(args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level, settings.log_json)
    audit_logger = AuditLogger()

    try:
        commands = create_commands(settings, audit_logger=audit_logger)
    except LoadError:
        return 1

    try:
        args.handler(commands, args)
    except ExportError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
