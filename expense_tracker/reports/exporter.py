"""CSV export of the expenses collection."""

import csv
from pathlib import Path

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import ExportError


CSV_HEADER = ["ID", "Date", "Description", "Amount", "Category"]


def expense_to_row(expense: Expense, date_format: str = "%Y-%m-%d") -> list[str]:
    return [
        str(expense.id),
        expense.date.strftime(date_format),
        expense.description,
        f"{expense.amount:.2f}",
        expense.category or "",
    ]


def export_csv(
    expenses: list[Expense],
    path: Path,
    date_format: str = "%Y-%m-%d",
) -> int:
    """
    Write every expense to `path` as CSV, replacing the file.

    Returns:
        Number of data rows written

    Raises:
        ExportError: If the file cannot be created or written
    """
    path = Path(path)
    try:
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(CSV_HEADER)
            for expense in expenses:
                writer.writerow(expense_to_row(expense, date_format))
    except OSError as e:
        raise ExportError(f"Could not write export file {path}: {e}") from e
    return len(expenses)
