"""Reporting package: listings, summaries and CSV export."""

from expense_tracker.reports.exporter import CSV_HEADER, export_csv
from expense_tracker.reports.reporter import ExpenseReporter

__all__ = ["CSV_HEADER", "ExpenseReporter", "export_csv"]
