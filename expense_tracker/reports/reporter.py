"""
Reporting Engine

Computes totals over the in-memory expenses and renders the text
printed by the `list` and `summary` subcommands.

DESIGN DECISION: Computation and rendering are separate steps.
`summarize` returns a SummaryReport; `render_summary` turns it into
lines. Tests check numbers without parsing output.

NOTE: A monthly summary only counts expenses from the *current*
calendar year, whatever year the expense itself was recorded in.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from expense_tracker.models.commands import SummaryReport
from expense_tracker.models.expense import Budget, Expense


LIST_HEADER = "ID\tDate\t\tDescription\tAmount"
NO_EXPENSES_MESSAGE = "No expenses recorded yet."


class ExpenseReporter:
    """
    Builds listings and summaries.

    GUARANTEES:
    - Only reports what is in the collection passed in
    - Storage order is preserved in listings
    """

    def __init__(self, currency_symbol: str = "$", date_format: str = "%Y-%m-%d"):
        self._currency = currency_symbol
        self.date_format = date_format

    def format_money(self, amount: Decimal) -> str:
        return f"{self._currency}{amount:.2f}"

    @staticmethod
    def filter_by_category(
        expenses: Iterable[Expense],
        category: Optional[str],
    ) -> list[Expense]:
        """Exact match on category; no filter when category is empty."""
        if not category:
            return list(expenses)
        return [e for e in expenses if e.category == category]

    @staticmethod
    def filter_by_month(
        expenses: Iterable[Expense],
        month: int,
        year: int,
    ) -> list[Expense]:
        return [e for e in expenses if e.date.month == month and e.date.year == year]

    def summarize(
        self,
        expenses: Iterable[Expense],
        today: date,
        month: Optional[int] = None,
        category: Optional[str] = None,
        budget_override: Optional[Decimal] = None,
        stored_budget: Optional[Budget] = None,
    ) -> SummaryReport:
        """
        Total the expenses, optionally restricted to one month of this year.

        For monthly summaries the budget flag is checked first; a stored
        budget is only used when no positive flag value was given.
        """
        selected = self.filter_by_category(expenses, category)

        if month is None:
            return SummaryReport(
                total=sum((e.amount for e in selected), Decimal("0")),
                expense_count=len(selected),
                category=category or None,
            )

        selected = self.filter_by_month(selected, month, today.year)
        report = SummaryReport(
            total=sum((e.amount for e in selected), Decimal("0")),
            expense_count=len(selected),
            category=category or None,
            month=month,
            year=today.year,
        )

        if budget_override is not None and budget_override > 0:
            report.budget_limit = budget_override
            report.budget_source = "provided"
        elif stored_budget is not None:
            report.budget_limit = stored_budget.amount
            report.budget_source = "stored"

        return report

    def render_summary(self, report: SummaryReport) -> list[str]:
        if report.month is None:
            return [f"Total expenses: {self.format_money(report.total)}"]

        lines = [f"Total expenses for {report.month_label}: {self.format_money(report.total)}"]
        if report.over_budget:
            limit = self.format_money(report.budget_limit)
            if report.budget_source == "provided":
                lines.append(
                    f"Warning: Expenses exceed provided budget of {limit} for {report.month_label}"
                )
            else:
                lines.append(
                    f"Warning: You have exceeded your stored budget of {limit} for {report.month_label}"
                )
        return lines

    def render_list(self, expenses: list[Expense]) -> list[str]:
        """Tab separated table in storage order."""
        if not expenses:
            return [NO_EXPENSES_MESSAGE]

        lines = [LIST_HEADER]
        for expense in expenses:
            lines.append(
                f"{expense.id}\t{expense.date.strftime(self.date_format)}"
                f"\t{expense.description}\t{expense.amount:.2f}"
            )
        return lines
