"""In-memory repository, used as a test double for the JSON files."""

from typing import Optional

from expense_tracker.models.expense import Budget, Expense
from expense_tracker.services.storage.interface import (
    ExpenseRepositoryInterface,
    SaveError,
)


class InMemoryRepository(ExpenseRepositoryInterface):
    """
    Keeps both collections in lists.

    Saved collections are copied so later in-memory edits are not
    visible until the next save. Set `fail_saves` to simulate a
    disk that rejects writes.
    """

    def __init__(
        self,
        expenses: Optional[list[Expense]] = None,
        budgets: Optional[list[Budget]] = None,
    ):
        self.expenses = [e.model_copy() for e in expenses or []]
        self.budgets = [b.model_copy() for b in budgets or []]
        self.expense_saves = 0
        self.budget_saves = 0
        self.fail_saves = False

    def load_expenses(self) -> list[Expense]:
        return [e.model_copy() for e in self.expenses]

    def save_expenses(self, expenses: list[Expense]) -> None:
        if self.fail_saves:
            raise SaveError("simulated write failure for expenses")
        self.expenses = [e.model_copy() for e in expenses]
        self.expense_saves += 1

    def load_budgets(self) -> list[Budget]:
        return [b.model_copy() for b in self.budgets]

    def save_budgets(self, budgets: list[Budget]) -> None:
        if self.fail_saves:
            raise SaveError("simulated write failure for budgets")
        self.budgets = [b.model_copy() for b in budgets]
        self.budget_saves += 1
