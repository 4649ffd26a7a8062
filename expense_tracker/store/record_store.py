"""
Record Store

Holds both collections in memory for the duration of one invocation.

INVARIANTS:
- Expense IDs are assigned as max(loaded IDs) + 1 and only ever go up
  within a run; a deleted ID is not handed out again until the next
  run recomputes the counter from the saved file.
- At most one budget exists per (month, year).

Lookups are linear scans; the collections are personal-scale.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from expense_tracker.models.expense import Budget, Expense
from expense_tracker.services.storage.interface import (
    ExpenseNotFoundError,
    ExpenseRepositoryInterface,
)


def local_now() -> datetime:
    """Current time with the local UTC offset attached."""
    return datetime.now().astimezone()


class RecordStore:
    """In-memory expenses and budgets with ID assignment."""

    def __init__(
        self,
        expenses: Optional[list[Expense]] = None,
        budgets: Optional[list[Budget]] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self.expenses: list[Expense] = list(expenses or [])
        self.budgets: list[Budget] = list(budgets or [])
        self._clock = clock
        self.next_id = max((e.id for e in self.expenses), default=0) + 1

    @classmethod
    def load(
        cls,
        repository: ExpenseRepositoryInterface,
        clock: Callable[[], datetime] = local_now,
    ) -> "RecordStore":
        """
        Load both collections from a repository.

        Raises:
            LoadError: If either collection cannot be loaded
        """
        expenses = repository.load_expenses()
        budgets = repository.load_budgets()
        return cls(expenses, budgets, clock=clock)

    def now(self) -> datetime:
        return self._clock()

    # Expenses

    def add_expense(
        self,
        description: str,
        amount: Decimal,
        category: Optional[str] = None,
    ) -> Expense:
        """Append a new expense stamped with the current time."""
        expense = Expense(
            id=self.next_id,
            date=self.now(),
            description=description,
            amount=amount,
            category=category,
        )
        self.expenses.append(expense)
        self.next_id += 1
        return expense

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return next((e for e in self.expenses if e.id == expense_id), None)

    def update_expense(
        self,
        expense_id: int,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
    ) -> tuple[Expense, list[str]]:
        """
        Overwrite the fields that carry a value.

        Empty strings and a zero/None amount leave the field untouched.

        Returns:
            (expense, names_of_changed_fields)

        Raises:
            ExpenseNotFoundError: If no expense has this ID
        """
        expense = self.get_expense(expense_id)
        if expense is None:
            raise ExpenseNotFoundError(expense_id)

        changed = []
        if description:
            expense.description = description
            changed.append("description")
        if amount:
            expense.amount = amount
            changed.append("amount")
        if category:
            expense.category = category
            changed.append("category")
        return expense, changed

    def delete_expense(self, expense_id: int) -> Expense:
        """
        Remove the first expense with this ID, keeping the others in order.

        Raises:
            ExpenseNotFoundError: If no expense has this ID
        """
        for index, expense in enumerate(self.expenses):
            if expense.id == expense_id:
                return self.expenses.pop(index)
        raise ExpenseNotFoundError(expense_id)

    # Budgets

    def get_budget(self, month: int, year: int) -> Optional[Budget]:
        return next(
            (b for b in self.budgets if b.month == month and b.year == year),
            None,
        )

    def set_budget(self, budget: Budget) -> Budget:
        """Replace the budget for the same (month, year), or append it."""
        for index, existing in enumerate(self.budgets):
            if existing.key == budget.key:
                self.budgets[index] = budget
                return budget
        self.budgets.append(budget)
        return budget
