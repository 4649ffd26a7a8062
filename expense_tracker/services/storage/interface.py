"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the JSON files behind a single seam
2. Use in-memory storage for testing
3. Keep command logic decoupled from file handling

Collections are always loaded and saved whole. There are no
per-record operations here; the record store works in memory.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import Budget, Expense


class ExpenseRepositoryInterface(ABC):
    """
    Abstract interface for the two persisted collections.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load_expenses(self) -> list[Expense]:
        """
        Load the full expenses collection.

        Returns:
            Expenses in storage order (empty if nothing was stored yet)

        Raises:
            LoadError: If the stored data cannot be read or parsed
        """
        pass

    @abstractmethod
    def save_expenses(self, expenses: list[Expense]) -> None:
        """
        Replace the stored expenses collection.

        Raises:
            SaveError: If the collection cannot be written
        """
        pass

    @abstractmethod
    def load_budgets(self) -> list[Budget]:
        """
        Load the full budgets collection.

        Raises:
            LoadError: If the stored data cannot be read or parsed
        """
        pass

    @abstractmethod
    def save_budgets(self, budgets: list[Budget]) -> None:
        """
        Replace the stored budgets collection.

        Raises:
            SaveError: If the collection cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class LoadError(StorageError):
    """A data file could not be read or parsed. Fatal at startup."""
    pass


class SaveError(StorageError):
    """A collection could not be written back."""
    pass


class ExportError(StorageError):
    """The export file could not be written."""
    pass


class NotFoundError(Exception):
    """Entity not found in the record store."""
    pass


class ExpenseNotFoundError(NotFoundError):
    """No expense carries the requested ID."""

    def __init__(self, expense_id: int):
        self.expense_id = expense_id
        super().__init__(f"Expense with ID {expense_id} not found")
