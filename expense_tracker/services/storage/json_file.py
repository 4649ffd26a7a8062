"""
JSON File Storage Implementation

DESIGN DECISION: Plain JSON files are the storage backend because:
1. Users can read and fix their data with any editor
2. No database setup required
3. Files written by earlier versions of the tool stay readable

TRADEOFFS:
- Whole-file rewrite on every save (fine at personal scale)
- No locking; concurrent invocations race and the last writer wins
- No durability guarantee if the process dies mid-write

The implementation follows the abstract interface, so the command
layer never touches files directly.
"""

from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from expense_tracker.config import TrackerSettings, get_settings
from expense_tracker.models.expense import Budget, Expense
from expense_tracker.services.storage.interface import (
    ExpenseRepositoryInterface,
    LoadError,
    SaveError,
)


EMPTY_COLLECTION = "[]"

_expenses_adapter = TypeAdapter(list[Expense])
_budgets_adapter = TypeAdapter(list[Budget])

logger = structlog.get_logger(__name__)


class JsonFileRepository(ExpenseRepositoryInterface):
    """
    JSON file implementation of the repository.

    Each collection is one file holding a pretty-printed JSON list.
    Missing files are created empty on first load.
    """

    def __init__(
        self,
        expenses_path: Path,
        budgets_path: Path,
    ):
        self.expenses_path = Path(expenses_path)
        self.budgets_path = Path(budgets_path)

    @classmethod
    def from_settings(cls, settings: Optional[TrackerSettings] = None) -> "JsonFileRepository":
        """Build a repository for the configured data files."""
        settings = settings or get_settings()
        return cls(settings.expenses_path, settings.budgets_path)

    def _read_collection(self, path: Path, adapter: TypeAdapter) -> list[Any]:
        """
        Read one collection file.

        Creates the file with an empty list if it does not exist.
        """
        if not path.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(EMPTY_COLLECTION, encoding="utf-8")
            except OSError as e:
                raise LoadError(f"Could not create {path}: {e}") from e
            logger.debug("collection_created", path=str(path))
            return []

        try:
            raw = path.read_bytes()
        except OSError as e:
            raise LoadError(f"Could not read {path}: {e}") from e

        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            raise LoadError(
                f"Malformed data in {path}: {e.error_count()} problem(s), "
                f"first: {e.errors()[0]['msg']}"
            ) from e

    def _write_collection(self, path: Path, adapter: TypeAdapter, records: list[Any]) -> None:
        """Serialize and overwrite one collection file."""
        try:
            payload = adapter.dump_json(records, indent=2, exclude_none=True)
        except (PydanticSerializationError, UnicodeError) as e:
            raise SaveError(f"Could not serialize {path}: {e}") from e
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except OSError as e:
            raise SaveError(f"Could not write {path}: {e}") from e
        logger.debug("collection_saved", path=str(path), records=len(records))

    def load_expenses(self) -> list[Expense]:
        """Load expenses from the expenses file."""
        return self._read_collection(self.expenses_path, _expenses_adapter)

    def save_expenses(self, expenses: list[Expense]) -> None:
        """Write all expenses to the expenses file."""
        self._write_collection(self.expenses_path, _expenses_adapter, expenses)

    def load_budgets(self) -> list[Budget]:
        """Load budgets from the budgets file."""
        return self._read_collection(self.budgets_path, _budgets_adapter)

    def save_budgets(self, budgets: list[Budget]) -> None:
        """Write all budgets to the budgets file."""
        self._write_collection(self.budgets_path, _budgets_adapter, budgets)
