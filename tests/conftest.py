"""Shared fixtures for the expense tracker tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.commands import ExpenseCommands
from expense_tracker.config import get_settings
from expense_tracker.models.expense import Budget, Expense
from expense_tracker.services.storage import InMemoryRepository
from expense_tracker.store import RecordStore


FIXED_NOW = datetime(2026, 3, 15, 10, 30, 0)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Run every test in an empty directory with fresh settings and logging."""
    monkeypatch.chdir(tmp_path)
    for name in ("DATA_DIR", "EXPENSES_FILE", "BUDGETS_FILE", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(f"EXPENSE_TRACKER_{name}", raising=False)
    get_settings.cache_clear()
    configure_logging("WARNING")
    yield
    get_settings.cache_clear()


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_expense(expense_id, amount, when=FIXED_NOW, description="item", category=None):
    return Expense(
        id=expense_id,
        date=when,
        description=description,
        amount=Decimal(str(amount)),
        category=category,
    )


def make_budget(month, year, amount):
    return Budget(month=month, year=year, amount=Decimal(str(amount)))


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def commands(repository, audit_logger):
    """Command handlers over an empty in-memory repository and a fixed clock."""
    store = RecordStore.load(repository, clock=fixed_clock)
    return ExpenseCommands(store, repository, audit_logger=audit_logger)
