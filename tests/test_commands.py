"""Tests for the subcommand handlers against an in-memory repository."""

from decimal import Decimal

import pytest

from expense_tracker.commands import ExpenseCommands, create_commands
from expense_tracker.config import TrackerSettings
from expense_tracker.models.audit import AuditEventType
from expense_tracker.models.commands import (
    AddExpenseRequest,
    DeleteExpenseRequest,
    ExportRequest,
    SetBudgetRequest,
    SummaryRequest,
    UpdateExpenseRequest,
)
from expense_tracker.services.storage import (
    ExportError,
    InMemoryRepository,
    JsonFileRepository,
    LoadError,
)
from expense_tracker.store import RecordStore

from conftest import fixed_clock, make_budget, make_expense


def add(commands, description, amount, category=None):
    return commands.add(AddExpenseRequest(
        description=description, amount=Decimal(amount), category=category,
    ))


def event_types(audit_logger):
    return [event.event_type for event in audit_logger.events]


class TestAddListDeleteSummary:
    """The everyday flow: add, summarize, delete, list."""

    def test_walkthrough(self, commands, repository, capsys):
        first = add(commands, "coffee", "3.50")
        second = add(commands, "lunch", "12.00")
        assert (first.expense_id, second.expense_id) == (1, 2)

        commands.summary(SummaryRequest())
        commands.delete(DeleteExpenseRequest(expense_id=1))
        capsys.readouterr()
        commands.list_expenses()

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "ID\tDate\t\tDescription\tAmount",
            "2\t2026-03-15\tlunch\t12.00",
        ]
        assert [e.id for e in repository.load_expenses()] == [2]

    def test_add_prints_id(self, commands, capsys):
        add(commands, "coffee", "3.50")
        assert capsys.readouterr().out == "Expense added successfully (ID: 1)\n"

    def test_summary_total(self, commands, capsys):
        add(commands, "coffee", "3.50")
        add(commands, "lunch", "12.00")
        capsys.readouterr()

        commands.summary(SummaryRequest())

        assert capsys.readouterr().out == "Total expenses: $15.50\n"

    def test_list_empty(self, commands, capsys):
        commands.list_expenses()
        assert capsys.readouterr().out == "No expenses recorded yet.\n"

    def test_add_persists_immediately(self, commands, repository):
        add(commands, "coffee", "3.50", category="food")

        saved = repository.load_expenses()
        assert len(saved) == 1
        assert saved[0].category == "food"
        assert repository.expense_saves == 1


class TestValidationNotices:
    """Bad values print a message and change nothing."""

    @pytest.mark.parametrize("amount", ["0", "-5", "-0.01"])
    def test_add_rejects_non_positive_amount(self, commands, audit_logger, capsys, amount):
        result = add(commands, "x", amount)

        assert result.success is False
        assert capsys.readouterr().out == "Amount must be a positive value.\n"
        assert commands.store.expenses == []
        assert AuditEventType.VALIDATION_FAILED in event_types(audit_logger)

    def test_rejected_add_still_writes_collection(self, commands, repository):
        """Test the expenses file is rewritten even when nothing changed."""
        add(commands, "x", "-1")
        assert repository.expense_saves == 1

    def test_update_rejects_zero_amount(self, commands, capsys):
        add(commands, "tea", "2")
        capsys.readouterr()

        commands.update(UpdateExpenseRequest(expense_id=1, amount=Decimal("0")))

        assert capsys.readouterr().out == "Amount must be a positive value.\n"
        assert commands.store.expenses[0].amount == Decimal("2")

    def test_budget_rejects_bad_month(self, commands, repository, capsys):
        result = commands.set_budget(SetBudgetRequest(amount=Decimal("100"), month=13))

        assert result.success is False
        assert capsys.readouterr().out == (
            "Invalid month. Please enter a value between 1 and 12.\n"
        )
        assert repository.load_budgets() == []

    def test_budget_rejects_bad_amount_first(self, commands, capsys):
        """Test the amount is checked before the month."""
        commands.set_budget(SetBudgetRequest(amount=Decimal("-1"), month=0))
        assert capsys.readouterr().out == "Budget amount must be a positive value.\n"

    def test_summary_rejects_bad_month(self, commands, capsys):
        commands.summary(SummaryRequest(month=13))
        assert capsys.readouterr().out == (
            "Invalid month. Please enter a value between 1 and 12.\n"
        )

    @pytest.mark.parametrize("amount", ["1e400", "1e-400"])
    def test_add_rejects_amount_that_cannot_be_stored(self, commands, repository, capsys, amount):
        """Test amounts that would not survive being written as a JSON number."""
        result = add(commands, "x", amount)

        assert result.success is False
        assert capsys.readouterr().out == "Amount is out of range.\n"
        assert repository.load_expenses() == []

    def test_budget_rejects_amount_that_cannot_be_stored(self, commands, capsys):
        commands.set_budget(SetBudgetRequest(amount=Decimal("1e400"), month=3))
        assert capsys.readouterr().out == "Amount is out of range.\n"
        assert commands.store.budgets == []

    def test_add_rejects_undecodable_description(self, commands, repository, capsys):
        result = add(commands, "caf\udce9", "3")

        assert result.success is False
        assert capsys.readouterr().out == (
            "Text contains characters that cannot be stored.\n"
        )
        assert commands.store.expenses == []

    def test_update_rejects_undecodable_category(self, commands, capsys):
        add(commands, "tea", "2", category="drinks")
        capsys.readouterr()

        commands.update(UpdateExpenseRequest(expense_id=1, category="caf\udce9"))

        assert capsys.readouterr().out == (
            "Text contains characters that cannot be stored.\n"
        )
        assert commands.store.expenses[0].category == "drinks"

    def test_summary_month_zero_means_no_filter(self, commands, capsys):
        add(commands, "coffee", "3.50")
        capsys.readouterr()

        commands.summary(SummaryRequest(month=0))

        assert capsys.readouterr().out == "Total expenses: $3.50\n"

    def test_export_requires_file_name(self, commands, capsys):
        result = commands.export(ExportRequest(file=""))

        assert result.success is False
        assert capsys.readouterr().out == "Please specify an export file using --file\n"


class TestUpdateDelete:
    """Changing and removing existing expenses."""

    def test_update_description_and_category(self, commands, repository, capsys):
        add(commands, "tea", "2")
        capsys.readouterr()

        result = commands.update(UpdateExpenseRequest(
            expense_id=1, description="green tea", category="drinks",
        ))

        assert result.success is True
        assert capsys.readouterr().out == "Expense updated successfully (ID: 1)\n"
        saved = repository.load_expenses()[0]
        assert (saved.description, saved.amount, saved.category) == (
            "green tea", Decimal("2"), "drinks",
        )

    def test_update_missing_id(self, commands, audit_logger, capsys):
        add(commands, "tea", "2")
        capsys.readouterr()

        result = commands.update(UpdateExpenseRequest(expense_id=99, description="x"))

        assert result.success is False
        assert capsys.readouterr().out == "Expense with ID 99 not found\n"
        assert commands.store.expenses[0].description == "tea"
        assert AuditEventType.EXPENSE_NOT_FOUND in event_types(audit_logger)

    def test_delete_missing_id(self, commands, capsys):
        add(commands, "tea", "2")
        capsys.readouterr()

        commands.delete(DeleteExpenseRequest(expense_id=5))

        assert capsys.readouterr().out == "Expense with ID 5 not found\n"
        assert len(commands.store.expenses) == 1

    def test_delete_prints_confirmation(self, commands, capsys):
        add(commands, "tea", "2")
        capsys.readouterr()

        commands.delete(DeleteExpenseRequest(expense_id=1))

        assert capsys.readouterr().out == "Expense deleted successfully (ID: 1)\n"


class TestSaveFailures:
    """A failed write is logged and the in-memory change is kept."""

    def test_failed_save_keeps_mutation(self, commands, repository, audit_logger, capsys):
        repository.fail_saves = True

        result = add(commands, "coffee", "3.50")

        assert result.success is True
        assert capsys.readouterr().out == "Expense added successfully (ID: 1)\n"
        assert len(commands.store.expenses) == 1
        assert repository.load_expenses() == []
        assert AuditEventType.SAVE_FAILED in event_types(audit_logger)

    def test_save_reports_outcome(self, commands, repository):
        assert commands.save("expenses") is True
        repository.fail_saves = True
        assert commands.save("budgets") is False


class TestBudgets:
    """Setting and checking monthly budgets."""

    def test_set_budget_defaults_to_current_year(self, commands, repository, capsys):
        commands.set_budget(SetBudgetRequest(amount=Decimal("200"), month=3))

        assert capsys.readouterr().out == (
            "Budget set successfully for March 2026: $200.00\n"
        )
        assert [b.key for b in repository.load_budgets()] == [(3, 2026)]

    def test_year_zero_means_current_year(self, commands):
        commands.set_budget(SetBudgetRequest(amount=Decimal("50"), month=1, year=0))
        assert commands.store.budgets[0].year == 2026

    def test_explicit_year(self, commands, capsys):
        commands.set_budget(SetBudgetRequest(amount=Decimal("75.5"), month=12, year=2027))
        assert capsys.readouterr().out == (
            "Budget set successfully for December 2027: $75.50\n"
        )

    def test_setting_twice_keeps_one_entry(self, commands, repository):
        commands.set_budget(SetBudgetRequest(amount=Decimal("100"), month=3))
        commands.set_budget(SetBudgetRequest(amount=Decimal("300"), month=3))

        budgets = repository.load_budgets()
        assert len(budgets) == 1
        assert budgets[0].amount == Decimal("300")
        assert repository.budget_saves == 2

    def test_stored_budget_warning(self, commands, capsys):
        add(commands, "rent", "120")
        commands.set_budget(SetBudgetRequest(amount=Decimal("100"), month=3))
        capsys.readouterr()

        commands.summary(SummaryRequest(month=3))

        assert capsys.readouterr().out.splitlines() == [
            "Total expenses for March: $120.00",
            "Warning: You have exceeded your stored budget of $100.00 for March",
        ]

    def test_provided_budget_warning(self, commands, capsys):
        add(commands, "rent", "120")
        commands.set_budget(SetBudgetRequest(amount=Decimal("500"), month=3))
        capsys.readouterr()

        commands.summary(SummaryRequest(month=3, budget=Decimal("50")))

        assert capsys.readouterr().out.splitlines() == [
            "Total expenses for March: $120.00",
            "Warning: Expenses exceed provided budget of $50.00 for March",
        ]

    def test_budget_for_other_year_is_not_used(self):
        repository = InMemoryRepository(
            expenses=[make_expense(1, 120)],
            budgets=[make_budget(3, 2025, 10)],
        )
        commands = ExpenseCommands(RecordStore.load(repository, clock=fixed_clock), repository)

        report = commands.build_summary(SummaryRequest(month=3))

        assert report.total == Decimal("120")
        assert report.budget_limit is None


class TestExport:
    """CSV export."""

    def test_export_writes_file(self, commands, audit_logger, tmp_path, capsys):
        add(commands, "coffee", "3.50")
        capsys.readouterr()
        target = tmp_path / "out.csv"

        result = commands.export(ExportRequest(file=str(target)))

        assert result.success is True
        assert capsys.readouterr().out == f"Expenses exported to {target}\n"
        assert target.read_text(encoding="utf-8").splitlines() == [
            "ID,Date,Description,Amount,Category",
            "1,2026-03-15,coffee,3.50,",
        ]
        assert AuditEventType.EXPORT_COMPLETED in event_types(audit_logger)

    def test_export_failure_propagates(self, commands, audit_logger, tmp_path):
        with pytest.raises(ExportError):
            commands.export(ExportRequest(file=str(tmp_path)))

        assert AuditEventType.EXPORT_FAILED in event_types(audit_logger)


class TestCreateCommands:
    """The factory that loads data and wires the handlers."""

    def test_loads_existing_data(self, audit_logger):
        repository = InMemoryRepository(expenses=[make_expense(4, 10)])

        commands = create_commands(
            TrackerSettings(), repository=repository, audit_logger=audit_logger,
        )

        assert commands.store.next_id == 5
        assert AuditEventType.DATA_LOADED in event_types(audit_logger)

    def test_uses_json_files_from_settings(self, tmp_path):
        settings = TrackerSettings(data_dir=tmp_path / "data")

        create_commands(settings)

        assert (tmp_path / "data" / "expenses.json").read_text(encoding="utf-8") == "[]"
        assert (tmp_path / "data" / "budgets.json").exists()

    def test_load_failure_is_raised(self, tmp_path, audit_logger):
        (tmp_path / "expenses.json").write_text("{broken", encoding="utf-8")
        repository = JsonFileRepository(tmp_path / "expenses.json", tmp_path / "budgets.json")

        with pytest.raises(LoadError):
            create_commands(TrackerSettings(), repository=repository, audit_logger=audit_logger)

        assert AuditEventType.LOAD_FAILED in event_types(audit_logger)

    def test_currency_symbol_from_settings(self, capsys):
        repository = InMemoryRepository(expenses=[make_expense(1, "2.5")])
        commands = create_commands(TrackerSettings(currency_symbol="£"), repository=repository)

        commands.summary(SummaryRequest())

        assert capsys.readouterr().out == "Total expenses: £2.50\n"
