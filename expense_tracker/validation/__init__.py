"""Request validation package."""

from expense_tracker.validation.validator import CommandValidator

__all__ = ["CommandValidator"]
