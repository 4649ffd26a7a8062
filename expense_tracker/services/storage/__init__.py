"""
Storage Services Package

Provides the abstract repository interface and its implementations.
JSON files are the real backend; the in-memory repository backs tests.
"""

from expense_tracker.services.storage.interface import (
    ExpenseNotFoundError,
    ExpenseRepositoryInterface,
    ExportError,
    LoadError,
    NotFoundError,
    SaveError,
    StorageError,
)
from expense_tracker.services.storage.json_file import JsonFileRepository
from expense_tracker.services.storage.memory import InMemoryRepository

__all__ = [
    # Interfaces
    "ExpenseRepositoryInterface",
    # Exceptions
    "ExpenseNotFoundError",
    "ExportError",
    "LoadError",
    "NotFoundError",
    "SaveError",
    "StorageError",
    # Implementations
    "InMemoryRepository",
    "JsonFileRepository",
]
