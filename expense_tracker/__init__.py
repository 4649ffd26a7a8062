"""
Expense Tracker - Source Package

A small command-line tool for recording personal expenses and
checking them against monthly budgets.

DESIGN PRINCIPLES:
1. Plain JSON files are the source of truth
2. Fail early on unreadable data, never on a typo
3. Storage layer is swappable
4. Every change is logged
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
