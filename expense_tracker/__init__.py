"""
Expense Tracker - Source Package

A small personal expense tracker: create, list, edit and delete expense
records and watch a running total.

DESIGN PRINCIPLES:
1. The store is the single source of truth
2. The controller mirrors the store and never diverges after an operation
3. Storage is swappable behind an async interface
4. Validation lives above the store, never inside it
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
