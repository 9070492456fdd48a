"""
Inventory package: the slot grid, its equipped slot and running totals.
"""
from .inventory import DEFAULT_COLS, DEFAULT_ROWS, Inventory

__all__ = ["DEFAULT_COLS", "DEFAULT_ROWS", "Inventory"]
