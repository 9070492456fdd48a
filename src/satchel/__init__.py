"""
Satchel package root.

A grid-based inventory container for game entities: a fixed grid of item
slots plus a single equipped slot, with running weight and item-count totals.
"""

from .exceptions import InventoryError, SatchelError, SettingsError, SlotOutOfRangeError
from .inventory import Inventory
from .items import EMPTY, Item, ItemType

__all__ = [
    "EMPTY",
    "Inventory",
    "InventoryError",
    "Item",
    "ItemType",
    "SatchelError",
    "SettingsError",
    "SlotOutOfRangeError",
]
