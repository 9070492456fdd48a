from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple

from ..exceptions import SettingsError, SlotOutOfRangeError
from ..items.models import EMPTY, Item, ItemType

if TYPE_CHECKING:
    from ..config.settings import InventorySettings

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 10
DEFAULT_COLS = 10


def _is_empty(item: Item) -> bool:
    return item.type == ItemType.NONE


class Inventory:
    """
    Fixed grid of item slots plus a single equipped slot.

    - Weight and item count are kept in step with the grid on every mutation.
    - The equipped item lives outside the grid and is never counted.
    - Grid shape is fixed at construction; rows may differ in width.

    Not thread-safe: callers sharing an instance across threads must guard it
    with a single lock.
    """

    def __init__(
        self,
        items: Optional[Sequence[Sequence[Item]]] = None,
        equipped: Optional[Item] = None,
    ) -> None:
        if items is None:
            self._grid: List[List[Item]] = [[EMPTY] * DEFAULT_COLS for _ in range(DEFAULT_ROWS)]
        else:
            self._grid = [list(row) for row in items]
        self._equipped: Optional[Item] = equipped
        self._weight = 0.0
        self._count = 0
        for row in self._grid:
            for item in row:
                if not _is_empty(item):
                    self._weight += item.weight
                    self._count += 1
        logger.debug(
            'Inventory created: %d rows, %d items, weight=%s, equipped=%s',
            len(self._grid), self._count, self._weight, equipped,
        )

    @classmethod
    def from_settings(cls, settings: 'InventorySettings') -> 'Inventory':
        """Build an inventory from loaded settings, placing the starting items."""
        inventory = cls([[EMPTY] * settings.columns for _ in range(settings.rows)])
        for start in settings.starting_items:
            try:
                stored = inventory.store(start.row, start.col, start.item)
            except SlotOutOfRangeError as exc:
                raise SettingsError(f'Starting item {start.item.id or start.item.type.value} is outside the grid') from exc
            if not stored:
                raise SettingsError(f'Starting item cannot be placed at ({start.row}, {start.col})')
        if settings.equipped is not None:
            inventory.equip(settings.equipped)
        return inventory

    # Equipped slot

    def get_equipped(self) -> Optional[Item]:
        return self._equipped

    def equip(self, item: Item) -> Optional[Item]:
        """
        Move ``item`` into the equipped slot.

        Returns the previously equipped item (if any). The inventory drops its
        reference to it, so the caller now owns it.
        """
        previous = self._equipped
        self._equipped = item
        logger.debug('Equipped %s (replaced %s)', item, previous)
        return previous

    def unequip(self) -> Optional[Item]:
        """Clear the equipped slot and hand the item back to the caller."""
        item = self._equipped
        self._equipped = None
        if item is not None:
            logger.debug('Unequipped %s', item)
        return item

    def discard_equipped(self) -> None:
        """Release the equipped item. No-op when nothing is equipped."""
        if self._equipped is None:
            return
        discarded = self._equipped
        self._equipped = None
        logger.debug('Discarded equipped item %s', discarded)

    # Grid queries

    def get_items(self) -> Tuple[Tuple[Item, ...], ...]:
        return tuple(tuple(row) for row in self._grid)

    def get_weight(self) -> float:
        return self._weight

    def get_count(self) -> int:
        return self._count

    @property
    def rows(self) -> int:
        return len(self._grid)

    def columns(self, row: int) -> int:
        if row < 0 or row >= len(self._grid):
            raise SlotOutOfRangeError(row, 0)
        return len(self._grid[row])

    def _check_bounds(self, row: int, col: int) -> None:
        if row < 0 or row >= len(self._grid) or col < 0 or col >= len(self._grid[row]):
            raise SlotOutOfRangeError(row, col)

    def at(self, row: int, col: int) -> Item:
        """
        Return the item at ``(row, col)``.

        Raises SlotOutOfRangeError if either index is outside the grid.
        """
        self._check_bounds(row, col)
        return self._grid[row][col]

    def first_empty(self) -> Optional[Tuple[int, int]]:
        for r, row in enumerate(self._grid):
            for c, item in enumerate(row):
                if _is_empty(item):
                    return r, c
        return None

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[Tuple[int, int, Item]]:
        """Yield ``(row, col, item)`` for every occupied slot in row-major order."""
        for r, row in enumerate(self._grid):
            for c, item in enumerate(row):
                if not _is_empty(item):
                    yield r, c, item

    # Grid mutations

    def store(self, row: int, col: int, item: Item) -> bool:
        """
        Store ``item`` in the empty slot at ``(row, col)``.

        Returns True on success, False if the slot is occupied or ``item`` is
        itself an empty-slot item. Raises SlotOutOfRangeError for coordinates
        outside the grid.
        """
        self._check_bounds(row, col)
        if _is_empty(item):
            logger.debug('Refused to store empty item at (%d, %d)', row, col)
            return False
        current = self._grid[row][col]
        if not _is_empty(current):
            logger.debug('Slot (%d, %d) already holds %s', row, col, current)
            return False
        self._grid[row][col] = item
        self._count += 1
        self._weight += item.weight
        logger.debug('Stored %s at (%d, %d); count=%d weight=%s', item, row, col, self._count, self._weight)
        return True

    def add(self, item: Item) -> Optional[Tuple[int, int]]:
        """Store ``item`` in the first empty slot. Returns its coordinates, or None if it did not fit."""
        if _is_empty(item):
            return None
        slot = self.first_empty()
        if slot is None:
            logger.debug('Inventory full; could not add %s', item)
            return None
        self.store(slot[0], slot[1], item)
        return slot

    def take(self, row: int, col: int) -> Optional[Item]:
        """
        Remove and return the item at ``(row, col)``.

        Returns None if the slot is already empty.
        """
        self._check_bounds(row, col)
        item = self._grid[row][col]
        if _is_empty(item):
            return None
        self._grid[row][col] = EMPTY
        self._count -= 1
        # Exact sum over the remaining occupied cells
        self._weight = math.fsum(cell.weight for _, _, cell in self)
        logger.debug('Took %s from (%d, %d); count=%d weight=%s', item, row, col, self._count, self._weight)
        return item

    # Lifetime

    def close(self) -> None:
        """Owner teardown: release the equipped item."""
        self.discard_equipped()

    def __enter__(self) -> 'Inventory':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
