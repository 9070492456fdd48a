from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .schema import validate_item_dict


class ItemType(str, Enum):
    NONE = 'none'  # empty slot
    SWORD = 'sword'
    SHIELD = 'shield'
    ARMOR = 'armor'
    POTION = 'potion'
    KEY = 'key'
    MISC = 'misc'


@dataclass(frozen=True)
class Item:
    """Value stored in an inventory slot.

    Inventories only look at ``type`` and ``weight``; an item whose type is
    ``ItemType.NONE`` marks an empty slot.
    """

    type: ItemType = ItemType.NONE
    weight: float = 0.0
    id: str = ''
    name: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Item':
        """Create an Item from a dict, validating with the JSON schema."""
        validate_item_dict(data)
        return cls(
            type=ItemType(data['type']),
            weight=float(data.get('weight', 0.0)),
            id=str(data.get('id', '')),
            name=str(data.get('name', '')),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'type': self.type.value, 'weight': self.weight}
        if self.id:
            data['id'] = self.id
        if self.name:
            data['name'] = self.name
        return data

    def is_empty(self) -> bool:
        return self.type == ItemType.NONE


EMPTY = Item()

__all__ = [
    'EMPTY',
    'Item',
    'ItemType',
]
