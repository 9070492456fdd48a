'''
Items package: the item value type stored in inventory slots and its schema validation.
'''
from .models import EMPTY, Item, ItemType
from .schema import item_errors, validate_item_dict

__all__ = [
    'EMPTY',
    'Item',
    'ItemType',
    'item_errors',
    'validate_item_dict',
]
