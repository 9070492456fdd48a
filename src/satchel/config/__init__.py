from .settings import InventorySettings, StartingItem

__all__ = ["InventorySettings", "StartingItem"]
