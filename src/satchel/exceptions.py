class SatchelError(Exception):
    """Base exception for the Satchel project."""


class InventoryError(SatchelError):
    """Raised when inventory operations fail."""


class SlotOutOfRangeError(InventoryError, IndexError):
    """Raised when a grid coordinate falls outside the inventory grid."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Slot ({row}, {col}) is out of bounds")
        self.row = row
        self.col = col


class SettingsError(SatchelError):
    """Raised for invalid inventory configuration."""
