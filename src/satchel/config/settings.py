from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import ValidationError

from ..exceptions import SettingsError
from ..items.models import Item
from ..logging_config import configure_logging

logger = logging.getLogger(__name__)

_SECTIONS = ("grid", "starting_items", "equipped", "logging")


@dataclass
class StartingItem:
    row: int
    col: int
    item: Item


def _parse_item(data: Any, where: str) -> Item:
    try:
        return Item.from_dict(data)
    except ValidationError as exc:
        raise SettingsError(f"{where}: {exc.message}") from exc


def _parse_starting_item(entry: Any, index: int) -> StartingItem:
    where = f"starting_items[{index}]"
    if not isinstance(entry, dict):
        raise SettingsError(f"{where} must be a mapping with row, col and item")
    missing = [key for key in ("row", "col", "item") if key not in entry]
    if missing:
        raise SettingsError(f"{where} is missing {', '.join(missing)}")
    row, col = entry["row"], entry["col"]
    if not isinstance(row, int) or isinstance(row, bool) or not isinstance(col, int) or isinstance(col, bool):
        raise SettingsError(f"{where} row and col must be integers, got {row!r}, {col!r}")
    return StartingItem(row=row, col=col, item=_parse_item(entry["item"], f"{where}.item"))


def _parse_dimension(grid: Dict[str, Any], key: str) -> int:
    value = grid.get(key, 10)
    if not isinstance(value, int) or isinstance(value, bool):
        raise SettingsError(f"grid.{key} must be an integer, got {value!r}")
    return value


@dataclass
class InventorySettings:
    """Grid dimensions, the items an inventory starts out with, and its log level."""

    rows: int = 10
    columns: int = 10
    starting_items: List[StartingItem] = field(default_factory=list)
    equipped: Optional[Item] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.columns <= 0:
            raise SettingsError(f"Inventory grid must be at least 1x1, got {self.rows}x{self.columns}")
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise SettingsError(f"Unknown log level: {self.log_level!r}")

    @staticmethod
    def _read_mapping(text: str, source: str) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SettingsError(f"Cannot parse inventory settings from {source}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsError(f"Inventory settings in {source} must be a mapping, got {type(data).__name__}")
        return data

    @staticmethod
    def _overlay(defaults: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
        """Apply user values section by section.

        ``grid`` and ``logging`` merge key by key; ``starting_items`` and
        ``equipped`` replace the defaults wholesale.
        """
        merged = dict(defaults)
        for section, value in user.items():
            if section not in _SECTIONS:
                logger.warning("Ignoring unknown inventory settings section: %s", section)
                continue
            if section in ("grid", "logging"):
                if not isinstance(value, dict):
                    raise SettingsError(f"{section} must be a mapping, got {type(value).__name__}")
                merged[section] = {**(defaults.get(section) or {}), **value}
            else:
                merged[section] = value
        return merged

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventorySettings":
        grid = data.get("grid")
        if grid is None:
            grid = {}
        if not isinstance(grid, dict):
            raise SettingsError(f"grid must be a mapping, got {type(grid).__name__}")

        entries = data.get("starting_items")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise SettingsError(f"starting_items must be a list, got {type(entries).__name__}")
        starting = [_parse_starting_item(entry, i) for i, entry in enumerate(entries)]

        equipped_data = data.get("equipped")
        equipped = _parse_item(equipped_data, "equipped") if equipped_data is not None else None

        log_section = data.get("logging") or {}
        if not isinstance(log_section, dict):
            raise SettingsError(f"logging must be a mapping, got {type(log_section).__name__}")

        return cls(
            rows=_parse_dimension(grid, "rows"),
            columns=_parse_dimension(grid, "columns"),
            starting_items=starting,
            equipped=equipped,
            log_level=str(log_section.get("level", "WARNING")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": {"rows": self.rows, "columns": self.columns},
            "starting_items": [
                {"row": s.row, "col": s.col, "item": s.item.to_dict()} for s in self.starting_items
            ],
            "equipped": self.equipped.to_dict() if self.equipped is not None else None,
            "logging": {"level": self.log_level},
        }

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "InventorySettings":
        """Load the packaged defaults, overlaid with ``user_path`` when that file exists."""
        default_text = resources.files("satchel.config").joinpath("default_settings.yaml").read_text(encoding="utf-8")
        data = cls._read_mapping(default_text, "packaged defaults")

        if user_path is not None:
            if user_path.exists():
                user_data = cls._read_mapping(user_path.read_text(encoding="utf-8"), str(user_path))
                data = cls._overlay(data, user_data)
                logger.info("Loaded user inventory settings from %s", user_path)
            else:
                logger.warning("User inventory settings file not found: %s", user_path)

        settings = cls.from_dict(data)
        logger.debug(
            "Inventory settings: %dx%d grid, %d starting items, equipped=%s",
            settings.rows, settings.columns, len(settings.starting_items), settings.equipped,
        )
        return settings

    def configure_logging(self) -> logging.Logger:
        """Set the ``satchel`` logger to this configuration's level."""
        return configure_logging(self.log_level)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(self.to_dict(), sort_keys=False), encoding="utf-8")
        logger.info("Saved inventory settings to %s", path)
