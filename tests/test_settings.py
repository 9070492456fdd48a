import textwrap
from pathlib import Path

import pytest

from satchel.config import InventorySettings, StartingItem
from satchel.exceptions import SettingsError
from satchel.inventory import Inventory
from satchel.items import Item, ItemType


def _write(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


def test_load_defaults():
    settings = InventorySettings.load()
    assert settings.rows == 10
    assert settings.columns == 10
    assert settings.starting_items == []
    assert settings.equipped is None


def test_missing_user_file_falls_back_to_defaults(tmp_path, caplog):
    settings = InventorySettings.load(tmp_path / "missing.yaml")
    assert (settings.rows, settings.columns) == (10, 10)
    assert "not found" in caplog.text


def test_user_file_overlays_defaults(tmp_path):
    path = _write(tmp_path / "inv.yaml", """
        grid:
          rows: 3
        starting_items:
          - row: 0
            col: 1
            item: {type: sword, weight: 5.0, id: iron_sword}
        equipped: {type: shield, weight: 7.5}
    """)
    settings = InventorySettings.load(path)
    assert settings.rows == 3
    assert settings.columns == 10
    assert settings.starting_items == [StartingItem(0, 1, Item(ItemType.SWORD, 5.0, id="iron_sword"))]
    assert settings.equipped == Item(ItemType.SHIELD, 7.5)


def test_invalid_item_in_settings_raises(tmp_path):
    path = _write(tmp_path / "inv.yaml", """
        starting_items:
          - {row: 0, col: 0, item: {type: spoon}}
    """)
    with pytest.raises(SettingsError, match=r"starting_items\[0\]\.item: .spoon. is not one of"):
        InventorySettings.load(path)


@pytest.mark.parametrize("data", [
    {"grid": {"rows": 0}},
    {"grid": {"columns": -2}},
    {"grid": {"rows": "many"}},
    {"grid": [10, 10]},
    {"grid": 12},
    {"grid": {"rows": True}},
    {"starting_items": {"row": 0}},
    {"starting_items": ["sword"]},
    {"starting_items": [{"row": 0, "item": {"type": "key"}}]},
    {"starting_items": [{"row": "0", "col": 0, "item": {"type": "key"}}]},
    {"equipped": {"type": "key", "weight": -1}},
    {"logging": "loud"},
    {"logging": {"level": "chatty"}},
])
def test_malformed_settings_raise_settings_error(data):
    with pytest.raises(SettingsError):
        InventorySettings.from_dict(data)


def test_save_and_reload(tmp_path):
    settings = InventorySettings(
        rows=2,
        columns=4,
        starting_items=[StartingItem(1, 3, Item(ItemType.POTION, 0.5, name="Small Potion"))],
        equipped=Item(ItemType.SWORD, 5.0),
    )
    path = tmp_path / "nested" / "inv.yaml"
    settings.save(path)
    assert InventorySettings.load(path) == settings


def test_inventory_from_settings_places_starting_items():
    settings = InventorySettings(
        rows=2,
        columns=3,
        starting_items=[
            StartingItem(0, 0, Item(ItemType.SWORD, 5.0)),
            StartingItem(1, 2, Item(ItemType.POTION, 0.5)),
        ],
        equipped=Item(ItemType.SHIELD, 7.5),
    )
    inv = Inventory.from_settings(settings)
    assert inv.rows == 2
    assert inv.columns(1) == 3
    assert inv.get_count() == 2
    assert inv.get_weight() == 5.5
    assert inv.at(1, 2).type == ItemType.POTION
    assert inv.get_equipped() == Item(ItemType.SHIELD, 7.5)


def test_inventory_from_settings_rejects_bad_placements():
    outside = InventorySettings(rows=1, columns=1, starting_items=[StartingItem(0, 1, Item(ItemType.KEY))])
    with pytest.raises(SettingsError):
        Inventory.from_settings(outside)

    clash = InventorySettings(
        rows=1,
        columns=1,
        starting_items=[StartingItem(0, 0, Item(ItemType.KEY)), StartingItem(0, 0, Item(ItemType.MISC))],
    )
    with pytest.raises(SettingsError):
        Inventory.from_settings(clash)


def test_grid_that_is_not_a_mapping_raises_settings_error(tmp_path):
    path = _write(tmp_path / "inv.yaml", """
        grid: [3, 3]
    """)
    with pytest.raises(SettingsError, match="grid must be a mapping"):
        InventorySettings.load(path)


def test_settings_file_must_be_a_mapping(tmp_path):
    path = _write(tmp_path / "inv.yaml", """
        - rows: 3
    """)
    with pytest.raises(SettingsError, match="must be a mapping"):
        InventorySettings.load(path)


def test_unparseable_yaml_raises_settings_error(tmp_path):
    path = _write(tmp_path / "inv.yaml", "grid: {rows: [\n")
    with pytest.raises(SettingsError, match="Cannot parse"):
        InventorySettings.load(path)


def test_missing_entry_fields_are_named():
    with pytest.raises(SettingsError, match=r"starting_items\[1\] is missing col, item"):
        InventorySettings.from_dict({"starting_items": [
            {"row": 0, "col": 0, "item": {"type": "key"}},
            {"row": 1},
        ]})


def test_user_starting_items_replace_defaults_and_grid_merges(tmp_path):
    defaults = {
        "grid": {"rows": 4, "columns": 4},
        "starting_items": [{"row": 0, "col": 0, "item": {"type": "key"}}],
        "logging": {"level": "INFO"},
    }
    merged = InventorySettings._overlay(defaults, {
        "grid": {"columns": 2},
        "starting_items": [],
        "colour": "red",
    })
    assert merged["grid"] == {"rows": 4, "columns": 2}
    assert merged["starting_items"] == []
    assert merged["logging"] == {"level": "INFO"}
    assert "colour" not in merged


def test_log_level_is_read_from_settings(tmp_path):
    path = _write(tmp_path / "inv.yaml", """
        logging:
          level: debug
    """)
    assert InventorySettings.load(path).log_level == "debug"
