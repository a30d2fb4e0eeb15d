"""components.items — Inventory item records.

One dataclass per item kind; ``InventoryItem`` is their union.  Each
variant checks its own payload at construction so a bad template in
``shop.toml`` or ``loot_tables.toml`` fails at load time, not mid-game::

    item_from_template({"kind": "weapon", "name": "Snake Dagger",
                        "power": 20, "level": 1})
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, asdict
from typing import ClassVar, Union


@dataclass
class Weapon:
    kind: ClassVar[str] = "weapon"
    name: str
    power: int
    level: int = 1

    def __post_init__(self):
        _require_name(self)
        if self.power < 0:
            raise ValueError(f"weapon power must be >= 0, got {self.power}")
        if self.level < 1:
            raise ValueError(f"weapon level must be >= 1, got {self.level}")


@dataclass
class Spellbook:
    kind: ClassVar[str] = "spellbook"
    name: str
    power: int

    def __post_init__(self):
        _require_name(self)


@dataclass
class Potion:
    kind: ClassVar[str] = "potion"
    name: str                  # "Speed", "Vitality", "Shield"
    duration: float            # s
    strength: float

    def __post_init__(self):
        _require_name(self)
        if self.duration <= 0:
            raise ValueError(f"potion duration must be > 0, got {self.duration}")


@dataclass
class ResourceBundle:
    kind: ClassVar[str] = "resource"
    name: str
    amount: int

    def __post_init__(self):
        _require_name(self)
        if self.amount < 0:
            raise ValueError(f"resource amount must be >= 0, got {self.amount}")


@dataclass
class Fragment:
    kind: ClassVar[str] = "fragment"
    name: str = "Crown Fragment"

    def __post_init__(self):
        _require_name(self)


InventoryItem = Union[Weapon, Spellbook, Potion, ResourceBundle, Fragment]

ITEM_KINDS: dict[str, type] = {
    cls.kind: cls for cls in (Weapon, Spellbook, Potion, ResourceBundle, Fragment)
}


def item_from_template(template: dict) -> InventoryItem:
    """Build an item from a ``{"kind": ..., **payload}`` dict."""
    data = dict(template)
    kind = data.pop("kind", None)
    cls = ITEM_KINDS.get(kind)
    if cls is None:
        raise ValueError(f"unknown item kind: {kind!r}")
    try:
        return cls(**data)
    except TypeError as exc:
        raise ValueError(f"bad {kind} template {template!r}: {exc}") from exc


def item_to_dict(item: InventoryItem) -> dict:
    return {"kind": item.kind, **asdict(item)}


def clone_item(item: InventoryItem) -> InventoryItem:
    """Independent copy, so upgrading one weapon never touches a template."""
    return copy.deepcopy(item)


def describe(item: InventoryItem) -> str:
    """Short inventory-list label."""
    if isinstance(item, Weapon):
        return f"{item.name} (Lv {item.level})"
    if isinstance(item, Spellbook):
        return f"Spell: {item.name}"
    if isinstance(item, Potion):
        return f"Potion: {item.name}"
    if isinstance(item, ResourceBundle):
        return f"{item.name} x{item.amount}"
    return item.name


def _require_name(item) -> None:
    if not isinstance(item.name, str) or not item.name:
        raise ValueError(f"{type(item).__name__} needs a non-empty name")
