"""components.rpg — Health, inventory, equipment."""

from __future__ import annotations
from dataclasses import dataclass, field

from components.items import InventoryItem, Weapon, Spellbook


@dataclass
class Health:
    current: float = 100.0     # HP
    maximum: float = 100.0     # HP

    @property
    def ratio(self) -> float:
        if self.maximum <= 0:
            return 0.0
        return max(0.0, min(1.0, self.current / self.maximum))


@dataclass
class Inventory:
    """Ordered bag of item records.  Equipped items stay in the bag."""
    items: list[InventoryItem] = field(default_factory=list)


@dataclass
class Equipment:
    """What the player swings or casts on the primary action."""
    weapon: Weapon | None = None
    spell: Spellbook | None = None
