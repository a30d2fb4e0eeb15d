"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position
rpg            Health, Inventory, Equipment
items          Weapon, Spellbook, Potion, ResourceBundle, Fragment
combat         Enemy, Ally, StatusEffects, Projectile, Chest, Collectible
resources      GameClock, Player, Buffs, PlayerIntent, Economy, EarthShield
dev_log        DevLog, debug_log

All public names are re-exported here so callers can write
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position

# ── Items ────────────────────────────────────────────────────────────
from components.items import (
    Weapon, Spellbook, Potion, ResourceBundle, Fragment, InventoryItem,
    item_from_template, clone_item,
)

# ── RPG ──────────────────────────────────────────────────────────────
from components.rpg import Health, Inventory, Equipment

# ── Combat ───────────────────────────────────────────────────────────
from components.combat import (
    Enemy, Ally, Poison, Frozen, StatusEffects,
    Projectile, ProjectileKind, Chest, Collectible,
)

# ── World resources / singletons ─────────────────────────────────────
from components.resources import (
    GameClock, Player, Buffs, PlayerIntent, Economy, EarthShield,
)

# ── Logging ──────────────────────────────────────────────────────────
from components.dev_log import DevLog, debug_log

__all__ = [
    # spatial
    "Position",
    # items
    "Weapon", "Spellbook", "Potion", "ResourceBundle", "Fragment",
    "InventoryItem", "item_from_template", "clone_item",
    # rpg
    "Health", "Inventory", "Equipment",
    # combat
    "Enemy", "Ally", "Poison", "Frozen", "StatusEffects",
    "Projectile", "ProjectileKind", "Chest", "Collectible",
    # resources
    "GameClock", "Player", "Buffs", "PlayerIntent", "Economy", "EarthShield",
    # logging
    "DevLog", "debug_log",
]
