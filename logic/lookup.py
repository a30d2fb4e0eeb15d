"""logic/lookup.py — Shared entity lookups used by every system."""

from __future__ import annotations
from typing import NamedTuple

from core.ecs import World
from components import (
    Player, Position, Health, Buffs, Equipment, Inventory,
    Enemy, Ally, Projectile, Chest, Collectible,
)


class PlayerRef(NamedTuple):
    eid: int
    player: Player
    pos: Position
    health: Health
    buffs: Buffs
    equipment: Equipment
    inventory: Inventory


def get_player(world: World) -> PlayerRef | None:
    """The player entity and its components, or None before spawn."""
    row = world.query_one(Player, Position, Health, Buffs, Equipment, Inventory)
    if row is None:
        return None
    return PlayerRef(*row)


def is_live_enemy(world: World, eid: int | None) -> bool:
    return (eid is not None and world.alive(eid)
            and world.has(eid, Enemy) and world.has(eid, Health))


def entity_name(world: World, eid: int | None) -> str:
    """Short label for log lines, e.g. ``Enemy#4`` or ``Boss (Sea)#2``."""
    if eid is None:
        return "?"
    if world.has(eid, Player):
        return "Player"
    enemy = world.get(eid, Enemy)
    if enemy is not None:
        return f"{enemy.label}#{eid}"
    for comp_type, label in ((Ally, "Ally"), (Projectile, "Projectile"),
                             (Chest, "Chest"), (Collectible, "Collectible")):
        if world.has(eid, comp_type):
            return f"{label}#{eid}"
    return f"#{eid}"
