"""logic/entity_factory.py — Spawn requests and world construction.

``create_world()`` builds the one simulation context: a World carrying
every resource the systems read (clock, bus, dev log, rng, economy,
buff table, shop, loot tables) plus the player entity.  The other
``spawn_*`` helpers are the spawn-request interface used by level
seeding, death drops and spells.
"""

from __future__ import annotations
from pathlib import Path
from typing import Sequence

from pygame.math import Vector3

from core.ecs import World
from core.events import EventBus
from core.rng import Rng
from core.tuning import Tuning, get as _tun
from components import (
    Position, Health, Inventory, Equipment, Enemy, Ally, StatusEffects,
    Chest, Collectible, GameClock, Player, Buffs, PlayerIntent, Economy,
    EarthShield, DevLog, debug_log,
)
from logic.buffs import BuffTable
from logic.economy import ShopCatalog
from logic.loot_tables import LootTableManager
from logic.outcome import Outcome, Failure


def _vec(pos) -> Vector3:
    return Vector3(pos)


# ── World ────────────────────────────────────────────────────────────

def create_world(seed: int | None = None, *,
                 rng: Rng | None = None,
                 player_at: Sequence[float] = (0.0, 1.6, 6.0),
                 tuning: Tuning | None = None,
                 tuning_path: str | Path | None = None,
                 echo_log: bool = True) -> World:
    """Fresh simulation context with all resources and a player.

    Tuning comes from *tuning*, else from *tuning_path*, else from
    ``data/tuning.toml``; it belongs to this world alone.
    """
    world = World()
    world.set_res(tuning if tuning is not None else Tuning.from_file(tuning_path))
    world.set_res(GameClock())
    world.set_res(EventBus())
    world.set_res(DevLog(echo=echo_log))
    world.set_res(rng if rng is not None else Rng(seed), as_type=Rng)
    world.set_res(Economy())
    world.set_res(BuffTable())
    world.set_res(EarthShield())
    world.set_res(PlayerIntent())
    world.set_res(ShopCatalog.from_file())
    world.set_res(LootTableManager.from_file())
    spawn_player(world, player_at)
    return world


def spawn_player(world: World, pos: Sequence[float] = (0.0, 1.6, 6.0)) -> int:
    max_hp = _tun(world, "player", "max_health", 100.0)
    eid = world.spawn(
        Player(speed=_tun(world, "player", "speed", 6.0)),
        Position(_vec(pos)),
        Health(current=max_hp, maximum=max_hp),
        Buffs(),
        Equipment(),
        Inventory(),
    )
    debug_log(world, "spawn", f"player spawned at {_fmt(pos)}", eid=eid)
    return eid


# ── Combatants ───────────────────────────────────────────────────────

def spawn_enemy(world: World, pos: Sequence[float], *,
                strength: float = 1.0, is_boss: bool = False,
                biome: str = "Generic") -> int:
    """Spawn a regular enemy or a boss.  HP and size scale with *strength*."""
    if strength <= 0:
        debug_log(world, "spawn", f"non-positive strength {strength}, using 1")
        strength = 1.0
    if is_boss:
        hp = _tun(world, "spawn.enemy", "boss_hp_per_strength", 250.0) * strength
        size = (_tun(world, "spawn.enemy", "boss_size_base", 1.6)
                + strength * _tun(world, "spawn.enemy", "boss_size_per_strength", 0.6))
    else:
        hp = _tun(world, "spawn.enemy", "hp_per_strength", 40.0) * strength
        size = (_tun(world, "spawn.enemy", "size_base", 0.6)
                + strength * _tun(world, "spawn.enemy", "size_per_strength", 0.2))

    enemy = Enemy(strength=strength, is_boss=is_boss, biome=biome, size=size)
    eid = world.spawn(enemy, Position(_vec(pos)),
                      Health(current=hp, maximum=hp), StatusEffects())
    debug_log(world, "spawn",
              f"Spawned enemy (boss={is_boss}) at {_fmt(pos)} strength={strength}",
              eid=eid)
    if is_boss:
        res = decorate_boss(world, eid)
        if not res:
            debug_log(world, "spawn", f"boss decoration skipped: {res.message}",
                      eid=eid)
    return eid


_DECORATIONS: list[tuple[tuple[str, ...], str]] = [
    (("sea", "coral"), "aquanaut_helmet"),
    (("mountain",), "crown"),
    (("ancient",), "rune"),
]


def decorate_boss(world: World, eid: int) -> Outcome:
    """Pick a cosmetic decoration from the boss's biome."""
    enemy = world.get(eid, Enemy)
    if enemy is None:
        return Outcome.fail(Failure.INVALID_ENTITY, f"#{eid} is not an enemy")
    biome = (enemy.biome or "").lower()
    enemy.decoration = "orb"
    for keys, deco in _DECORATIONS:
        if any(k in biome for k in keys):
            enemy.decoration = deco
            break
    debug_log(world, "spawn", f"boss decoration: {enemy.decoration}", eid=eid)
    return Outcome.success(enemy.decoration)


def spawn_ally(world: World, pos: Sequence[float]) -> int:
    eid = world.spawn(Ally(lifetime=_tun(world, "ai.ally", "lifetime", 16.0)),
                      Position(_vec(pos)))
    debug_log(world, "spawn", f"Ally spawned at {_fmt(pos)}", eid=eid)
    return eid


# ── World objects ────────────────────────────────────────────────────

def spawn_chest(world: World, pos: Sequence[float], table: str = "chest") -> int:
    eid = world.spawn(Chest(table=table), Position(_vec(pos)))
    debug_log(world, "spawn", f"Spawned chest at {_fmt(pos)}", eid=eid)
    return eid


def spawn_collectible(world: World, pos: Sequence[float],
                      kind: str = "fragment") -> int:
    eid = world.spawn(Collectible(kind=kind), Position(_vec(pos)))
    debug_log(world, "spawn", f"Spawned collectible {kind} at {_fmt(pos)}",
              eid=eid)
    return eid


# ── Demo level ───────────────────────────────────────────────────────

BOSS_LAIRS: list[tuple[tuple[float, float, float], str]] = [
    ((-60.0, 1.0, -18.0), "Sea"),
    ((40.0, 1.0, 42.0), "Mountains"),
    ((0.0, 1.0, 140.0), "Ancient Ruins"),
]


def seed_world(world: World, *, chests: int = 16, enemies: int = 18,
               fragments: int = 12, extent: float = 220.0) -> None:
    """Scatter chests, enemies, bosses and fragments for a demo session."""
    rng = world.res(Rng)

    def scatter(y: float, span: float = extent) -> tuple[float, float, float]:
        return (rng.uniform(-0.5, 0.5) * span, y, rng.uniform(-0.5, 0.5) * span)

    for _ in range(chests):
        spawn_chest(world, scatter(0.25))
    for _ in range(enemies):
        spawn_enemy(world, scatter(0.5), strength=1 + rng.randint(0, 1))
    for pos, biome in BOSS_LAIRS:
        spawn_enemy(world, pos, is_boss=True, biome=biome, strength=3)
    for _ in range(fragments):
        spawn_collectible(world, scatter(0.6, 200.0), "fragment")
    debug_log(world, "spawn", "World seeded: chests/enemies/fragments spawned")


def _fmt(pos: Sequence[float]) -> str:
    x, y, z = pos[0], pos[1], pos[2]
    return f"{x:.1f},{y:.1f},{z:.1f}"
