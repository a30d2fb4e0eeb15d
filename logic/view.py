"""logic/view.py — Read-only snapshot for presentation.

The renderer (or a test) calls ``snapshot(world)`` once per frame and
draws from the returned frozen dataclasses; it never holds references
to live components.  Entities killed this frame are already excluded.
"""

from __future__ import annotations
from dataclasses import dataclass

from components import (
    Enemy, Ally, Projectile, Chest, Collectible, Health, Position,
    StatusEffects, Economy, EarthShield, GameClock,
)
from components.items import describe
from core.ecs import World
from logic.buffs import BuffTable
from logic.lookup import get_player

Vec = tuple[float, float, float]


def _vec(pos: Position) -> Vec:
    v = pos.vec
    return (v.x, v.y, v.z)


@dataclass(frozen=True)
class PlayerView:
    eid: int
    pos: Vec
    yaw: float
    pitch: float
    health: float
    max_health: float
    shield_pool: float
    speed_multiplier: float
    dead: bool
    inventory_open: bool
    weapon: str | None
    spell: str | None
    inventory: tuple[str, ...]
    buffs: tuple[tuple[str, float], ...]


@dataclass(frozen=True)
class EnemyView:
    eid: int
    pos: Vec
    size: float
    is_boss: bool
    biome: str
    decoration: str
    hp_ratio: float
    flags: tuple[str, ...]


@dataclass(frozen=True)
class AllyView:
    eid: int
    pos: Vec
    lifetime: float


@dataclass(frozen=True)
class ProjectileView:
    eid: int
    pos: Vec
    kind: str


@dataclass(frozen=True)
class ChestView:
    eid: int
    pos: Vec
    opened: bool


@dataclass(frozen=True)
class CollectibleView:
    eid: int
    pos: Vec
    kind: str


@dataclass(frozen=True)
class WorldView:
    time: float
    player: PlayerView | None
    enemies: tuple[EnemyView, ...]
    allies: tuple[AllyView, ...]
    projectiles: tuple[ProjectileView, ...]
    chests: tuple[ChestView, ...]
    collectibles: tuple[CollectibleView, ...]
    fragments: int
    life_crystals: int
    earth_shield: float


def snapshot(world: World) -> WorldView:
    clock = world.res(GameClock)
    econ = world.res(Economy) or Economy()
    shield = world.res(EarthShield)
    table = world.res(BuffTable)

    player = None
    ref = get_player(world)
    if ref is not None:
        eq = ref.equipment
        player = PlayerView(
            eid=ref.eid, pos=_vec(ref.pos),
            yaw=ref.player.yaw, pitch=ref.player.pitch,
            health=ref.health.current, max_health=ref.health.maximum,
            shield_pool=ref.buffs.shield_pool,
            speed_multiplier=ref.buffs.speed_multiplier,
            dead=ref.player.dead, inventory_open=ref.player.inventory_open,
            weapon=eq.weapon.name if eq.weapon else None,
            spell=eq.spell.name if eq.spell else None,
            inventory=tuple(describe(it) for it in ref.inventory.items),
            buffs=tuple((b.kind.value, b.remaining)
                        for b in table.active.values()) if table else (),
        )

    enemies = []
    for eid, enemy, hp, pos in world.query(Enemy, Health, Position):
        if not world.alive(eid):
            continue
        status = world.get(eid, StatusEffects)
        enemies.append(EnemyView(
            eid=eid, pos=_vec(pos), size=enemy.size, is_boss=enemy.is_boss,
            biome=enemy.biome, decoration=enemy.decoration,
            hp_ratio=hp.ratio, flags=status.flags() if status else (),
        ))

    allies = tuple(AllyView(eid, _vec(pos), ally.lifetime)
                   for eid, ally, pos in world.query(Ally, Position)
                   if world.alive(eid))
    projectiles = tuple(ProjectileView(eid, _vec(pos), proj.kind.value)
                        for eid, proj, pos in world.query(Projectile, Position)
                        if world.alive(eid))
    chests = tuple(ChestView(eid, _vec(pos), chest.opened)
                   for eid, chest, pos in world.query(Chest, Position)
                   if world.alive(eid))
    collectibles = tuple(CollectibleView(eid, _vec(pos), col.kind)
                         for eid, col, pos in world.query(Collectible, Position)
                         if world.alive(eid))

    return WorldView(
        time=clock.time if clock else 0.0,
        player=player,
        enemies=tuple(enemies),
        allies=allies,
        projectiles=projectiles,
        chests=chests,
        collectibles=collectibles,
        fragments=econ.fragments,
        life_crystals=econ.life_crystals,
        earth_shield=shield.remaining if shield else 0.0,
    )
