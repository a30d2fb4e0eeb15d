"""logic/combat/damage.py — Canonical damage application and death sequence.

Every code-path that hurts an enemy (melee clicks, projectile impacts,
ally strikes, Elemental Ruin roots) funnels through ``apply_damage()``
so the freeze reduction, weapon side effects and death handling are
identical everywhere.

``handle_death()`` centralises the death pipeline
(reward → fragment drop → remove) and runs exactly once per enemy.
Poison ticks call it directly when they finish an enemy off.
"""

from __future__ import annotations
import math

from pygame.math import Vector3

from components import (
    Enemy, Health, Position, StatusEffects, Weapon, debug_log,
)
from core.events import EventBus, EnemyKilled
from core.rng import Rng
from core.tuning import get as _tun
from logic.combat.status import apply_poison, apply_freeze
from logic.lookup import get_player, is_live_enemy, entity_name

LIFE_STEALER = "Life Stealer"
SNAKE_DAGGER = "Snake Dagger"
FROST_CROWN = "Frost Crown"


def apply_damage(
    world,
    defender_eid: int,
    raw_damage: float,
    attacker_eid: int | None = None,
    weapon: Weapon | None = None,
) -> tuple[float, bool]:
    """Deal *raw_damage* to an enemy.

    Returns ``(damage_dealt, is_dead)``.  A target that is not a live
    enemy is logged and left alone: ``(0.0, False)``.

    Side effects of *weapon* are independent of each other:

    - Life Stealer heals the player by a fraction of the damage dealt.
    - Snake Dagger (re)sets poison on the target.
    - Frost Crown freezes the target on a coin flip.
    """
    if not is_live_enemy(world, defender_eid):
        debug_log(world, "combat",
                  f"apply_damage: invalid enemy {defender_eid}",
                  eid=defender_eid if defender_eid is not None else -1)
        return 0.0, False

    health = world.get(defender_eid, Health)
    status = world.get(defender_eid, StatusEffects)
    if status is None:
        status = StatusEffects()
        world.add(defender_eid, status)

    damage = float(raw_damage)
    if not math.isfinite(damage) or damage < 0:
        damage = 0.0

    # ── Freeze reduction ─────────────────────────────────────────────
    if status.is_frozen:
        damage *= _tun(world, "combat.damage", "frozen_damage_mult", 0.9)
        debug_log(world, "combat", "target frozen, reduced damage",
                  eid=defender_eid)

    # ── Apply to HP ──────────────────────────────────────────────────
    health.current -= damage
    weapon_name = weapon.name if weapon is not None else "none"
    debug_log(world, "combat",
              f"{entity_name(world, attacker_eid)} hit "
              f"{entity_name(world, defender_eid)} for {damage:.1f} "
              f"(hp {health.current:.1f}/{health.maximum:.0f}, weapon={weapon_name})",
              eid=defender_eid, damage=damage)

    # ── Weapon side effects ──────────────────────────────────────────
    if weapon is not None:
        if weapon.name == LIFE_STEALER:
            _life_steal(world, damage)
        if weapon.name == SNAKE_DAGGER:
            apply_poison(world, defender_eid, status, weapon.power)
        if weapon.name == FROST_CROWN:
            rng = world.res(Rng)
            if rng.chance(_tun(world, "combat.damage", "freeze_chance", 0.5)):
                apply_freeze(world, defender_eid, status,
                             _tun(world, "combat.damage", "freeze_duration", 2.2))

    is_dead = health.current <= 0
    if is_dead:
        handle_death(world, defender_eid, killer_eid=attacker_eid)
    return damage, is_dead


def _life_steal(world, damage: float) -> None:
    ref = get_player(world)
    if ref is None or ref.player.dead:
        return
    heal = damage * _tun(world, "combat.damage", "life_steal_fraction", 0.2)
    before = ref.health.current
    ref.health.current = min(ref.health.maximum, ref.health.current + heal)
    debug_log(world, "combat",
              f"Life Stealer healed player {ref.health.current - before:.1f}",
              eid=ref.eid)


# ── Death sequence ───────────────────────────────────────────────────

def handle_death(world, dead_eid: int, killer_eid: int | None = None) -> int:
    """Unified death sequence: reward → fragment drop → remove.

    Returns the crystals granted (0 if *dead_eid* was already gone).
    """
    from logic.economy import grant_kill_reward
    from logic.entity_factory import spawn_collectible

    if not is_live_enemy(world, dead_eid):
        return 0
    enemy = world.get(dead_eid, Enemy)
    pos = world.get(dead_eid, Position)

    # Remove first so nothing in the reward path can re-enter for this eid.
    world.kill(dead_eid)
    debug_log(world, "combat", f"{entity_name(world, dead_eid)} died",
              eid=dead_eid)

    reward = grant_kill_reward(world, enemy)

    rng = world.res(Rng)
    dropped = enemy.is_boss or rng.chance(
        _tun(world, "economy", "fragment_drop_chance", 0.15))
    if dropped and pos is not None:
        drop_at = pos.vec + Vector3(0, _tun(world, "economy", "fragment_drop_height", 1.0), 0)
        spawn_collectible(world, drop_at, "fragment")

    bus = world.res(EventBus)
    if bus:
        bus.emit(EnemyKilled(eid=dead_eid, reward=reward,
                             is_boss=enemy.is_boss,
                             dropped_fragment=dropped,
                             killer_eid=killer_eid))
    return reward
