"""logic/ai/enemy.py — Enemy chase and contact attacks.

Per enemy, per tick:

  1. Status effects (poison, then freeze).  Poison may kill here.
  2. Frozen → nothing else this tick.
  3. Inside the aggro radius → walk toward the player on the ground
     plane; inside melee range → roll the per-tick attack chance.

Contact damage is soaked by the shield pool before it reaches health.
Health reaching zero is terminal: the player is flagged ``dead`` and no
enemy attacks again.
"""

from __future__ import annotations

from components import (
    Enemy, Position, Health, StatusEffects, debug_log,
)
from core.events import EventBus, PlayerHit, PlayerDied
from core.mathutil import flat_direction
from core.rng import Rng
from core.tuning import get as _tun
from logic.combat.damage import handle_death
from logic.combat.status import tick_status
from logic.lookup import get_player, PlayerRef


def enemy_system(world, dt: float) -> None:
    ref = get_player(world)
    rng = world.res(Rng)
    aggro = _tun(world, "ai.enemy", "aggro_radius", 22.0)
    melee = _tun(world, "ai.enemy", "melee_range", 1.6)
    attack_chance = _tun(world, "ai.enemy", "attack_chance", 0.02)

    for eid, enemy, pos, health in list(world.query(Enemy, Position, Health)):
        if not world.alive(eid):
            continue
        status = world.get(eid, StatusEffects)
        if status is not None:
            immobile = tick_status(world, eid, status, health, dt)
            if health.current <= 0:
                handle_death(world, eid)
                continue
            if immobile:
                continue

        if ref is None:
            continue
        dist = pos.vec.distance_to(ref.pos.vec)
        if dist >= aggro:
            continue

        step = enemy_speed(world, enemy) * dt
        pos.vec += flat_direction(pos.vec, ref.pos.vec) * step

        if dist < melee and not ref.player.dead and rng.chance(attack_chance):
            contact_damage(world, ref, eid, enemy)


def enemy_speed(world, enemy: Enemy) -> float:
    """Chase speed: boss/regular base × (1 + strength bonus)."""
    base = (_tun(world, "ai.enemy", "boss_base_speed", 1.2) if enemy.is_boss
            else _tun(world, "ai.enemy", "base_speed", 0.9))
    return base * (1 + enemy.strength * _tun(world, "ai.enemy", "strength_speed_bonus", 0.15))


def contact_damage(world, ref: PlayerRef, attacker_eid: int,
                   enemy: Enemy) -> float:
    """Land one contact hit on the player.  Returns damage to health."""
    dmg = _tun(world, "ai.enemy", "contact_damage", 6.0)
    if enemy.is_boss:
        dmg *= _tun(world, "ai.enemy", "boss_damage_mult", 2.2)

    absorbed = 0.0
    if ref.buffs.shield_pool > 0:
        absorbed = min(ref.buffs.shield_pool, dmg)
        ref.buffs.shield_pool -= absorbed
        dmg -= absorbed

    ref.health.current -= dmg
    debug_log(world, "combat",
              f"Player hit by enemy; dmg={dmg:.1f} shield={ref.buffs.shield_pool:.1f}",
              eid=ref.eid, attacker=attacker_eid, absorbed=absorbed)
    bus = world.res(EventBus)
    if bus:
        bus.emit(PlayerHit(attacker_eid=attacker_eid, damage=dmg, absorbed=absorbed))

    if ref.health.current <= 0:
        ref.health.current = 0.0
        if not ref.player.dead:
            ref.player.dead = True
            debug_log(world, "combat", "Player died", eid=ref.eid)
            if bus:
                bus.emit(PlayerDied(killer_eid=attacker_eid))
    return dmg
