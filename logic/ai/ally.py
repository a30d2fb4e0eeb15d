"""logic/ai/ally.py — Summoned allies (Command Dead).

An ally lives for a fixed time.  While alive it walks toward the
nearest enemy inside its acquisition radius and, on a small per-tick
chance, strikes it through the shared damage pipeline.  It expires when
its timer runs out whether or not it ever fought.
"""

from __future__ import annotations

from components import Ally, Enemy, Position, debug_log
from core.mathutil import flat_direction
from core.rng import Rng
from core.tuning import get as _tun
from logic.combat.damage import apply_damage


def ally_system(world, dt: float) -> None:
    rng = world.res(Rng)
    acquire = _tun(world, "ai.ally", "acquire_radius", 6.0)
    speed = _tun(world, "ai.ally", "speed", 1.6)
    chance = _tun(world, "ai.ally", "attack_chance", 0.02)
    damage = _tun(world, "ai.ally", "damage", 6.0)

    for eid, ally, pos in list(world.query(Ally, Position)):
        if not world.alive(eid):
            continue
        ally.lifetime -= dt
        if ally.lifetime <= 0:
            world.kill(eid)
            debug_log(world, "ally",
                      f"ally expired after {ally.attack_rolls} attack rolls", eid=eid)
            continue

        target = _nearest_enemy(world, pos, acquire)
        ally.target_eid = target[0] if target else None
        if target is None:
            continue
        target_eid, target_pos = target
        pos.vec += flat_direction(pos.vec, target_pos.vec) * (speed * dt)
        ally.attack_rolls += 1
        if rng.chance(chance):
            apply_damage(world, target_eid, damage, attacker_eid=eid)


def _nearest_enemy(world, pos: Position, radius: float) -> tuple[int, Position] | None:
    best = None
    best_dist = radius
    for eid, _enemy, epos in world.query(Enemy, Position):
        d = pos.vec.distance_to(epos.vec)
        if d < best_dist:
            best_dist = d
            best = (eid, epos)
    return best
