"""logic/combat/projectiles.py — Projectile tick system.

Each frame:
  1. Move every Projectile along its direction vector.
  2. Despawn it, harmlessly, once it is too far from the player.
  3. Otherwise test it against every live enemy; the first enemy inside
     the contact radius takes the hit and the projectile is gone.

Hit effects by kind:
  fire     full power
  water    power × 0.85, rounded
  ice      full power, then freezes the target if it survived
  generic  full power, with the firing weapon's side effects
"""

from __future__ import annotations
from typing import Sequence

from pygame.math import Vector3

from components import (
    Projectile, ProjectileKind, Position, Enemy, StatusEffects, Weapon,
    debug_log,
)
from core.mathutil import round_half_up
from core.tuning import get as _tun
from logic.combat.damage import apply_damage
from logic.combat.status import apply_freeze
from logic.lookup import get_player, is_live_enemy


def spawn_projectile(world, pos: Sequence[float], direction: Sequence[float],
                     speed: float, power: float,
                     kind: ProjectileKind = ProjectileKind.GENERIC,
                     weapon: Weapon | None = None) -> int | None:
    """Launch a projectile.  Returns None for a zero-length direction."""
    d = Vector3(direction)
    if d.length_squared() < 1e-12:
        debug_log(world, "projectile", "refused projectile with no direction")
        return None
    kind = ProjectileKind(kind)
    eid = world.spawn(
        Projectile(direction=d.normalize(), speed=float(speed),
                   power=float(power), kind=kind, weapon=weapon),
        Position(Vector3(pos)),
    )
    debug_log(world, "projectile",
              f"Projectile spawned: kind={kind.value}, power={power:g}", eid=eid)
    return eid


def projectile_system(world, dt: float) -> None:
    """Tick all projectiles for one frame."""
    ref = get_player(world)
    despawn_range = _tun(world, "combat.projectiles", "despawn_range", 400.0)
    radius = _tun(world, "combat.projectiles", "contact_radius", 0.9)
    boss_radius = _tun(world, "combat.projectiles", "boss_contact_radius", 1.8)

    for eid, pos, proj in list(world.query(Position, Projectile)):
        if not world.alive(eid):
            continue
        pos.vec += proj.direction * (proj.speed * dt)

        if ref is not None and pos.vec.distance_to(ref.pos.vec) > despawn_range:
            world.kill(eid)
            continue

        hit_eid = _check_hit(world, pos, radius, boss_radius)
        if hit_eid is not None:
            _on_hit(world, proj, hit_eid)
            world.kill(eid)


# ── internal helpers ────────────────────────────────────────────────

def _check_hit(world, pos: Position, radius: float,
               boss_radius: float) -> int | None:
    """Return the first live enemy within contact range, or None."""
    for eid, enemy, epos in world.query(Enemy, Position):
        r = boss_radius if enemy.is_boss else radius
        if pos.vec.distance_to(epos.vec) < r:
            return eid
    return None


def _on_hit(world, proj: Projectile, target_eid: int) -> None:
    if proj.kind is ProjectileKind.WATER:
        mult = _tun(world, "combat.projectiles", "water_damage_mult", 0.85)
        apply_damage(world, target_eid, round_half_up(proj.power * mult))
    elif proj.kind is ProjectileKind.ICE:
        apply_damage(world, target_eid, proj.power)
        if is_live_enemy(world, target_eid):
            status = world.get(target_eid, StatusEffects)
            apply_freeze(world, target_eid, status,
                         _tun(world, "combat.projectiles", "ice_freeze_duration", 2.5))
    elif proj.kind is ProjectileKind.GENERIC:
        apply_damage(world, target_eid, proj.power, weapon=proj.weapon)
    else:
        apply_damage(world, target_eid, proj.power)
