"""logic/actions/combat.py — Player weapon attacks."""

from __future__ import annotations

from pygame.math import Vector3

from components import Enemy, Position, ProjectileKind, debug_log
from core.mathutil import aim_direction, ray_ground
from core.tuning import get as _tun
from logic.combat import apply_damage, spawn_projectile
from logic.lookup import PlayerRef, is_live_enemy
from logic.outcome import Outcome, Failure

ELEMENTAL_RUIN = "Elemental Ruin"


def player_melee_hit(world, ref: PlayerRef, target_eid: int) -> Outcome:
    """Strike a clicked enemy with the equipped weapon (or bare hands)."""
    if not is_live_enemy(world, target_eid):
        return Outcome.fail(Failure.INVALID_ENTITY, "Target is gone")
    weapon = ref.equipment.weapon
    dmg = weapon.power if weapon else _tun(world, "combat.damage", "unarmed_damage", 8.0)
    dealt, dead = apply_damage(world, target_eid, dmg, attacker_eid=ref.eid,
                               weapon=weapon)
    return Outcome.success("Killed" if dead else f"Hit for {dealt:.0f}",
                           item=target_eid)


def player_weapon_attack(world, ref: PlayerRef) -> Outcome:
    """Attack with no clicked target: root strike or a weapon projectile."""
    weapon = ref.equipment.weapon
    if weapon is None:
        return Outcome.fail(Failure.INVALID_TARGET, "Nothing to do")
    aim = aim_direction(ref.player.yaw, ref.player.pitch)

    if weapon.name == ELEMENTAL_RUIN:
        return _elemental_ruin(world, ref, aim)

    origin = ref.pos.vec + aim * _tun(world, "combat.projectiles", "spawn_offset", 0.8)
    pid = spawn_projectile(world, origin, aim,
                           _tun(world, "combat.projectiles", "weapon_speed", 20.0),
                           weapon.power or 10, ProjectileKind.GENERIC,
                           weapon=weapon)
    return Outcome.success(f"{weapon.name} fired", item=pid)


def _elemental_ruin(world, ref: PlayerRef, aim: Vector3) -> Outcome:
    """Raise a root where the aim ray meets the ground; hurt enemies near it."""
    hit = ray_ground(ref.pos.vec, aim)
    if hit is None:
        debug_log(world, "combat", "Elemental Ruin: no ground under the aim",
                  eid=ref.eid)
        return Outcome.fail(Failure.INVALID_TARGET, "No ground in sight")

    root = hit + Vector3(0, _tun(world, "interact", "root_height", 0.8), 0)
    radius = _tun(world, "interact", "elemental_ruin_radius", 3.0)
    weapon = ref.equipment.weapon
    struck = []
    for eid, _enemy, epos in list(world.query(Enemy, Position)):
        if epos.vec.distance_to(root) < radius and is_live_enemy(world, eid):
            apply_damage(world, eid, weapon.power, attacker_eid=ref.eid,
                         weapon=weapon)
            struck.append(eid)
    debug_log(world, "combat",
              f"Elemental Ruin root placed, struck {len(struck)}", eid=ref.eid)
    return Outcome.success(f"Root struck {len(struck)}", item=struck)
