"""logic/combat/spells.py — Spellbook casting.

Bolt spells launch a projectile from just in front of the player's eye
along the aim direction; the two utility spells summon an ally or
raise the Earth Protector ring.
"""

from __future__ import annotations

from pygame.math import Vector3

from components import ProjectileKind, EarthShield, debug_log
from core.mathutil import aim_direction
from core.rng import Rng
from core.tuning import get as _tun
from logic.combat.projectiles import spawn_projectile
from logic.entity_factory import spawn_ally
from logic.lookup import get_player
from logic.outcome import Outcome, Failure

# spell name → (tuning section, projectile kind, default speed, default power)
BOLTS: dict[str, tuple[str, ProjectileKind, float, float]] = {
    "Fireball": ("spells.fireball", ProjectileKind.FIRE, 22.0, 30.0),
    "Water Jet": ("spells.water_jet", ProjectileKind.WATER, 26.0, 18.0),
    "Ice Shard": ("spells.ice_shard", ProjectileKind.ICE, 18.0, 24.0),
}
COMMAND_DEAD = "Command Dead"
EARTH_PROTECTOR = "Earth Protector"
SPELL_NAMES = (*BOLTS, COMMAND_DEAD, EARTH_PROTECTOR)


def cast_spell(world, name: str) -> Outcome:
    ref = get_player(world)
    if ref is None or ref.player.dead:
        return Outcome.fail(Failure.INVALID_TARGET, "No living player")
    debug_log(world, "spell", f"Casting spell: {name}", eid=ref.eid)

    if name in BOLTS:
        sec, kind, speed, power = BOLTS[name]
        aim = aim_direction(ref.player.yaw, ref.player.pitch)
        origin = ref.pos.vec + aim * _tun(world, "combat.projectiles", "spawn_offset", 0.8)
        pid = spawn_projectile(world, origin, aim,
                               _tun(world, sec, "speed", speed),
                               _tun(world, sec, "power", power), kind)
        return Outcome.success(f"{name} cast", item=pid)

    if name == COMMAND_DEAD:
        rng = world.res(Rng)
        scatter = _tun(world, "spells.command_dead", "scatter", 1.6)
        at = ref.pos.vec + Vector3(rng.uniform(-0.5, 0.5) * scatter, 0.0,
                                   rng.uniform(-0.5, 0.5) * scatter)
        aid = spawn_ally(world, at)
        debug_log(world, "spell", "Command Dead: spawned ally", eid=aid)
        return Outcome.success("Ally summoned", item=aid)

    if name == EARTH_PROTECTOR:
        shield = world.res(EarthShield)
        refreshed = shield.active
        shield.remaining = _tun(world, "spells.earth_protector", "duration", 12.0)
        msg = "Earth protector refreshed" if refreshed else "Earth protector created"
        debug_log(world, "spell", msg, eid=ref.eid)
        return Outcome.success(msg)

    debug_log(world, "spell", f"unknown spell {name!r}", eid=ref.eid)
    return Outcome.fail(Failure.INVALID_TARGET, f"Unknown spell {name}")


def earth_shield_system(world, dt: float) -> None:
    shield = world.res(EarthShield)
    if shield is None or not shield.active:
        return
    shield.remaining -= dt
    if shield.remaining <= 0:
        shield.remaining = 0.0
        debug_log(world, "spell", "Earth protector faded")
