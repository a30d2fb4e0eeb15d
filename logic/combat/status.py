"""logic/combat/status.py — Poison and freeze timers.

Called by the enemy system once per enemy per tick, *before* movement:

    immobile = tick_status(world, eid, status, health, dt)
    if immobile:
        continue        # frozen: no chase, no attack roll

Poison is always processed before the freeze check, so an enemy that
is both poisoned and frozen keeps bleeding while it stands still.
Poison damage is continuous (``dps * dt``) and goes straight to HP; it
does not pass through ``apply_damage`` and so ignores the freeze
damage reduction.
"""

from __future__ import annotations
import math

from components import StatusEffects, Health, Poison, Frozen, debug_log
from core.tuning import get as _tun


def tick_status(world, eid: int, status: StatusEffects, health: Health,
                dt: float) -> bool:
    """Advance *status* by *dt*.  Returns True while the entity is frozen."""
    if status.poison is not None:
        p = status.poison
        p.remaining -= dt
        health.current -= p.dps * dt
        if p.remaining <= 0:
            status.poison = None
            debug_log(world, "status", "poison wore off", eid=eid)

    if status.frozen is not None:
        status.frozen.remaining -= dt
        if status.frozen.remaining <= 0:
            status.frozen = None
            debug_log(world, "status", "thawed", eid=eid)
        else:
            return True
    return False


def apply_poison(world, eid: int, status: StatusEffects, weapon_power: float) -> Poison:
    """(Re)set poison from a weapon hit.  Overwrites, never stacks."""
    scale = _tun(world, "combat.damage", "poison_power_scale", 0.08)
    min_dps = _tun(world, "combat.damage", "poison_min_dps", 1)
    dps = max(min_dps, math.floor(weapon_power * scale))
    status.poison = Poison(
        remaining=_tun(world, "combat.damage", "poison_duration", 6.0),
        dps=dps,
    )
    debug_log(world, "status", f"poisoned ({dps}/s)", eid=eid)
    return status.poison


def apply_freeze(world, eid: int, status: StatusEffects, duration: float) -> Frozen:
    """(Re)set freeze to *duration* seconds."""
    status.frozen = Frozen(remaining=duration)
    debug_log(world, "status", f"frozen for {duration:.1f}s", eid=eid)
    return status.frozen
