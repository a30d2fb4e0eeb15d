"""logic/buffs.py — Timed potion buffs.

Drinking a potion changes a player stat immediately and records an
entry in the ``BuffTable`` resource.  ``buff_system`` runs inside the
tick, counts each entry down and reverses it when it expires, so
reversals never interleave with other simulation work.

The table holds at most one entry per buff type.  Drinking a second
potion of a type that is still active first reverses the old delta,
then applies the new one and restarts the timer; the baseline stat is
therefore restored exactly once, whatever the overlap.

    Speed     speed_multiplier = strength        → back to 1.0
    Vitality  max and current health += strength → max -= strength,
                                                   current clamped
    Shield    shield_pool += strength            → shield_pool -= strength
                                                   (never below 0)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from components import Potion, debug_log
from logic.lookup import get_player, PlayerRef
from logic.outcome import Outcome, Failure


class BuffType(str, Enum):
    SPEED = "Speed"
    VITALITY = "Vitality"
    SHIELD = "Shield"


@dataclass
class ActiveBuff:
    kind: BuffType
    remaining: float           # s
    delta: float               # exact amount applied, reversed on expiry


@dataclass
class BuffTable:
    """World resource — currently active buffs keyed by type."""
    active: dict[BuffType, ActiveBuff] = field(default_factory=dict)

    def remaining(self, kind: BuffType) -> float:
        entry = self.active.get(kind)
        return entry.remaining if entry else 0.0


def use_potion(world, potion: Potion) -> Outcome:
    """Apply *potion* to the player.  Does not touch the inventory."""
    try:
        kind = BuffType(potion.name)
    except ValueError:
        msg = f"unknown potion {potion.name!r}"
        debug_log(world, "buff", msg)
        return Outcome.fail(Failure.INVALID_TARGET, msg)

    ref = get_player(world)
    if ref is None or ref.player.dead:
        debug_log(world, "buff", f"cannot drink {potion.name}: no living player")
        return Outcome.fail(Failure.INVALID_TARGET, "No living player")

    table = world.res(BuffTable)
    previous = table.active.pop(kind, None)
    if previous is not None:
        _reverse(ref, previous)
        debug_log(world, "buff", f"{kind.value} refreshed", eid=ref.eid)

    _apply(ref, kind, potion.strength)
    table.active[kind] = ActiveBuff(kind=kind, remaining=float(potion.duration),
                                    delta=float(potion.strength))
    debug_log(world, "buff",
              f"Potion applied: {potion.name} ({potion.strength:g} for "
              f"{potion.duration:g}s)", eid=ref.eid)
    return Outcome.success(f"Potion applied: {potion.name}", item=potion)


def buff_system(world, dt: float) -> None:
    """Count active buffs down; reverse the ones that expired."""
    table = world.res(BuffTable)
    if table is None or not table.active:
        return
    ref = get_player(world)
    for kind in list(table.active):
        entry = table.active[kind]
        entry.remaining -= dt
        if entry.remaining > 0:
            continue
        del table.active[kind]
        if ref is not None:
            _reverse(ref, entry)
        debug_log(world, "buff", f"{kind.value} buff expired")


def _apply(ref: PlayerRef, kind: BuffType, amount: float) -> None:
    if kind is BuffType.SPEED:
        ref.buffs.speed_multiplier = amount
    elif kind is BuffType.VITALITY:
        ref.health.maximum += amount
        ref.health.current += amount
    elif kind is BuffType.SHIELD:
        ref.buffs.shield_pool += amount


def _reverse(ref: PlayerRef, entry: ActiveBuff) -> None:
    if entry.kind is BuffType.SPEED:
        ref.buffs.speed_multiplier = 1.0
    elif entry.kind is BuffType.VITALITY:
        ref.health.maximum -= entry.delta
        if ref.health.current > ref.health.maximum:
            ref.health.current = ref.health.maximum
    elif entry.kind is BuffType.SHIELD:
        ref.buffs.shield_pool = max(0.0, ref.buffs.shield_pool - entry.delta)
