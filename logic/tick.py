"""logic/tick.py — System tick orchestration.

One call advances the whole simulation by one frame.  Systems run in a
fixed order; removals requested during the frame are honoured
immediately (``world.kill``) and the tombstones are purged at the end.

Usage::

    from logic.tick import tick_systems
    tick_systems(world, dt)
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from components import GameClock
from core.events import EventBus
from core.tuning import get as _tun
from logic.movement import player_control_system
from logic.combat.projectiles import projectile_system
from logic.combat.spells import earth_shield_system
from logic.ai import enemy_system, ally_system
from logic.buffs import buff_system

if TYPE_CHECKING:
    from core.ecs import World


def clamp_dt(dt: float, limit: float = 0.05) -> float:
    """Frame delta clamped to ``[0, limit]``; junk becomes 0."""
    if dt is None or not math.isfinite(dt) or dt <= 0:
        return 0.0
    return min(dt, limit)


def tick_systems(world: "World", dt: float, *,
                 skip_enemies: bool = False,
                 skip_allies: bool = False) -> float:
    """Run all gameplay systems for one frame.

    Parameters
    ----------
    world : World
        The simulation context built by ``create_world``.
    dt : float
        Raw frame delta in seconds; clamped before use.
    skip_enemies : bool
        Skip enemy AI (useful for scripted tests).
    skip_allies : bool
        Skip ally AI.

    Returns the clamped dt actually simulated.
    """
    dt = clamp_dt(dt, _tun(world, "sim", "max_dt", 0.05))

    # Advance game clock
    clock = world.res(GameClock)
    if clock:
        clock.time += dt
        clock.frame += 1

    # Player
    player_control_system(world, dt)

    # Physics
    projectile_system(world, dt)

    # AI
    if not skip_enemies:
        enemy_system(world, dt)
    if not skip_allies:
        ally_system(world, dt)

    # Timers
    buff_system(world, dt)
    earth_shield_system(world, dt)

    # Event bus drain
    bus = world.res(EventBus)
    if bus:
        bus.drain()

    world.purge()
    return dt
