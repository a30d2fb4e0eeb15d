"""components.resources — Player state and world-level singletons."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class GameClock:
    """Monotonic game time — accumulated ``dt`` since session start."""
    time: float = 0.0
    frame: int = 0


@dataclass
class Player:
    """Marks the player entity.  ``dead`` is terminal."""
    yaw: float = 0.0           # rad, consumed by presentation
    pitch: float = 0.0         # rad
    speed: float = 6.0         # m/s before buffs
    dead: bool = False
    inventory_open: bool = False


@dataclass
class Buffs:
    speed_multiplier: float = 1.0
    shield_pool: float = 0.0   # HP absorbed before health


@dataclass
class PlayerIntent:
    """Per-frame input, produced by the input adapter and read by the tick.

    ``move`` is ``(strafe, forward)`` in the player's yaw frame;
    ``look`` is ``(d_yaw, d_pitch)`` in radians.
    """
    move: tuple[float, float] = (0.0, 0.0)
    look: tuple[float, float] = (0.0, 0.0)


@dataclass
class Economy:
    """Currencies.  Both counters stay >= 0."""
    fragments: int = 0
    life_crystals: int = 0


@dataclass
class EarthShield:
    """Earth Protector ring following the player; purely a timer."""
    remaining: float = 0.0     # s

    @property
    def active(self) -> bool:
        return self.remaining > 0

