"""components.combat — Combatants, status effects, projectiles, loot holders."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from pygame.math import Vector3

from components.items import Weapon


@dataclass
class Enemy:
    """Hostile combat entity.  Lives alongside Position/Health/StatusEffects.

    ``strength`` scales hit points, chase speed and reward yield.
    ``biome`` and ``decoration`` are cosmetic.
    """
    strength: float = 1.0
    is_boss: bool = False
    biome: str = "Generic"
    size: float = 0.8          # m, cube edge; also the click radius basis
    decoration: str = ""

    @property
    def label(self) -> str:
        return f"Boss ({self.biome})" if self.is_boss else "Enemy"


@dataclass
class Ally:
    """Summoned undead helper.  Expires when ``lifetime`` runs out."""
    lifetime: float = 16.0     # s remaining
    attack_rolls: int = 0
    target_eid: int | None = None


# ── Status effects ───────────────────────────────────────────────────

@dataclass
class Poison:
    remaining: float           # s
    dps: float                 # HP/s


@dataclass
class Frozen:
    remaining: float           # s


@dataclass
class StatusEffects:
    """Both slots are independent; an empty slot means the effect is off."""
    poison: Poison | None = None
    frozen: Frozen | None = None

    @property
    def is_frozen(self) -> bool:
        return self.frozen is not None and self.frozen.remaining > 0

    def flags(self) -> tuple[str, ...]:
        out = []
        if self.poison is not None:
            out.append("poisoned")
        if self.frozen is not None:
            out.append("frozen")
        return tuple(out)


# ── Projectiles ──────────────────────────────────────────────────────

class ProjectileKind(str, Enum):
    FIRE = "fire"
    WATER = "water"
    ICE = "ice"
    GENERIC = "generic"


@dataclass
class Projectile:
    """A spell bolt or weapon shot.  Single-hit; despawns out of range.

    ``weapon`` is set for generic shots so the hit carries the firing
    weapon's side effects.
    """
    direction: Vector3 = field(default_factory=lambda: Vector3(0, 0, 1))
    speed: float = 20.0        # m/s
    power: float = 10.0        # HP
    kind: ProjectileKind = ProjectileKind.GENERIC
    weapon: Weapon | None = None


# ── World objects ────────────────────────────────────────────────────

@dataclass
class Chest:
    """One-shot loot container."""
    opened: bool = False
    table: str = "chest"


@dataclass
class Collectible:
    """Pick-up lying in the world (``kind`` = "fragment", ...)."""
    kind: str = "fragment"
