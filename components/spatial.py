"""components.spatial — World-space placement.

Coordinates are metres with +Y up; the ground plane is ``y = 0``.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from pygame.math import Vector3


@dataclass
class Position:
    vec: Vector3 = field(default_factory=Vector3)

    def distance_to(self, other: "Position") -> float:
        return self.vec.distance_to(other.vec)
