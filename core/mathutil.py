"""core/mathutil.py — Small vector and rounding helpers.

Positions are ``pygame.math.Vector3`` with +Y up.  Yaw 0 faces +Z;
yaw and pitch are radians.
"""

from __future__ import annotations
import math
from pygame.math import Vector3


def round_half_up(x: float) -> int:
    """Round to the nearest int, halves away from negative infinity.

    Python's ``round()`` is banker's rounding; gameplay numbers
    (water damage, upgrade power) always round .5 up.
    """
    return int(math.floor(x + 0.5))


def flat_direction(src: Vector3, dst: Vector3) -> Vector3:
    """Unit vector from *src* toward *dst* on the ground plane.

    Zero vector when the two points share x/z.
    """
    d = Vector3(dst.x - src.x, 0.0, dst.z - src.z)
    if d.length_squared() < 1e-12:
        return Vector3()
    return d.normalize()


def aim_direction(yaw: float, pitch: float) -> Vector3:
    """Unit look vector for a yaw/pitch pair."""
    cp = math.cos(pitch)
    return Vector3(math.sin(yaw) * cp, math.sin(pitch), math.cos(yaw) * cp)


def yaw_basis(yaw: float) -> tuple[Vector3, Vector3]:
    """``(forward, right)`` ground-plane unit vectors for *yaw*."""
    forward = Vector3(math.sin(yaw), 0.0, math.cos(yaw))
    right = Vector3(math.cos(yaw), 0.0, -math.sin(yaw))
    return forward, right


def ray_sphere(origin: Vector3, direction: Vector3,
               centre: Vector3, radius: float) -> float | None:
    """Distance along a unit ray to the first hit on a sphere, or None."""
    oc = origin - centre
    b = oc.dot(direction)
    c = oc.length_squared() - radius * radius
    disc = b * b - c
    if disc < 0:
        return None
    root = math.sqrt(disc)
    t = -b - root
    if t < 0:
        t = -b + root       # origin inside the sphere
    return t if t >= 0 else None


def ray_ground(origin: Vector3, direction: Vector3,
               ground_y: float = 0.0) -> Vector3 | None:
    """Intersection of a ray with the plane ``y = ground_y``, or None."""
    if direction.y >= -1e-9:
        return None
    t = (ground_y - origin.y) / direction.y
    if t < 0:
        return None
    return origin + direction * t
