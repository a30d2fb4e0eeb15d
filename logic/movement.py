"""logic/movement.py — Player locomotion and look.

Reads the ``PlayerIntent`` resource written by the input layer:
``move`` is held (applied every frame until the input changes) while
``look`` is a one-frame delta and is zeroed once consumed.
"""

from __future__ import annotations

from components import PlayerIntent
from core.ecs import World
from core.mathutil import yaw_basis
from core.tuning import get as _tun
from logic.lookup import get_player


def player_control_system(world: World, dt: float) -> None:
    intent = world.res(PlayerIntent)
    ref = get_player(world)
    if intent is None or ref is None:
        return
    if ref.player.dead:
        intent.look = (0.0, 0.0)
        return

    # Look
    d_yaw, d_pitch = intent.look
    if d_yaw or d_pitch:
        limit = _tun(world, "player", "pitch_limit", 1.4708)
        ref.player.yaw += d_yaw
        ref.player.pitch = max(-limit, min(limit, ref.player.pitch + d_pitch))
        intent.look = (0.0, 0.0)

    # Move
    strafe, forward = intent.move
    if not strafe and not forward:
        return
    fwd, right = yaw_basis(ref.player.yaw)
    mv = fwd * forward + right * strafe
    if mv.length_squared() < 1e-12:
        return
    mv.normalize_ip()
    speed = ref.player.speed * (ref.buffs.speed_multiplier or 1.0)
    ref.pos.vec += mv * (speed * dt)


def set_move_intent(world: World, strafe: float, forward: float) -> None:
    """Programmatic movement input (scripts, tests, replays)."""
    intent = world.res(PlayerIntent)
    if intent is not None:
        intent.move = (float(strafe), float(forward))
