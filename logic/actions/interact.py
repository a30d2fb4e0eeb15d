"""logic/actions/interact.py — The primary action (left click).

A ray from the player's eye along the aim direction is tested against
every collectible, chest and enemy; the nearest one hit is acted on:

  collectible  pick it up
  chest        open it
  enemy        melee hit with the equipped weapon

When the ray hits nothing the player casts the equipped spell, or
failing that attacks with the equipped weapon.
"""

from __future__ import annotations

from components import (
    Position, Collectible, Chest, Enemy, Economy, Fragment, debug_log,
)
from core.mathutil import aim_direction, ray_sphere
from core.tuning import get as _tun
from logic.actions.combat import player_melee_hit, player_weapon_attack
from logic.combat import cast_spell
from logic.economy import add_to_inventory
from logic.loot_tables import open_chest
from logic.lookup import get_player, PlayerRef
from logic.outcome import Outcome, Failure


def pick_target(world, ref: PlayerRef) -> int | None:
    """Nearest collectible/chest/enemy under the aim ray, or None."""
    origin = ref.pos.vec
    aim = aim_direction(ref.player.yaw, ref.player.pitch)
    reach = _tun(world, "interact", "reach", 60.0)

    best, best_t = None, reach
    candidates = []
    for eid, _c, pos in world.query(Collectible, Position):
        candidates.append((eid, pos, _tun(world, "interact", "collectible_radius", 0.18)))
    for eid, _c, pos in world.query(Chest, Position):
        candidates.append((eid, pos, _tun(world, "interact", "chest_radius", 0.5)))
    for eid, enemy, pos in world.query(Enemy, Position):
        candidates.append((eid, pos, enemy.size * 0.5))

    for eid, pos, radius in candidates:
        t = ray_sphere(origin, aim, pos.vec, radius)
        if t is not None and t <= best_t:
            best, best_t = eid, t
    return best


def primary_action(world) -> Outcome:
    ref = get_player(world)
    if ref is None or ref.player.dead:
        return Outcome.fail(Failure.INVALID_TARGET, "No living player")

    target = pick_target(world, ref)
    if target is not None:
        if world.has(target, Collectible):
            return pickup(world, target)
        if world.has(target, Chest):
            return open_chest(world, target)
        return player_melee_hit(world, ref, target)

    if ref.equipment.spell is not None:
        return cast_spell(world, ref.equipment.spell.name)
    if ref.equipment.weapon is not None:
        return player_weapon_attack(world, ref)

    debug_log(world, "interact", "Nothing to interact with", eid=ref.eid)
    return Outcome.fail(Failure.INVALID_TARGET, "Nothing to interact with")


def pickup(world, eid: int) -> Outcome:
    """Collect a world pick-up into the inventory."""
    col = world.get(eid, Collectible) if world.alive(eid) else None
    if col is None:
        return Outcome.fail(Failure.INVALID_TARGET, "Nothing to pick up")

    if col.kind == "fragment":
        world.res(Economy).fragments += 1
        item = Fragment()
    else:
        debug_log(world, "interact", f"unrecognised collectible {col.kind!r}",
                  eid=eid)
        return Outcome.fail(Failure.INVALID_TARGET,
                            f"Unrecognised collectible {col.kind}")

    world.kill(eid)
    add_to_inventory(world, item, source="pickup")
    debug_log(world, "interact", f"Picked {col.kind}", eid=eid)
    return Outcome.success(f"Picked up {item.name}", item=item)
