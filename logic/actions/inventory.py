"""logic/actions/inventory.py — Inventory screen and item use."""

from __future__ import annotations

from components import Weapon, Spellbook, Potion, debug_log
from components.items import describe
from logic.buffs import use_potion
from logic.lookup import get_player
from logic.outcome import Outcome, Failure


def toggle_inventory(world) -> Outcome:
    """Open/close the inventory panel.  Returns the new state in ``item``."""
    ref = get_player(world)
    if ref is None:
        return Outcome.fail(Failure.INVALID_TARGET, "No player")
    ref.player.inventory_open = not ref.player.inventory_open
    state = "open" if ref.player.inventory_open else "closed"
    debug_log(world, "inventory", f"Inventory toggled: {state}", eid=ref.eid)
    return Outcome.success(state, item=ref.player.inventory_open)


def use_item(world, index: int) -> Outcome:
    """The inventory "Use" button for the item at *index*.

    Weapons and spellbooks are equipped (and stay in the bag); potions
    are drunk and removed; anything else does nothing.
    """
    ref = get_player(world)
    if ref is None:
        return Outcome.fail(Failure.INVALID_TARGET, "No player")
    items = ref.inventory.items
    if not 0 <= index < len(items):
        debug_log(world, "inventory", f"use_item: no item at {index}", eid=ref.eid)
        return Outcome.fail(Failure.INVALID_TARGET, "No such item")

    item = items[index]
    if isinstance(item, Weapon):
        ref.equipment.weapon = item
        debug_log(world, "inventory", f"Equipped weapon: {item.name}", eid=ref.eid)
        return Outcome.success(f"Equipped {item.name}", item=item)
    if isinstance(item, Spellbook):
        ref.equipment.spell = item
        debug_log(world, "inventory", f"Equipped spellbook: {item.name}", eid=ref.eid)
        return Outcome.success(f"Equipped spell {item.name}", item=item)
    if isinstance(item, Potion):
        res = use_potion(world, item)
        if res:
            del items[index]
        return res

    debug_log(world, "inventory", f"{describe(item)} has no use", eid=ref.eid)
    return Outcome.fail(Failure.INVALID_TARGET, f"{describe(item)} has no use")
