"""logic/actions — High-level player actions.

Thin wrappers the input layer calls in response to key presses and
clicks.  Every action returns an ``Outcome`` and never raises for a
gameplay failure.

Public API (re-exported here)
-----------------------------
``primary_action``        — left click: interact with what's aimed at, else attack/cast
``pick_target``           — nearest hittable object under the aim ray
``pickup``                — collect a world pick-up
``player_melee_hit``      — weapon hit on a clicked enemy
``player_weapon_attack``  — weapon use with no target (projectile / root)
``toggle_inventory``      — open/close the inventory panel
``use_item``              — equip or consume an inventory item
``cast_spell``            — cast a named spell (from logic.combat)
``purchase``              — buy a shop entry (from logic.economy)
``upgrade_weapon``        — level up the equipped weapon (from logic.economy)
"""

from __future__ import annotations

from logic.actions.combat import player_melee_hit, player_weapon_attack  # noqa: F401
from logic.actions.interact import primary_action, pick_target, pickup  # noqa: F401
from logic.actions.inventory import toggle_inventory, use_item  # noqa: F401
from logic.combat.spells import cast_spell  # noqa: F401
from logic.economy import purchase, upgrade_weapon  # noqa: F401
