"""logic/combat — Combat subpackage.

Modules
-------
status       — poison / freeze timers (``tick_status``) and appliers
damage       — apply_damage() + handle_death() pipeline
projectiles  — spawn_projectile() and projectile_system()
spells       — cast_spell() and the Earth Protector timer

Public symbols are re-exported here for ``from logic.combat import X``.
"""

# ── status ───────────────────────────────────────────────────────────
from logic.combat.status import tick_status, apply_poison, apply_freeze  # noqa: F401

# ── damage + death ───────────────────────────────────────────────────
from logic.combat.damage import apply_damage, handle_death  # noqa: F401

# ── projectiles ──────────────────────────────────────────────────────
from logic.combat.projectiles import spawn_projectile, projectile_system  # noqa: F401

# ── spells ───────────────────────────────────────────────────────────
from logic.combat.spells import cast_spell, earth_shield_system, SPELL_NAMES  # noqa: F401
