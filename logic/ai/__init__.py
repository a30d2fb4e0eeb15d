"""logic/ai — AI subpackage.

Modules
-------
enemy  — chase the player inside the aggro radius, roll contact attacks
ally   — summoned helpers: seek the nearest enemy, strike, expire
"""

from logic.ai.enemy import enemy_system, contact_damage  # noqa: F401
from logic.ai.ally import ally_system  # noqa: F401
