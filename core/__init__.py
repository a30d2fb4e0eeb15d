"""core package — engine pieces with no gameplay rules.

ecs       World (entities, components, resources)
events    EventBus and event dataclasses
tuning    data/tuning.toml access
rng       seedable random source
mathutil  vector / rounding helpers
"""

__all__ = ["ecs", "events", "tuning", "rng", "mathutil"]
