"""logic — Game systems package.

Subpackages
-----------
combat/     — status effects, damage pipeline, projectiles, spells
ai/         — enemy chase/contact attacks, summoned ally behaviour
actions/    — player action handlers (primary action, inventory use)

Top-level modules
-----------------
tick            — per-frame system orchestrator
entity_factory  — world construction and spawn requests
movement        — player movement and look from PlayerIntent
input_manager   — raw pygame input → intent mapping
loot_tables     — chest loot tables + open_chest
economy         — kill rewards, shop, weapon upgrades
buffs           — timed potion buffs (BuffTable)
view            — read-only snapshot for presentation
lookup          — shared entity lookups
outcome         — Outcome / Failure result types
"""
