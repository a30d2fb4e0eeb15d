"""logic/economy.py — Life crystals, the shop, and weapon upgrades.

Life crystals come from kills (``grant_kill_reward``) and are spent in
the shop (``purchase``) or on the equipped weapon (``upgrade_weapon``).
Both spending paths are check-then-act: when the player cannot afford
the cost nothing is mutated and the Outcome says why.

Usage::

    # At startup:
    world.set_res(ShopCatalog.from_file())

    # On a "buy" click:
    res = purchase(world, "potion_speed")
"""

from __future__ import annotations
import math
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from components import (
    Economy, Enemy, InventoryItem, item_from_template, clone_item, debug_log,
)
from components.items import describe
from core.events import EventBus, ItemAcquired
from core.mathutil import round_half_up
from core.rng import Rng
from core.tuning import get as _tun
from logic.lookup import get_player
from logic.outcome import Outcome, Failure


# ── Kill rewards ─────────────────────────────────────────────────────

def kill_reward_amount(world, enemy: Enemy) -> int:
    """Crystals for killing *enemy*: ``floor(base * strength * mult)``, min 1."""
    if enemy.is_boss:
        base = _tun(world, "economy", "boss_reward_base", 10)
        mult = _tun(world, "economy", "boss_reward_mult", 2.0)
    else:
        rng = world.res(Rng)
        base = _tun(world, "economy", "reward_base", 1) + rng.randint(
            0, _tun(world, "economy", "reward_bonus_max", 1))
        mult = 1.0
    return max(1, math.floor(base * enemy.strength * mult))


def grant_kill_reward(world, enemy: Enemy) -> int:
    econ = world.res(Economy)
    amount = kill_reward_amount(world, enemy)
    econ.life_crystals += amount
    debug_log(world, "econ",
              f"awarded {amount} life crystals (total now {econ.life_crystals})")
    return amount


# ── Inventory ────────────────────────────────────────────────────────

def add_to_inventory(world, item: InventoryItem, source: str = "") -> bool:
    """Append *item* to the player's bag.  False if there is no player."""
    ref = get_player(world)
    if ref is None:
        debug_log(world, "inventory", f"no player to receive {describe(item)}")
        return False
    ref.inventory.items.append(item)
    debug_log(world, "inventory", f"added {describe(item)}", eid=ref.eid,
              source=source)
    bus = world.res(EventBus)
    if bus:
        bus.emit(ItemAcquired(item=item, source=source))
    return True


# ── Shop ─────────────────────────────────────────────────────────────

@dataclass
class ShopEntry:
    id: str
    display: str
    price: int
    template: InventoryItem

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"shop price must be >= 0 ({self.id})")


@dataclass
class ShopCatalog:
    """World resource — the shop's stock, loaded from ``data/shop.toml``."""
    entries: dict[str, ShopEntry] = field(default_factory=dict)

    DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "shop.toml"

    def get(self, entry_id: str) -> ShopEntry | None:
        return self.entries.get(entry_id)

    def listing(self) -> list[ShopEntry]:
        return list(self.entries.values())

    def add(self, entry: ShopEntry) -> None:
        self.entries[entry.id] = entry

    @classmethod
    def from_file(cls, filepath: str | Path | None = None) -> "ShopCatalog":
        catalog = cls()
        filepath = Path(filepath) if filepath is not None else cls.DEFAULT_PATH
        if not filepath.exists():
            print(f"[SHOP] file not found: {filepath}")
            return catalog

        with open(filepath, "rb") as f:
            data = tomllib.load(f)

        for e in data.get("entries", []):
            catalog.add(ShopEntry(
                id=e["id"],
                display=e.get("display", e["id"]),
                price=int(e.get("price", 0)),
                template=item_from_template(e["template"]),
            ))
        print(f"[SHOP] loaded {len(catalog.entries)} entries")
        return catalog


def purchase(world, entry_id: str) -> Outcome:
    """Buy one catalog entry.  Atomic: on failure nothing changes."""
    catalog = world.res(ShopCatalog)
    entry = catalog.get(entry_id) if catalog else None
    if entry is None:
        msg = f"unknown shop entry {entry_id!r}"
        debug_log(world, "econ", msg)
        return Outcome.fail(Failure.INVALID_TARGET, msg)

    econ = world.res(Economy)
    if econ.life_crystals < entry.price:
        msg = (f"Not enough crystals: {entry.display} costs {entry.price}, "
               f"have {econ.life_crystals}")
        debug_log(world, "econ", f"Failed shop purchase: {msg}")
        return Outcome.fail(Failure.INSUFFICIENT_CURRENCY, msg)

    if get_player(world) is None:
        msg = "no player to receive the purchase"
        debug_log(world, "econ", msg)
        return Outcome.fail(Failure.INVALID_TARGET, msg)

    item = clone_item(entry.template)
    econ.life_crystals -= entry.price
    add_to_inventory(world, item, source="shop")
    msg = f"Purchased {entry.display} for {entry.price} crystals"
    debug_log(world, "econ", msg)
    return Outcome.success(msg, item=item)


# ── Weapon upgrade ───────────────────────────────────────────────────

def upgrade_cost(world, level: int) -> int:
    return (_tun(world, "economy", "upgrade_base_cost", 5)
            + level * _tun(world, "economy", "upgrade_cost_per_level", 6))


def upgrade_weapon(world) -> Outcome:
    """Spend crystals to raise the equipped weapon one level."""
    ref = get_player(world)
    weapon = ref.equipment.weapon if ref else None
    if weapon is None:
        debug_log(world, "econ", "upgrade requested with no weapon equipped")
        return Outcome.fail(Failure.INVALID_TARGET, "No weapon equipped")

    econ = world.res(Economy)
    cost = upgrade_cost(world, weapon.level)
    if econ.life_crystals < cost:
        msg = f"Need {cost} crystals to upgrade."
        debug_log(world, "econ", msg)
        return Outcome.fail(Failure.INSUFFICIENT_CURRENCY, msg)

    econ.life_crystals -= cost
    weapon.level += 1
    weapon.power = round_half_up(
        weapon.power * _tun(world, "economy", "upgrade_power_mult", 1.33))
    msg = (f"Upgraded weapon {weapon.name} to level {weapon.level} "
           f"(power {weapon.power})")
    debug_log(world, "econ", msg)
    return Outcome.success(msg, item=weapon)
