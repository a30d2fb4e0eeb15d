"""Loot table system — chest loot by cumulative probability buckets.

A table is an ordered list of buckets, each with an upper bound
``upto`` on a single uniform draw.  The first bucket whose bound the
draw falls under builds the item::

    # At startup:
    loot_mgr = LootTableManager.from_file()
    world.set_res(loot_mgr)

    # At runtime:
    res = open_chest(world, chest_eid)   # → Outcome(item=Spellbook(...))
"""

from __future__ import annotations
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from components import (
    Chest, InventoryItem, Weapon, Spellbook, Potion, ResourceBundle, debug_log,
)
from components.items import describe
from core.events import EventBus, ChestOpened
from core.rng import Rng
from logic.economy import add_to_inventory
from logic.outcome import Outcome, Failure


@dataclass
class _Bucket:
    kind: str
    upto: float
    names: list[str] = field(default_factory=list)
    params: dict = field(default_factory=dict)

    def build(self, rng: Rng) -> InventoryItem:
        name = rng.choice(self.names)
        p = self.params
        if self.kind == "spellbook":
            return Spellbook(name=name, power=int(p.get("power_base", 20))
                             + rng.randint(0, int(p.get("power_bonus_max", 11))))
        if self.kind == "weapon":
            return Weapon(name=name, power=int(p.get("power_base", 12))
                          + rng.randint(0, int(p.get("power_bonus_max", 19))),
                          level=int(p.get("level", 1)))
        if self.kind == "potion":
            strengths = p.get("strength", {})
            return Potion(name=name, duration=float(p.get("duration", 10.0)),
                          strength=float(strengths.get(name, 1.0)))
        if self.kind == "resource":
            return ResourceBundle(name=name, amount=int(p.get("amount_base", 2))
                                  + rng.randint(0, int(p.get("amount_bonus_max", 4))))
        raise ValueError(f"unknown loot bucket kind: {self.kind!r}")


@dataclass
class _Table:
    name: str = ""
    description: str = ""
    buckets: list[_Bucket] = field(default_factory=list)

    def pick(self, r: float) -> _Bucket:
        for b in self.buckets:
            if r < b.upto:
                return b
        return self.buckets[-1]

    def roll(self, rng: Rng) -> tuple[str, InventoryItem]:
        bucket = self.pick(rng.random())
        return bucket.kind, bucket.build(rng)


class LootTableManager:
    """World resource — stores all loot tables loaded from TOML."""

    DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "loot_tables.toml"

    def __init__(self):
        self.tables: dict[str, _Table] = {}

    # ── public API ──────────────────────────────────────────────────

    def roll(self, table_name: str, rng: Rng) -> tuple[str, InventoryItem] | None:
        """Roll a table and return ``(bucket_kind, item)``."""
        tbl = self.tables.get(table_name)
        if tbl is None or not tbl.buckets:
            print(f"[LOOT] unknown table: {table_name}")
            return None
        return tbl.roll(rng)

    # ── loading ─────────────────────────────────────────────────────

    @classmethod
    def from_file(cls, filepath: str | Path | None = None) -> "LootTableManager":
        mgr = cls()
        filepath = Path(filepath) if filepath is not None else cls.DEFAULT_PATH
        if not filepath.exists():
            print(f"[LOOT] file not found: {filepath}")
            return mgr

        with open(filepath, "rb") as f:
            data = tomllib.load(f)

        for tname, tdata in data.get("tables", {}).items():
            buckets = []
            for bdata in tdata.get("buckets", []):
                params = {k: v for k, v in bdata.items()
                          if k not in ("kind", "upto", "names")}
                buckets.append(_Bucket(
                    kind=bdata["kind"],
                    upto=float(bdata["upto"]),
                    names=list(bdata.get("names", [])),
                    params=params,
                ))
            buckets.sort(key=lambda b: b.upto)
            mgr.tables[tname] = _Table(name=tname,
                                       description=tdata.get("description", ""),
                                       buckets=buckets)

        print(f"[LOOT] loaded {len(mgr.tables)} tables")
        return mgr


def open_chest(world, chest_eid: int) -> Outcome:
    """Open a chest once and put its single drop in the player's bag.

    The chest flips to ``opened`` before the roll; a second call is a
    no-op.
    """
    chest = world.get(chest_eid, Chest) if world.alive(chest_eid) else None
    if chest is None:
        debug_log(world, "loot", f"open_chest: #{chest_eid} is not a chest",
                  eid=chest_eid)
        return Outcome.fail(Failure.INVALID_TARGET, "Not a chest")
    if chest.opened:
        debug_log(world, "loot", "chest already opened", eid=chest_eid)
        return Outcome.fail(Failure.INVALID_TARGET, "Chest is empty")

    chest.opened = True
    debug_log(world, "loot", "Chest opened", eid=chest_eid)

    mgr = world.res(LootTableManager)
    rolled = mgr.roll(chest.table, world.res(Rng)) if mgr else None
    if rolled is None:
        return Outcome.fail(Failure.INVALID_TARGET, "Chest had nothing inside")

    bucket, item = rolled
    add_to_inventory(world, item, source="chest")
    debug_log(world, "loot", f"Chest dropped {bucket}: {describe(item)}",
              eid=chest_eid)
    bus = world.res(EventBus)
    if bus:
        bus.emit(ChestOpened(eid=chest_eid, bucket=bucket))
    return Outcome.success(f"Found {describe(item)}", item=item)
