"""core/tuning.py — Gameplay numbers from ``data/tuning.toml``.

Each World carries its own ``Tuning`` resource, so two worlds built
from different files never see each other's numbers::

    world.set_res(Tuning.from_file("data/tuning.toml"))

    from core.tuning import get as _tun
    radius = _tun(world, "ai.enemy", "aggro_radius", 22.0)

Callers always pass the shipped number as the default, so a missing
file, key or resource falls back to the built-in balance.
"""

from __future__ import annotations
import tomllib
from pathlib import Path


DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


class Tuning:
    """Nested TOML tables addressed by dotted section names."""

    def __init__(self, tables: dict | None = None, source: Path | None = None):
        self.tables: dict = tables if tables is not None else {}
        self.source = source

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> "Tuning":
        """Read *path* (``data/tuning.toml`` when omitted)."""
        source = DEFAULT_PATH if path is None else Path(path)
        tuning = cls(source=source)
        tuning.reload()
        return tuning

    def reload(self) -> None:
        """Re-read the source file, dropping in-memory overrides."""
        if self.source is None:
            self.tables = {}
            return
        try:
            with self.source.open("rb") as fh:
                self.tables = tomllib.load(fh)
        except FileNotFoundError:
            print(f"[TUNING] {self.source} not found, using defaults")
            self.tables = {}
            return
        print(f"[TUNING] Loaded {_leaf_count(self.tables)} values from {self.source}")

    def override(self, section_path: str, key: str, value) -> None:
        """Set a single value in memory (tests, debug console)."""
        table = self.tables
        for name in section_path.split("."):
            table = table.setdefault(name, {})
        table[key] = value

    def _walk(self, section_path: str) -> dict | None:
        table = self.tables
        for name in section_path.split("."):
            table = table.get(name) if isinstance(table, dict) else None
            if table is None:
                return None
        return table if isinstance(table, dict) else None

    def get(self, section: str, key: str, default=None):
        """Value of *key* in the dotted *section* (``"combat.damage"`` is
        the ``[combat.damage]`` table), or *default*."""
        table = self._walk(section)
        return default if table is None else table.get(key, default)

    def section(self, section_path: str) -> dict:
        """Shallow copy of a whole table; empty when it does not exist."""
        return dict(self._walk(section_path) or {})


def get(world, section: str, key: str, default=None):
    """Read *key* from *world*'s ``Tuning`` resource, or *default*."""
    tuning = world.res(Tuning) if world is not None else None
    return default if tuning is None else tuning.get(section, key, default)


def _leaf_count(table: dict) -> int:
    return sum(_leaf_count(v) if isinstance(v, dict) else 1 for v in table.values())
