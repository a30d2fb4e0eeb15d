"""components.dev_log — Structured simulation event log.

A bounded resource that records timestamped combat, loot, economy and
error events.  Every entry is also echoed to stdout with a bracketed
category tag so a terminal session reads like::

    [COMBAT] Enemy#4 hit for 6 (hp 34.0/40.0)
    [ECON] Purchased Speed Potion for 6 crystals

Usage:
    debug_log(world, "combat", "frozen, reduced damage", eid=eid)

Entries are plain dicts with the keys ``t``, ``eid``, ``cat``, ``msg``
and ``details``.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field

from components.resources import GameClock


@dataclass
class DevLog:
    """Newest-last log of simulation events for dev tools and tests."""

    max_entries: int = 500
    echo: bool = True
    # Categories to keep; empty keeps everything.
    only: frozenset[str] = frozenset()
    entries: deque = field(init=False)

    def __post_init__(self):
        self.entries = deque(maxlen=self.max_entries)

    def record(self, eid: int, cat: str, msg: str, *,
               t: float = 0.0, details: dict | None = None) -> None:
        if self.only and cat not in self.only:
            return
        self.entries.append(dict(t=t, eid=eid, cat=cat, msg=msg, details=details))

    def recent(self, n: int = 50) -> list[dict]:
        return list(self.entries)[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        return [e for e in self.entries if e["cat"] == cat][-n:]


def debug_log(world, cat: str, msg: str, *, eid: int = -1,
              **details) -> None:
    """Echo ``[CAT] msg`` and append it to the world's DevLog, if any."""
    log = world.res(DevLog) if world is not None else None
    if log is None or log.echo:
        print(f"[{cat.upper()}] {msg}")
    if log is None:
        return
    clock = world.res(GameClock)
    log.record(eid, cat, msg, t=clock.time if clock else 0.0,
               details=details or None)
