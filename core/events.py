"""core/events.py — Combat and loot notifications.

Rules code emits a record once the world is already updated; listeners
(the HUD, the demo loop, tests) only watch.  The bus is a World
resource::

    bus = world.res(EventBus)
    bus.emit(EnemyKilled(eid=42, reward=2))
    bus.subscribe("EnemyKilled", on_kill)

``tick_systems`` calls ``bus.drain()`` once per frame.
"""

from __future__ import annotations
import traceback
from collections import Counter, deque
from dataclasses import dataclass
from typing import Any, Callable

MAX_DRAIN_ROUNDS = 1000


@dataclass
class EnemyKilled:
    """An enemy's HP dropped to zero and its reward was granted."""
    eid: int
    reward: int = 0
    is_boss: bool = False
    dropped_fragment: bool = False
    killer_eid: int | None = None


@dataclass
class PlayerHit:
    """Contact damage landed on the player (after shield absorption)."""
    attacker_eid: int = 0
    damage: float = 0.0
    absorbed: float = 0.0


@dataclass
class PlayerDied:
    """Player health reached zero.  Terminal."""
    killer_eid: int | None = None


@dataclass
class ItemAcquired:
    """An item entered the player's inventory."""
    item: Any = None
    source: str = ""           # "chest", "shop", "pickup"


@dataclass
class ChestOpened:
    eid: int = 0
    bucket: str = ""


class EventBus:
    """Queue of notification records, keyed to listeners by class name."""

    def __init__(self):
        self._waiting: deque[Any] = deque()
        self._listeners: dict[str, list[Callable]] = {}
        self._seen: Counter[str] = Counter()

    def emit(self, event) -> None:
        self._waiting.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Call *handler* for every drained event named *event_type*
        (the class name, e.g. ``"EnemyKilled"``)."""
        self._listeners.setdefault(event_type, []).append(handler)

    def drain(self) -> int:
        """Deliver everything queued and return how many were delivered.

        Events emitted from inside a handler go out in a later round of
        the same call.  A failing handler is reported and skipped.
        """
        delivered = 0
        for _ in range(MAX_DRAIN_ROUNDS):
            if not self._waiting:
                break
            round_ = list(self._waiting)
            self._waiting.clear()
            for event in round_:
                self._deliver(event)
            delivered += len(round_)
        return delivered

    def _deliver(self, event) -> None:
        name = type(event).__name__
        self._seen[name] += 1
        for handler in tuple(self._listeners.get(name, ())):
            try:
                handler(event)
            except Exception as exc:
                print(f"[EVENT] {name} listener {handler!r} failed: {exc}")
                traceback.print_exc()

    def stats(self) -> dict[str, int]:
        """Delivered-event totals by class name."""
        return dict(self._seen)

    def pending(self) -> list[Any]:
        return list(self._waiting)

    def pending_count(self) -> int:
        return len(self._waiting)

    def __repr__(self) -> str:
        return f"EventBus(waiting={len(self._waiting)}, kinds={len(self._listeners)})"
