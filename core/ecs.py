"""
core/ecs.py — Entity-Component-System

One World holds the whole dungeon run.  Enemies, allies, projectiles,
chests and collectibles are simply the entities that carry the matching
component; the player ref, the wallet, the tables and the RNG sit on the
same World as resources.

    world = World()
    goblin = world.spawn(Position(), Health(40, 40), Enemy(strength=1))

    for eid, enemy, hp in world.query(Enemy, Health):
        hp.current -= 5

Kills are deferred: ``kill`` only marks the id, queries skip it at once,
and ``purge`` drops its components at the end of the tick.
"""

from __future__ import annotations
from typing import Any, Iterator

RESOURCE_SLOT = -1


class World:
    def __init__(self):
        self._last_eid = 0
        self._components: dict[type, dict[int, Any]] = {}
        self._doomed: set[int] = set()

    def _bucket(self, comp_type: type) -> dict[int, Any]:
        return self._components.setdefault(comp_type, {})

    # -- Entities --

    def spawn(self, *components: Any) -> int:
        """Create an entity, optionally attaching *components* at once."""
        self._last_eid += 1
        for comp in components:
            self.add(self._last_eid, comp)
        return self._last_eid

    def kill(self, eid: int):
        self._doomed.add(eid)

    def alive(self, eid: int) -> bool:
        """True if *eid* was spawned and has not been killed or purged."""
        if not 0 < eid <= self._last_eid or eid in self._doomed:
            return False
        return any(eid in bucket for bucket in self._components.values())

    def purge(self):
        """Drop every killed entity's components.  Run once per tick."""
        if not self._doomed:
            return
        for bucket in self._components.values():
            for eid in self._doomed.intersection(bucket):
                del bucket[eid]
        self._doomed = set()

    # -- Components --

    def add(self, eid: int, comp: Any):
        self._bucket(type(comp))[eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        bucket = self._components.get(comp_type)
        return None if bucket is None else bucket.get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._components.get(comp_type, ())

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for entities that have ALL types.

        Results come back in spawn order.  Systems that spawn or kill
        while iterating should wrap the call in ``list()``.
        """
        if not types:
            return
        buckets = [self._components.get(t, {}) for t in types]
        candidates = sorted(min(buckets, key=len))
        for eid in candidates:
            if eid in self._doomed or eid == RESOURCE_SLOT:
                continue
            if all(eid in b for b in buckets):
                yield (eid, *(b[eid] for b in buckets))

    def query_one(self, *types: type) -> tuple | None:
        """First row of ``query(*types)``, or None."""
        return next(self.query(*types), None)

    def all_of(self, comp_type: type) -> Iterator[tuple[int, Any]]:
        """(eid, component) pairs for one component type."""
        for eid, *rest in self.query(comp_type):
            yield eid, rest[0]

    def count(self, comp_type: type) -> int:
        return len(list(self.all_of(comp_type)))

    # -- Resources --

    def set_res(self, resource: Any, as_type: type | None = None):
        """Store a singleton.  *as_type* registers a subclass under its
        base type (e.g. a ``SequenceRng`` stored as ``Rng``)."""
        self._bucket(as_type or type(resource))[RESOURCE_SLOT] = resource

    def res(self, res_type: type) -> Any | None:
        return self.get(RESOURCE_SLOT, res_type)
