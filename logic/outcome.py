"""logic/outcome.py — Results returned by interaction operations.

Nothing in the simulation raises for a gameplay failure.  Operations
return an ``Outcome``; the caller (UI, input layer, test) decides what
to show.  Failures are always logged by the operation itself::

    res = purchase(world, "potion_speed")
    if not res:
        flash(res.message)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Failure(str, Enum):
    INVALID_ENTITY = "invalid_entity"               # removed / unknown combat entity
    INSUFFICIENT_CURRENCY = "insufficient_currency"
    INVALID_TARGET = "invalid_target"               # nothing actionable


@dataclass
class Outcome:
    ok: bool
    message: str = ""
    failure: Failure | None = None
    item: Any = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, message: str = "", item: Any = None) -> "Outcome":
        return cls(True, message, None, item)

    @classmethod
    def fail(cls, failure: Failure, message: str) -> "Outcome":
        return cls(False, message, failure)
