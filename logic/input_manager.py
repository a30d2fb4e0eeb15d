"""logic/input_manager.py — pygame events to player intents.

Sits between raw pygame events and the simulation.  The host loop feeds
in raw events; the manager maps them to *intents* based on the current
**input context** (gameplay or inventory) and writes the continuous
part into the ``PlayerIntent`` resource.

The simulation never touches raw keycodes.

Usage (in the host loop):

    inp = InputManager()
    inp.begin_frame()
    for event in pygame.event.get():
        inp.feed(event)
    inp.end_frame()        # held keys -> movement
    inp.apply(world)       # PlayerIntent, then clicks and toggles
    tick_systems(world, dt)
"""

from __future__ import annotations
from enum import Enum, auto
import pygame

from components import PlayerIntent
from core.tuning import get as _tun
from logic.actions import primary_action, toggle_inventory
from logic.outcome import Outcome


# ── Input contexts ──────────────────────────────────────────────────

class InputContext(Enum):
    """Which binding table is live."""
    GAMEPLAY = auto()   # walking around the world
    INVENTORY = auto()  # inventory / shop panel open


# ── Intent names ────────────────────────────────────────────────────
# Gameplay:   move_forward  move_back  move_left  move_right
#             inventory  primary
# Inventory:  inventory
# Mouse:      primary (LMB), look (RMB drag)


# Each binding is a pygame key constant; mouse buttons use negative
# constants: -1 = LMB, -3 = RMB

_GAMEPLAY_BINDS: dict[str, list[int]] = {
    # held
    "move_forward": [pygame.K_w],
    "move_back":    [pygame.K_s],
    "move_left":    [pygame.K_a],
    "move_right":   [pygame.K_d],
    # pressed
    "inventory":    [pygame.K_e],
    "primary":      [-1],
}

_INVENTORY_BINDS: dict[str, list[int]] = {
    "inventory":    [pygame.K_e, pygame.K_ESCAPE],
}

_BINDS = {
    InputContext.GAMEPLAY: _GAMEPLAY_BINDS,
    InputContext.INVENTORY: _INVENTORY_BINDS,
}

LOOK_BUTTON = 3


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Maps raw events to intents for the live context.

    Per frame: ``begin_frame``, ``feed`` each event, ``end_frame``,
    then ``apply(world)``.
    """

    def __init__(self):
        self.context: InputContext = InputContext.GAMEPLAY
        # rising edges this frame
        self._pressed: set[str] = set()
        # intents whose key is down after end_frame
        self._held: set[str] = set()
        # Keys seen down via KEYDOWN/KEYUP, so held state also works
        # without a display (tests, headless hosts)
        self._keys_down: set[int] = set()
        # RMB-drag mouse travel this frame, pixels
        self._look: tuple[float, float] = (0.0, 0.0)
        self._dragging = False
        # Stash for unhandled raw events the host still needs (e.g. QUIT)
        self.raw_events: list[pygame.event.Event] = []

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Reset per-frame edges and the look delta."""
        self._pressed.clear()
        self._look = (0.0, 0.0)
        self.raw_events.clear()

    def feed(self, event: pygame.event.Event):
        """Translate one pygame event; unknown ones land in raw_events."""
        if event.type == pygame.QUIT:
            self.raw_events.append(event)
            return

        if event.type == pygame.KEYDOWN:
            self._keys_down.add(event.key)
            for intent, key_list in self._active_binds().items():
                if event.key in key_list:
                    self._pressed.add(intent)

        elif event.type == pygame.KEYUP:
            self._keys_down.discard(event.key)

        # MOUSEBUTTONDOWN → discrete intent / start of a look drag
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == LOOK_BUTTON:
                self._dragging = True
            for intent, key_list in self._active_binds().items():
                if -event.button in key_list:
                    self._pressed.add(intent)

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == LOOK_BUTTON:
                self._dragging = False

        elif event.type == pygame.MOUSEMOTION:
            if self._dragging and self.context == InputContext.GAMEPLAY:
                dx, dy = event.rel
                px, py = self._look
                self._look = (px + dx, py + dy)

        else:
            self.raw_events.append(event)

    def end_frame(self):
        """Recompute held intents from the keys currently down."""
        self._held = set()
        for intent, key_list in self._active_binds().items():
            if any(k >= 0 and k in self._keys_down for k in key_list):
                self._held.add(intent)

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """Pressed this frame."""
        return intent in self._pressed

    def held(self, intent: str) -> bool:
        """Down as of the last end_frame."""
        return intent in self._held

    def movement(self) -> tuple[float, float]:
        """Return a normalised (strafe, forward) vector from held keys."""
        strafe = 0.0
        forward = 0.0
        if self.held("move_forward"):
            forward += 1.0
        if self.held("move_back"):
            forward -= 1.0
        if self.held("move_left"):
            strafe -= 1.0
        if self.held("move_right"):
            strafe += 1.0
        # unit length on diagonals
        if strafe != 0.0 and forward != 0.0:
            mag = (strafe * strafe + forward * forward) ** 0.5
            strafe /= mag
            forward /= mag
        return strafe, forward

    def look(self, sensitivity: float) -> tuple[float, float]:
        """This frame's RMB drag as (d_yaw, d_pitch) radians.

        Dragging right turns right; dragging up looks up.
        """
        px, py = self._look
        return px * sensitivity, -py * sensitivity

    # ── world hookup ────────────────────────────────────────────

    def apply(self, world) -> list[Outcome]:
        """Write this frame's intent into the world and run discrete actions.

        Returns the Outcomes of the actions triggered, in order.
        """
        results: list[Outcome] = []
        if self.just("inventory"):
            res = toggle_inventory(world)
            results.append(res)
            if res:
                self.context = (InputContext.INVENTORY if res.item
                                else InputContext.GAMEPLAY)
        elif self.just("primary") and self.context == InputContext.GAMEPLAY:
            results.append(primary_action(world))

        intent = world.res(PlayerIntent)
        if intent is not None:
            if self.context == InputContext.GAMEPLAY:
                intent.move = self.movement()
                d_yaw, d_pitch = self.look(
                    _tun(world, "player", "look_sensitivity", 0.0025))
                old_yaw, old_pitch = intent.look
                intent.look = (old_yaw + d_yaw, old_pitch + d_pitch)
            else:
                intent.move = (0.0, 0.0)
        return results

    # ── internal ────────────────────────────────────────────────

    def _active_binds(self) -> dict[str, list[int]]:
        return _BINDS.get(self.context, {})
