"""
main.py — Headless demo session

1. Build the world (tuning, shop, loot tables, player)
2. Seed chests, enemies, bosses and fragments
3. Drive the player with scripted pygame input through the InputManager
4. Tick at a fixed step and print a summary
"""

import sys

import pygame

from core.events import EventBus
from logic.entity_factory import create_world, seed_world
from logic.input_manager import InputManager
from logic.tick import tick_systems
from logic.view import snapshot

FRAME_DT = 1.0 / 60.0


def _script(frame: int) -> list[pygame.event.Event]:
    """Canned input: walk forward, sweep the view, click every second."""
    events = []
    if frame == 0:
        events.append(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w))
        events.append(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(0, 0)))
    if frame % 4 == 0:
        events.append(pygame.event.Event(pygame.MOUSEMOTION, rel=(6, 0), pos=(0, 0),
                                         buttons=(0, 0, 1)))
    if frame % 60 == 30:
        events.append(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
    return events


def main(frames: int = 1800, seed: int = 7) -> int:
    world = create_world(seed, echo_log=False)
    seed_world(world)

    kills = []
    bus = world.res(EventBus)
    bus.subscribe("EnemyKilled", kills.append)
    bus.subscribe("PlayerDied", lambda ev: print(f"[MAIN] Player died (killer #{ev.killer_eid})"))

    inp = InputManager()
    for frame in range(frames):
        inp.begin_frame()
        for event in _script(frame):
            inp.feed(event)
        inp.end_frame()
        for res in inp.apply(world):
            if res:
                print(f"[MAIN] t={frame * FRAME_DT:6.2f}s {res.message}")
        tick_systems(world, FRAME_DT)

    view = snapshot(world)
    print(f"[MAIN] {frames} frames, {view.time:.1f}s simulated")
    print(f"[MAIN] enemies left: {len(view.enemies)}  kills: {len(kills)}")
    print(f"[MAIN] life crystals: {view.life_crystals}  fragments: {view.fragments}")
    if view.player is not None:
        p = view.player
        print(f"[MAIN] player hp {p.health:.0f}/{p.max_health:.0f}  "
              f"dead={p.dead}  items={len(p.inventory)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
