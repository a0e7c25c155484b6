# jumpdash/tests/test_character.py
"""
Character physics checks.

Usage (from repo root):
  python -m jumpdash.tests.test_character
  pytest jumpdash/tests/test_character.py
"""

from __future__ import annotations
import random

from jumpdash.game.character import Character
from jumpdash.game.config import (
    HEIGHT, GROUND_LEVEL, JUMP_POWER, COYOTE_TICKS, CHARACTER_X, CHARACTER_H
)
from jumpdash.game.events import EventBus, GameEvent


def test_ground_and_velocity_invariant():
    """Random jump spam: never below ground, vy == 0 whenever grounded."""
    rng = random.Random(5)
    c = Character()
    for _ in range(2000):
        if rng.random() < 0.2:
            c.jump()
        c.update()
        assert c.y >= c.ground_level, f"below ground: {c.y}"
        if c.grounded:
            assert c.vy == 0.0, f"grounded with vy={c.vy}"
        assert 0 <= c.coyote_counter <= COYOTE_TICKS


def test_rest_position():
    c = Character()
    for _ in range(10):
        c.update()
    assert c.grounded and c.vy == 0.0 and c.y == GROUND_LEVEL
    assert c.rect.bottom == HEIGHT - GROUND_LEVEL
    assert c.coyote_counter == COYOTE_TICKS


def test_jump_from_ground():
    c = Character()
    assert c.jump() is True
    assert c.vy == JUMP_POWER
    assert c.jumping and c.airborne
    assert c.coyote_counter == 0


def test_no_jump_when_airborne_without_grace():
    c = Character()
    c.jump()
    for _ in range(3):
        c.update()
    assert c.airborne and c.coyote_counter == 0
    before = (c.y, c.vy, c.jumping, c.coyote_counter)
    assert c.jump() is False
    assert (c.y, c.vy, c.jumping, c.coyote_counter) == before


def test_coyote_jump_after_leaving_ground():
    # walked off a ledge: airborne, not jumping, grace left
    c = Character(y=60.0, coyote_counter=3)
    assert c.airborne
    assert c.jump() is True
    assert c.vy == JUMP_POWER and c.jumping


def test_coyote_counter_drains_to_zero():
    c = Character(y=400.0, coyote_counter=COYOTE_TICKS)
    for _ in range(COYOTE_TICKS + 5):
        c.update()
        assert c.coyote_counter >= 0
    assert c.airborne
    assert c.coyote_counter == 0
    assert c.jump() is False


def test_landing_signals_once():
    bus = EventBus()
    seen = []
    for ev in GameEvent:
        bus.subscribe(ev, lambda ev=ev: seen.append(ev))
    landed_at = []
    c = Character(bus=bus, on_land=lambda x, y: landed_at.append((x, y)))

    c.jump()
    for _ in range(100):
        c.update()
    assert seen == [GameEvent.JUMPED, GameEvent.LANDED], seen
    assert landed_at == [(CHARACTER_X, HEIGHT - GROUND_LEVEL - CHARACTER_H)]
    assert c.grounded and not c.jumping


def test_fall_without_jump_lands_silently():
    bus = EventBus()
    seen = []
    bus.subscribe(GameEvent.LANDED, lambda: seen.append("landed"))
    c = Character(y=80.0, bus=bus)
    for _ in range(100):
        c.update()
    assert c.grounded and c.vy == 0.0
    assert seen == []


def test_reset_to_rest():
    c = Character()
    c.jump()
    for _ in range(7):
        c.update()
    c.reset()
    assert c.grounded and c.vy == 0.0 and c.y == c.ground_level
    assert c.coyote_counter == COYOTE_TICKS


def main():
    tests = [v for k, v in sorted(globals().items()) if k.startswith("test_") and callable(v)]
    for t in tests:
        t()
        print(f"✓ {t.__name__}")
    print("🎉 character tests passed")


if __name__ == "__main__":
    main()
