# jumpdash/tests/test_collision.py
"""
Rectangle overlap checks.

Usage (from repo root):
  python -m jumpdash.tests.test_collision
"""

from __future__ import annotations
import pygame

from jumpdash.game.character import Character
from jumpdash.game.collision import overlaps, find_collision, any_collision
from jumpdash.game.config import CHARACTER_X, CHARACTER_W, OBSTACLE_W
from jumpdash.game.obstacles import Obstacle


def test_overlap_cases():
    a = pygame.Rect(50, 250, 40, 40)
    assert overlaps(a, pygame.Rect(70, 250, 20, 40))          # inside
    assert overlaps(a, pygame.Rect(80, 260, 20, 40))          # corner
    assert not overlaps(a, pygame.Rect(90, 250, 20, 40))      # touching right edge
    assert not overlaps(a, pygame.Rect(30, 250, 20, 40))      # touching left edge
    assert not overlaps(a, pygame.Rect(60, 290, 20, 40))      # obstacle top == character bottom


def test_symmetric_for_side_by_side_rects():
    for dx in range(-70, 71, 5):
        a = pygame.Rect(100, 250, 40, 40)
        b = pygame.Rect(100 + dx, 250, 20, 40)
        assert overlaps(a, b) == overlaps(b, a), f"asymmetric at dx={dx}"


def test_character_vs_obstacle():
    c = Character()
    hit = Obstacle(slot=0, x=CHARACTER_X + CHARACTER_W // 2, active=True)
    far = Obstacle(slot=1, x=600, active=True)
    assert find_collision(c.rect, [far]) is None
    assert find_collision(c.rect, [far, hit]) is hit

    # high enough to clear it
    c.y = 200.0
    assert not any_collision(c.rect, [hit])

    # passed: obstacle fully left of the character
    behind = Obstacle(slot=2, x=CHARACTER_X - OBSTACLE_W, active=True)
    c.reset()
    assert not any_collision(c.rect, [behind])


def test_first_hit_wins():
    c = Character()
    first = Obstacle(slot=0, x=CHARACTER_X, active=True)
    second = Obstacle(slot=1, x=CHARACTER_X + 5, active=True)
    assert find_collision(c.rect, [first, second]) is first


def main():
    tests = [v for k, v in sorted(globals().items()) if k.startswith("test_") and callable(v)]
    for t in tests:
        t()
        print(f"✓ {t.__name__}")
    print("🎉 collision tests passed")


if __name__ == "__main__":
    main()
