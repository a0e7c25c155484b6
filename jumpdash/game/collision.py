# jumpdash/game/collision.py
from __future__ import annotations
from typing import Iterable
import pygame


def overlaps(a: pygame.Rect, b: pygame.Rect) -> bool:
    """
    Three-sided overlap of `a` (the character) against `b` (a ground obstacle).
    The character can never pass under an obstacle, so a.top vs b.bottom is not tested.
    """
    return a.right > b.left and a.left < b.right and a.bottom > b.top


def find_collision(char_rect: pygame.Rect, obstacles: Iterable):
    """First obstacle whose rect overlaps `char_rect`, or None."""
    for obs in obstacles:
        if overlaps(char_rect, obs.rect):
            return obs
    return None


def any_collision(char_rect: pygame.Rect, obstacles: Iterable) -> bool:
    return find_collision(char_rect, obstacles) is not None
