# jumpdash/game/character.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
from .config import (
    HEIGHT, GROUND_LEVEL, JUMP_POWER, GRAVITY, COYOTE_TICKS,
    CHARACTER_X, CHARACTER_W, CHARACTER_H
)
from .events import EventBus, GameEvent

LandCallback = Callable[[int, int], None]


@dataclass
class Character:
    """
    Auto-running body that only moves vertically:
    - y is the height of the feet above the container bottom (ground = GROUND_LEVEL)
    - vy > 0 moves up; gravity and jump power are per-tick constants
    """
    y: float = float(GROUND_LEVEL)
    vy: float = 0.0
    jumping: bool = False
    coyote_counter: int = COYOTE_TICKS
    ground_level: float = float(GROUND_LEVEL)
    bus: Optional[EventBus] = None
    on_land: Optional[LandCallback] = None

    @property
    def grounded(self) -> bool:
        return (not self.jumping) and self.y <= self.ground_level

    @property
    def airborne(self) -> bool:
        return not self.grounded

    @property
    def rect(self) -> pygame.Rect:
        bottom = HEIGHT - int(round(self.y))
        return pygame.Rect(CHARACTER_X, bottom - CHARACTER_H, CHARACTER_W, CHARACTER_H)

    @property
    def screen_pos(self) -> Tuple[int, int]:
        r = self.rect
        return r.left, r.top

    def can_jump(self) -> bool:
        return self.grounded or self.coyote_counter > 0

    def jump(self) -> bool:
        """Apply the jump impulse unless airborne past the coyote window. Returns True if performed."""
        if not self.can_jump():
            return False
        self.jumping = True
        self.vy = JUMP_POWER
        self.coyote_counter = 0
        if self.bus is not None:
            self.bus.emit(GameEvent.JUMPED)
        return True

    def update(self):
        """One simulation tick: coyote bookkeeping, gravity, integration, landing."""
        if self.grounded:
            self.coyote_counter = COYOTE_TICKS
        elif self.coyote_counter > 0:
            self.coyote_counter -= 1

        self.vy += GRAVITY
        self.y += self.vy

        if self.y < self.ground_level:
            self.y = self.ground_level
            self.vy = 0.0
            was_jumping, self.jumping = self.jumping, False
            if was_jumping:
                if self.on_land is not None:
                    self.on_land(*self.screen_pos)
                if self.bus is not None:
                    self.bus.emit(GameEvent.LANDED)

    def reset(self):
        """Back to grounded rest."""
        self.y = self.ground_level
        self.vy = 0.0
        self.jumping = False
        self.coyote_counter = COYOTE_TICKS
