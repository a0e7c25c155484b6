# jumpdash/game/obstacles.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional
import pygame
from .config import (
    WIDTH, HEIGHT, GROUND_LEVEL, OBSTACLE_W, OBSTACLE_H, OBSTACLE_DESPAWN_X,
    OBSTACLE_CAPACITY, INITIAL_OBSTACLE_SPEED, INITIAL_SPAWN_INTERVAL_MS,
    SPAWN_JITTER_MS, MIN_SPAWN_GAP_MS, FPS_SCALE
)


@dataclass
class Obstacle:
    """One arena slot. `x` is the left edge in container pixels."""
    slot: int
    x: float = 0.0
    active: bool = False

    @property
    def rect(self) -> pygame.Rect:
        bottom = HEIGHT - GROUND_LEVEL
        return pygame.Rect(int(self.x), bottom - OBSTACLE_H, OBSTACLE_W, OBSTACLE_H)


class ObstacleManager:
    """
    Endless stream of ground obstacles scrolling left.
    Records live in an arena (`slots`); retired slots go on a free-index stack
    and are reused before the arena grows. A slot is either in `active_slots`
    or on `free_slots`, never both.
    """
    def __init__(self,
                 speed: float = INITIAL_OBSTACLE_SPEED,
                 spawn_interval: float = INITIAL_SPAWN_INTERVAL_MS,
                 spawn_x: float = WIDTH,
                 capacity: int = OBSTACLE_CAPACITY,
                 rng: Optional[random.Random] = None):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.speed = float(speed)
        self.spawn_interval = float(spawn_interval)   # ms
        self.spawn_x = float(spawn_x)
        self.capacity = int(capacity)
        self.rng = rng if rng is not None else random.Random()
        self.slots: List[Obstacle] = []
        self.free_slots: List[int] = []
        self.active_slots: List[int] = []
        self.time_since_spawn_ms = 0.0

    @property
    def active(self) -> List[Obstacle]:
        """Active obstacles in spawn order (oldest, i.e. leftmost, first)."""
        return [self.slots[i] for i in self.active_slots]

    @property
    def pool_size(self) -> int:
        return len(self.free_slots)

    def next_spawn_delay(self) -> float:
        """Randomized gap before the next spawn (ms), never below MIN_SPAWN_GAP_MS."""
        delay = self.rng.uniform(0.0, self.spawn_interval) + SPAWN_JITTER_MS
        return max(delay, MIN_SPAWN_GAP_MS)

    def update(self, dt: float):
        """Scroll, recycle off-screen obstacles, then maybe spawn one."""
        dx = self.speed * dt * FPS_SCALE
        still_active: List[int] = []
        for i in self.active_slots:
            obs = self.slots[i]
            obs.x -= dx
            if obs.x < OBSTACLE_DESPAWN_X:
                obs.active = False
                self.free_slots.append(i)
            else:
                still_active.append(i)
        self.active_slots = still_active

        self.time_since_spawn_ms += dt * 1000.0
        if self.time_since_spawn_ms > self.next_spawn_delay():
            self.spawn()
            self.time_since_spawn_ms = 0.0

    def spawn(self) -> Optional[Obstacle]:
        """Place an obstacle at the right edge. Returns None when the arena is full."""
        if self.free_slots:
            obs = self.slots[self.free_slots.pop()]
        elif len(self.slots) < self.capacity:
            obs = Obstacle(slot=len(self.slots))
            self.slots.append(obs)
        else:
            return None
        obs.x = self.spawn_x
        obs.active = True
        self.active_slots.append(obs.slot)
        return obs

    def reset(self):
        self.slots = []
        self.free_slots = []
        self.active_slots = []
        self.time_since_spawn_ms = 0.0
