# jumpdash/game/progression.py
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, List
from .config import (
    SCORE_RATE, INITIAL_OBSTACLE_SPEED, MAX_OBSTACLE_SPEED, SPEED_STEP,
    INITIAL_SPAWN_INTERVAL_MS, MIN_SPAWN_INTERVAL_MS, LEVEL_SCORE_STEP, LEADERBOARD_SIZE
)


def spawn_interval_for(score: float) -> float:
    """Spawn interval (ms) shrinks by 1 ms per 5 points down to the floor."""
    return max(MIN_SPAWN_INTERVAL_MS, INITIAL_SPAWN_INTERVAL_MS - score / 5.0)


@dataclass
class Progression:
    """Score accrued over time plus the difficulty derived from it."""
    score: float = 0.0
    level: int = 1
    obstacle_speed: float = INITIAL_OBSTACLE_SPEED
    spawn_interval: float = INITIAL_SPAWN_INTERVAL_MS

    @property
    def display_score(self) -> int:
        return int(math.floor(self.score))

    def accrue(self, dt: float) -> int:
        """
        Add dt seconds of score and recompute difficulty.
        Every multiple of LEVEL_SCORE_STEP crossed since the previous call counts,
        even when one long tick jumps over it. Returns the number of level-ups.
        """
        before = self.display_score // LEVEL_SCORE_STEP
        self.score += max(0.0, dt) * SCORE_RATE
        self.spawn_interval = spawn_interval_for(self.score)
        crossed = self.display_score // LEVEL_SCORE_STEP - before
        for _ in range(crossed):
            self.level_up()
        return crossed

    def level_up(self):
        self.level += 1
        self.obstacle_speed = min(MAX_OBSTACLE_SPEED, self.obstacle_speed + SPEED_STEP)

    def reset(self):
        self.score = 0.0
        self.level = 1
        self.obstacle_speed = INITIAL_OBSTACLE_SPEED
        self.spawn_interval = INITIAL_SPAWN_INTERVAL_MS


def insert_score(board: Iterable[int], score: int, size: int = LEADERBOARD_SIZE) -> List[int]:
    """New leaderboard: `board` plus `score`, sorted descending, top `size` kept."""
    ranked = sorted(list(board) + [int(score)], reverse=True)
    return ranked[:size]
