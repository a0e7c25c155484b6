# jumpdash/game/session.py
"""
Game loop and state machine.

    HOME -> RUNNING -> PAUSED <-> RUNNING
                    -> GAMEOVER -> (restart) -> RUNNING

One call to `tick()` is one frame: it measures the elapsed time on the injected
clock (clamped to MAX_FRAME_DT) and runs `step(dt)`. `step` is deterministic for a
given dt and RNG state:

    character -> obstacles -> collision -> score -> high score -> difficulty

Input handlers (`jump`, `pause`, ...) only flip state or call into the
character; they never run simulation code themselves.
"""

from __future__ import annotations
import random
from enum import Enum
from typing import List, Optional

from .character import Character
from .clock import SystemClock
from .collision import any_collision
from .config import MAX_FRAME_DT, Settings
from .events import EventBus, GameEvent
from .obstacles import ObstacleManager
from .particles import ParticlePool
from .progression import Progression
from .storage import MemoryStore, load_high_score, save_high_score, load_leaderboard, record_score


class GameState(Enum):
    HOME = 0
    RUNNING = 1
    PAUSED = 2
    GAMEOVER = 3


class GameSession:
    def __init__(self,
                 store: Optional[MemoryStore] = None,
                 settings: Optional[Settings] = None,
                 clock=None,
                 rng: Optional[random.Random] = None,
                 bus: Optional[EventBus] = None,
                 max_frame_dt: float = MAX_FRAME_DT):
        self.store = store if store is not None else MemoryStore()
        self.settings = settings if settings is not None else Settings()
        self.clock = clock if clock is not None else SystemClock()
        self.rng = rng if rng is not None else random.Random()
        self.bus = bus if bus is not None else EventBus()
        self.max_frame_dt = float(max_frame_dt)

        self.state = GameState.HOME
        self.progression = Progression()
        # own stream, so landing dust never shifts the obstacle spawn sequence
        self.particles = ParticlePool(random.Random(self.rng.getrandbits(64)))
        self.character = Character(bus=self.bus, on_land=self.particles.burst)
        self.obstacles = ObstacleManager(
            speed=self.progression.obstacle_speed,
            spawn_interval=self.progression.spawn_interval,
            rng=self.rng,
        )
        self.high_score: int = load_high_score(self.store)
        self.leaderboard: List[int] = load_leaderboard(self.store)
        self.last_frame_time = self.clock.now()
        self.frames = 0

    # -------------------- Properties --------------------

    @property
    def score(self) -> int:
        return self.progression.display_score

    @property
    def level(self) -> int:
        return self.progression.level

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    # -------------------- Transitions --------------------

    def start(self) -> bool:
        if self.state is not GameState.HOME:
            return False
        self._enter_running()
        return True

    def pause(self) -> bool:
        if self.state is not GameState.RUNNING:
            return False
        self.state = GameState.PAUSED
        return True

    def resume(self) -> bool:
        if self.state is not GameState.PAUSED:
            return False
        self._enter_running()
        return True

    def toggle_pause(self) -> bool:
        if self.state is GameState.RUNNING:
            return self.pause()
        return self.resume()

    def jump(self) -> bool:
        if self.state is not GameState.RUNNING:
            return False
        return self.character.jump()

    def restart(self):
        """Fresh run from any state; goes straight to RUNNING."""
        self.progression.reset()
        self.obstacles.reset()
        self._sync_difficulty()
        self.character.reset()
        self.particles.reset()
        self.frames = 0
        self._enter_running()

    def game_over(self):
        self.state = GameState.GAMEOVER
        self.leaderboard = record_score(self.store, self.score)

    def _enter_running(self):
        self.state = GameState.RUNNING
        # re-anchor so time spent outside RUNNING never counts
        self.last_frame_time = self.clock.now()

    # -------------------- Frame --------------------

    def tick(self) -> bool:
        """Run one frame if RUNNING. Returns True if a step was simulated."""
        if self.state is not GameState.RUNNING:
            return False
        now = self.clock.now()
        dt = min(max(0.0, now - self.last_frame_time), self.max_frame_dt)
        self.last_frame_time = now
        self.step(dt)
        return True

    def step(self, dt: float):
        """Advance the simulation by dt seconds (one frame)."""
        if self.state is not GameState.RUNNING:
            return
        self.frames += 1
        self.character.update()
        self.obstacles.update(dt)
        self.particles.update(dt)

        if any_collision(self.character.rect, self.obstacles.active):
            self.bus.emit(GameEvent.COLLISION)
            self.game_over()
            return

        levels = self.progression.accrue(dt)
        self._update_high_score()
        for _ in range(levels):
            self.bus.emit(GameEvent.LEVEL_UP)
        self._sync_difficulty()

    def _update_high_score(self):
        # persisted as an integer, so only write when the floor moves
        if self.score > self.high_score:
            self.high_score = self.score
            save_high_score(self.store, self.high_score)

    def _sync_difficulty(self):
        self.obstacles.speed = self.progression.obstacle_speed
        self.obstacles.spawn_interval = self.progression.spawn_interval
