# jumpdash/env/jd_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import random
import numpy as np
import gymnasium as gym
import pygame

from jumpdash.game.config import WIDTH, HEIGHT, FPS
from jumpdash.game.clock import ManualClock
from jumpdash.game.session import GameSession, GameState
from jumpdash.game.storage import MemoryStore
from jumpdash.env.observations import build_observation, OBS_SIZE


class JumpDashEnv(gym.Env):
    """
    Jump Dash Gymnasium environment (vector observations).
    - The session runs on a ManualClock advanced by exactly 1/60 s per frame,
      so a seed plus an action sequence replays bit-for-bit.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (6,), float32 (see observations.build_observation).
    - Persistence goes to an in-memory store; nothing touches disk.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.session: Optional[GameSession] = None
        self.clock: Optional[ManualClock] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        self.screen = None
        self.pg_clock = None
        self.fonts = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Explicit seed -> used as-is; otherwise derived from the env's np_random
        if seed is not None:
            run_seed = int(seed)
        else:
            run_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.clock = ManualClock()
        self.session = GameSession(
            store=MemoryStore(),
            clock=self.clock,
            rng=random.Random(run_seed),
        )
        self.session.start()
        self.timestep = 0
        self.current_seed = run_seed

        return self._get_obs(), self._info()

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None and self.clock is not None

        jumped = False
        if action == 1:
            jumped = self.session.jump()

        for _ in range(self.frame_skip):
            self.clock.advance(self.dt)
            self.session.tick()
            if self.session.state is GameState.GAMEOVER:
                break

        alive = self.session.state is not GameState.GAMEOVER
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        info = self._info()
        info["jumped"] = jumped

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.session is not None
        s = self.session
        return build_observation(s.character, s.obstacles.active, s.obstacles.speed)

    def _info(self) -> Dict[str, Any]:
        assert self.session is not None
        return {
            "score": self.session.score,
            "level": self.session.level,
            "frames": self.session.frames,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "grounded": self.session.character.grounded,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.session is None:
            return

        # imported here so headless training never pulls in the host's font setup
        from jumpdash.game.game import draw

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Jump Dash — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.pg_clock = pygame.time.Clock()
            self.fonts = (pygame.font.SysFont("jetbrainsmono", 16),
                          pygame.font.SysFont("jetbrainsmono", 36, bold=True))

        if self.render_mode == "human":
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pass

        draw(self.screen, self.session, *self.fonts)

        if self.render_mode == "human":
            pygame.display.flip()
            self.pg_clock.tick(self.metadata.get("render_fps", FPS))
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.pg_clock = None
            self.fonts = None
