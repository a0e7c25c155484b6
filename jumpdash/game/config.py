# jumpdash/game/config.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

# --- Display ---
WIDTH = 800
HEIGHT = 300
FPS = 60

# --- Character ---
GROUND_LEVEL = 10           # baseline height (px above the container bottom)
JUMP_POWER = 12.0           # upward impulse (px/tick)
GRAVITY = -0.6              # per-tick acceleration, not frame-rate scaled
COYOTE_TICKS = 6            # ticks a jump is still accepted after leaving the ground
CHARACTER_X = 50            # character's fixed x (world scrolls left)
CHARACTER_W = 40
CHARACTER_H = 40

# --- Obstacles ---
OBSTACLE_W = 20
OBSTACLE_H = 40
OBSTACLE_DESPAWN_X = -30    # recycle once x passes this
OBSTACLE_CAPACITY = 32      # arena slots
INITIAL_OBSTACLE_SPEED = 5.0
MAX_OBSTACLE_SPEED = 15.0
SPEED_STEP = 1.0
FPS_SCALE = 60              # speed units are px per 1/60 s

# --- Spawn timing (ms) ---
INITIAL_SPAWN_INTERVAL_MS = 2000.0
MIN_SPAWN_INTERVAL_MS = 800.0
SPAWN_JITTER_MS = 500.0
MIN_SPAWN_GAP_MS = 1500.0

# --- Scoring ---
SCORE_RATE = 10.0           # points per second
LEVEL_SCORE_STEP = 1000
LEADERBOARD_SIZE = 5
MAX_FRAME_DT = 0.1          # clamp stalls (s)

# --- Landing particles ---
PARTICLES_PER_BURST = 5
PARTICLE_SPREAD = 10.0
PARTICLE_LIFETIME_S = 1.0
PARTICLE_SIZE = 6

# --- Persistence ---
SAVE_FILE_DEFAULT = Path.home() / ".jumpdash" / "save.json"
HIGH_SCORE_KEY = "highScore"
LEADERBOARD_KEY = "leaderboard"

# --- Colors (RGB) ---
COLOR_BG = (245, 240, 225)
COLOR_FG = (40, 40, 50)
COLOR_GROUND = (120, 100, 80)
COLOR_CHARACTER = (60, 130, 200)
COLOR_OBSTACLE = (200, 70, 60)
COLOR_PARTICLE = (230, 190, 90)
COLOR_DANGER = (255, 86, 110)


@dataclass
class Settings:
    """
    Player toggles owned by a session. Audio playback and vibration are not
    part of this game, so the flags are display-only: the HUD shows them and
    nothing else reads them.
    """
    audio: bool = True
    haptics: bool = True

    def toggle_audio(self) -> bool:
        self.audio = not self.audio
        return self.audio

    def toggle_haptics(self) -> bool:
        self.haptics = not self.haptics
        return self.haptics
