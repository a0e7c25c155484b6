# jumpdash/env/observations.py
from __future__ import annotations
from typing import List
import numpy as np

from jumpdash.game.config import (
    WIDTH, JUMP_POWER, GRAVITY, MAX_OBSTACLE_SPEED
)

# Apex of a full jump above the ground (px)
MAX_JUMP_HEIGHT: float = JUMP_POWER * JUMP_POWER / (2.0 * abs(GRAVITY))
OBS_SIZE = 6


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _gaps_ahead(character, obstacles) -> List[float]:
    """Horizontal gaps (px) from the character's front edge to obstacles not yet passed, nearest first."""
    me = character.rect
    gaps = [float(o.rect.left - me.right) for o in obstacles if o.rect.right > me.left]
    return sorted(gaps)


def build_observation(character, obstacles, obstacle_speed: float) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ height_norm, vy_norm, can_jump, gap1_norm, gap2_norm, speed_norm ]
    - height_norm: feet above ground / MAX_JUMP_HEIGHT, in [0,1]
    - vy_norm    : vy / JUMP_POWER, in [-1,1]
    - can_jump   : 1.0 if a jump would be honored now
    - gap*_norm  : gap / WIDTH in [0,1]; 0 = touching/overlapping, 1.0 = nothing ahead
    - speed_norm : obstacle speed / MAX_OBSTACLE_SPEED
    """
    height = _clamp01((character.y - character.ground_level) / MAX_JUMP_HEIGHT)
    vy = max(-1.0, min(1.0, character.vy / JUMP_POWER))
    can_jump = 1.0 if character.can_jump() else 0.0

    gaps = _gaps_ahead(character, obstacles)
    gap_feats = []
    for k in range(2):
        gap_feats.append(_clamp01(gaps[k] / float(WIDTH)) if k < len(gaps) else 1.0)

    speed = _clamp01(obstacle_speed / MAX_OBSTACLE_SPEED)
    return np.asarray([height, vy, can_jump] + gap_feats + [speed], dtype=np.float32)
