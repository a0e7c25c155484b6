# jumpdash/game/particles.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional
from .config import PARTICLES_PER_BURST, PARTICLE_SPREAD, PARTICLE_LIFETIME_S


@dataclass
class Particle:
    x: float = 0.0
    y: float = 0.0
    age: float = 0.0
    alive: bool = False

    @property
    def alpha(self) -> float:
        """1 when fresh, 0 at the end of its life."""
        return max(0.0, 1.0 - self.age / PARTICLE_LIFETIME_S)


class ParticlePool:
    """Landing dust. Expired particles are kept and handed out again on the next burst."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.live: List[Particle] = []
        self.pool: List[Particle] = []

    def _acquire(self) -> Particle:
        return self.pool.pop() if self.pool else Particle()

    def burst(self, x: float, y: float, count: int = PARTICLES_PER_BURST):
        for _ in range(count):
            p = self._acquire()
            p.x = x + self.rng.uniform(-PARTICLE_SPREAD, PARTICLE_SPREAD)
            p.y = y + self.rng.uniform(-PARTICLE_SPREAD, PARTICLE_SPREAD)
            p.age = 0.0
            p.alive = True
            self.live.append(p)

    def update(self, dt: float):
        keep: List[Particle] = []
        for p in self.live:
            p.age += dt
            if p.age >= PARTICLE_LIFETIME_S:
                p.alive = False
                self.pool.append(p)
            else:
                keep.append(p)
        self.live = keep

    def reset(self):
        for p in self.live:
            p.alive = False
        self.pool.extend(self.live)
        self.live = []
