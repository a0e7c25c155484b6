# jumpdash/game/clock.py
from __future__ import annotations
import time


class SystemClock:
    """Monotonic wall clock in seconds."""

    def now(self) -> float:
        return time.perf_counter()


class ManualClock:
    """Clock that only moves when told to; lets tests and headless runs feed exact deltas."""

    def __init__(self, start: float = 0.0):
        self.t = float(start)

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> float:
        self.t += dt
        return self.t
