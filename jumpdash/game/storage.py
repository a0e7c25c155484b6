# jumpdash/game/storage.py
"""
Best-effort persistence for the high score and the leaderboard.

Values are strings keyed like a browser key/value store:
    highScore   -> "1234"
    leaderboard -> "[400, 300, 200]"
Missing or corrupt data loads as 0 / []. Write failures are reported and
swallowed: gameplay never waits on, or fails because of, the save file.
"""

from __future__ import annotations
import json
import math
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import HIGH_SCORE_KEY, LEADERBOARD_KEY, LEADERBOARD_SIZE
from .progression import insert_score


class MemoryStore:
    """In-process key/value store (headless runs, tests)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = str(value)


class JsonFileStore(MemoryStore):
    """Key/value store mirrored to one JSON object on disk, written through on every set."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._write_failed = False
        super().__init__(self._read())

    def _read(self) -> Dict[str, str]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            print(f"Save file unreadable ({self.path}): {e}")
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")
        except OSError as e:
            # warn once per store; later writes still retry silently
            if not self._write_failed:
                print(f"Save file write error ({self.path}): {e}")
            self._write_failed = True
        else:
            self._write_failed = False


Store = MemoryStore


def load_high_score(store: Store) -> int:
    raw = store.get(HIGH_SCORE_KEY)
    if raw is None:
        return 0
    try:
        return max(0, int(float(raw)))
    except (ValueError, OverflowError):
        return 0


def save_high_score(store: Store, value: int) -> None:
    store.set(HIGH_SCORE_KEY, str(int(value)))


def load_leaderboard(store: Store) -> List[int]:
    raw = store.get(LEADERBOARD_KEY)
    if raw is None:
        return []
    try:
        items = json.loads(raw)
    except ValueError:
        return []
    if not isinstance(items, list):
        return []
    scores = [int(s) for s in items
              if isinstance(s, (int, float)) and not isinstance(s, bool) and math.isfinite(s)]
    return sorted(scores, reverse=True)[:LEADERBOARD_SIZE]


def record_score(store: Store, score: int) -> List[int]:
    """Insert `score` into the persisted leaderboard and return the new board."""
    board = insert_score(load_leaderboard(store), score)
    store.set(LEADERBOARD_KEY, json.dumps(board))
    return board
