# jumpdash/game/events.py
"""Named gameplay cues and a synchronous observer registry."""

from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, List

Listener = Callable[[], None]


class GameEvent(str, Enum):
    JUMPED = "jumped"
    LANDED = "landed"
    COLLISION = "collision"
    LEVEL_UP = "level_up"


class EventBus:
    """
    Observers register per event and are called in subscription order.
    Cues carry no payload; the core does not know who listens.
    """

    def __init__(self) -> None:
        self._listeners: Dict[GameEvent, List[Listener]] = {e: [] for e in GameEvent}

    def subscribe(self, event: GameEvent, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unsubscribes it."""
        self._listeners[event].append(listener)
        return lambda: self.unsubscribe(event, listener)

    def unsubscribe(self, event: GameEvent, listener: Listener) -> None:
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            pass

    def emit(self, event: GameEvent) -> None:
        # copy: a listener may unsubscribe itself
        for listener in list(self._listeners[event]):
            listener()


EVENT_LOG_LINES = {
    GameEvent.JUMPED: "Player jumped!",
    GameEvent.LANDED: "Player landed!",
    GameEvent.COLLISION: "Collision detected!",
}


def attach_event_log(bus: EventBus, sink: Callable[[str], None] = print) -> None:
    """Print one line per cue (the host's --log-events flag)."""
    for event, line in EVENT_LOG_LINES.items():
        bus.subscribe(event, lambda line=line: sink(line))
