"""
Event channel for the match engine.

Renderers and synchronization layers subscribe to a match and receive the
discrete events of every intent, in order.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

MOVE_ACCEPTED = 'move_accepted'
PIECE_REMOVED = 'piece_removed'
RUN_SCORED = 'run_scored'
BONUS_TURN = 'bonus_turn'
TURN_PASSED = 'turn_passed'
PHASE_CHANGED = 'phase_changed'
GAME_OVER = 'game_over'
MATCH_RESET = 'match_reset'
MOVE_REJECTED = 'move_rejected'

EVENT_TYPES = (
    MOVE_ACCEPTED,
    PIECE_REMOVED,
    RUN_SCORED,
    BONUS_TURN,
    TURN_PASSED,
    PHASE_CHANGED,
    GAME_OVER,
    MATCH_RESET,
    MOVE_REJECTED,
)


@dataclass(frozen=True)
class MatchEvent:
    """A single engine event."""
    type: str
    player: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {self.type!r}")

    def to_dict(self):
        return {'type': self.type, 'player': self.player, 'data': dict(self.data)}


Listener = Callable[[MatchEvent], None]


class EventChannel:
    """Fan-out of match events to registered listeners."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        self._listeners.remove(listener)

    def publish(self, events) -> List[Exception]:
        """
        Deliver events to every listener in registration order.

        A failing listener does not stop delivery to the others.

        Returns:
            list: Exceptions raised by listeners, in delivery order
        """
        failures = []
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception as error:
                    failures.append(error)
        return failures
