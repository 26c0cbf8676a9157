"""
Session layer for two-player matches.

One side holds the authoritative Match; every accepted intent is broadcast
as a serialized snapshot. Remote sides keep a MirrorMatch that only applies
the snapshots it receives.
"""
from typing import Any, Callable, Dict, List, Optional

from .board import player_from_symbol
from .config import MatchConfig
from .errors import IllegalMove, ListenerError, NotAuthoritative, SessionFull
from .game import Match, MatchSnapshot

SEATS = ('X', 'O')

# Notices sent to subscribers
STATE_UPDATE = 'state_update'
OPPONENT_JOINED = 'opponent_joined'
OPPONENT_DISCONNECTED = 'opponent_disconnected'
MATCH_RESET = 'match_reset'

Subscriber = Callable[[str, Dict[str, Any]], None]


class AuthoritativeSession:
    """
    Seats two players around one authoritative match.

    The creator takes X and the joiner takes O. Intents arrive tagged with
    the sender's seat and are forwarded to the match with that seat as the
    actor, so a player acting out of turn gets NotYourTurn.
    """

    def __init__(self, match: Optional[Match] = None, config: Optional[MatchConfig] = None):
        self.match = match or Match(config)
        self.players: Dict[str, Optional[str]] = {seat: None for seat in SEATS}
        self._subscribers: List[Subscriber] = []

    def subscribe(self, subscriber: Subscriber):
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber):
        self._subscribers.remove(subscriber)

    def _notify(self, notice, payload):
        for subscriber in list(self._subscribers):
            subscriber(notice, payload)

    @property
    def is_full(self):
        return all(name is not None for name in self.players.values())

    def join(self, name: str) -> str:
        """
        Take the next free seat.

        Returns:
            str: The seat assigned ('X' or 'O')

        Raises:
            SessionFull: If both seats are taken
        """
        for seat in SEATS:
            if self.players[seat] is None:
                self.players[seat] = name
                if self.is_full:
                    self._notify(OPPONENT_JOINED, {
                        'players': dict(self.players),
                        'state': self.match.snapshot().to_dict(),
                    })
                return seat
        raise SessionFull("Both seats are taken")

    def leave(self, seat: str):
        """Free a seat and tell the remaining side."""
        self._require_seat(seat)
        self.players[seat] = None
        self._notify(OPPONENT_DISCONNECTED, {'seat': seat})

    def make_move(self, seat: str, row: int, col: int, is_removal: bool = False) -> MatchSnapshot:
        """
        Forward a remote intent to the authoritative match.

        Args:
            seat (str): Sender's seat
            row, col: Target cell
            is_removal (bool): True for a removal-phase action

        Returns:
            MatchSnapshot: The state broadcast to subscribers
        """
        self._require_seat(seat)
        if not self.is_full:
            raise IllegalMove("Waiting for an opponent to join")
        player = player_from_symbol(seat)
        try:
            if is_removal:
                snapshot = self.match.submit_removal(row, col, player)
            else:
                snapshot = self.match.submit_move(row, col, player)
        except ListenerError as error:
            # The intent was applied; mirrors must still see it
            self._notify(STATE_UPDATE, error.snapshot.to_dict())
            raise
        self._notify(STATE_UPDATE, snapshot.to_dict())
        return snapshot

    def request_reset(self) -> MatchSnapshot:
        try:
            snapshot = self.match.reset()
        except ListenerError as error:
            self._notify(MATCH_RESET, error.snapshot.to_dict())
            raise
        self._notify(MATCH_RESET, snapshot.to_dict())
        return snapshot

    def _require_seat(self, seat):
        if seat not in SEATS:
            raise ValueError(f"Unknown seat: {seat!r}")


class MirrorMatch:
    """
    Read-only copy of a remote match.

    Applies snapshots received from the authoritative side and rejects every
    local mutation attempt.
    """

    def __init__(self, snapshot: Optional[MatchSnapshot] = None):
        self.snapshot = snapshot or Match().snapshot()

    def apply(self, payload: Dict[str, Any]) -> MatchSnapshot:
        """Replace the mirrored state with a serialized snapshot."""
        self.snapshot = MatchSnapshot.from_dict(payload)
        return self.snapshot

    def on_notice(self, notice: str, payload: Dict[str, Any]):
        """Session subscriber that keeps this mirror in sync."""
        if notice in (STATE_UPDATE, MATCH_RESET):
            self.apply(payload)
        elif notice == OPPONENT_JOINED:
            self.apply(payload['state'])

    def is_turn_of(self, seat: str) -> bool:
        return not self.snapshot.game_over and self.snapshot.current_player == seat

    def submit_move(self, row, col, player=None):
        raise NotAuthoritative("Moves must be sent to the authoritative side")

    def submit_removal(self, row, col, player=None):
        raise NotAuthoritative("Removals must be sent to the authoritative side")

    def reset(self):
        raise NotAuthoritative("Resets must be requested from the authoritative side")
