"""
Match implementation for the 5x5 connect-and-remove game.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .board import Board, EMPTY, X, O, other, symbol, player_from_symbol
from .config import MatchConfig
from .errors import (
    CellOccupied,
    EngineError,
    GameAlreadyOver,
    IllegalMove,
    InvalidRemovalTarget,
    ListenerError,
    NoLegalMove,
    NotYourTurn,
)
from .events import (
    BONUS_TURN,
    GAME_OVER,
    MATCH_RESET,
    MOVE_ACCEPTED,
    MOVE_REJECTED,
    PHASE_CHANGED,
    PIECE_REMOVED,
    RUN_SCORED,
    TURN_PASSED,
    EventChannel,
    MatchEvent,
)
from .lines import WinResult, scan_run

PLAYING = 'playing'
REMOVAL = 'removal'
GAME_OVER_PHASE = 'game_over'

PHASES = (PLAYING, REMOVAL, GAME_OVER_PHASE)
SYMBOLS = ('X', 'O')


@dataclass(frozen=True)
class MatchSnapshot:
    """
    Read-only view of a match, as handed to renderers and sync layers.

    Board rows hold 'X', 'O' or None. Players are given as symbols.
    """
    board: Tuple[Tuple[Optional[str], ...], ...]
    current_player: str
    scores: Dict[str, int]
    phase: str
    removal_turns_left: int
    game_over: bool
    player_before_board_full: Optional[str] = None
    last_win: Optional[WinResult] = None
    events: Tuple[MatchEvent, ...] = field(default=(), compare=False)

    @property
    def winner(self):
        """Symbol of the winning player, or None while the match is running."""
        if not self.game_over:
            return None
        if self.scores['X'] == self.scores['O']:
            return None
        return 'X' if self.scores['X'] > self.scores['O'] else 'O'

    @property
    def is_removal_phase(self):
        return self.phase == REMOVAL

    @property
    def is_bonus_turn(self):
        """True when the intent that produced this snapshot scored a run without ending the match."""
        return any(event.type == BONUS_TURN for event in self.events)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the snapshot into plain JSON types."""
        return {
            'board': [list(row) for row in self.board],
            'current_player': self.current_player,
            'scores': dict(self.scores),
            'phase': self.phase,
            'removal_turns_left': self.removal_turns_left,
            'game_over': self.game_over,
            'player_before_board_full': self.player_before_board_full,
            'last_win': self.last_win.to_dict() if self.last_win else None,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'MatchSnapshot':
        """Rebuild a snapshot from `to_dict` output."""
        board = Board.from_symbols(payload['board'])
        last_win = payload.get('last_win')
        if last_win is not None:
            last_win = WinResult(
                player=player_from_symbol(last_win['player']),
                cells=tuple(tuple(cell) for cell in last_win['cells']),
                points=int(last_win.get('points', 0)),
            )
        phase = payload['phase']
        if phase not in PHASES:
            raise ValueError(f"Unknown phase: {phase!r}")
        current_player = payload['current_player']
        if current_player not in SYMBOLS:
            raise ValueError(f"Unknown current player: {current_player!r}")
        before_full = payload.get('player_before_board_full')
        if before_full is not None and before_full not in SYMBOLS:
            raise ValueError(f"Unknown player before board full: {before_full!r}")
        return cls(
            board=board.to_symbols(),
            current_player=current_player,
            scores={'X': int(payload['scores']['X']), 'O': int(payload['scores']['O'])},
            phase=phase,
            removal_turns_left=int(payload['removal_turns_left']),
            game_over=bool(payload['game_over']),
            player_before_board_full=before_full,
            last_win=last_win,
        )


class Match:
    """
    Manages a single match session.

    Owns the board, enforces turn order, applies scoring and drives the
    removal sub-phase. Every intent, human or agent, goes through
    `submit_move` / `submit_removal`.
    """

    def __init__(self, config: Optional[MatchConfig] = None):
        """Initialize a new match."""
        self.config = config or MatchConfig()
        self.channel = EventChannel()
        self.last_events = ()
        self._new_state()

    def _new_state(self):
        self.board = Board()
        self.current_player = X  # X always opens
        self.scores = {X: 0, O: 0}
        self.phase = PLAYING
        self.removal_turns_left = 0
        self.player_before_board_full = None
        self.last_win = None

    @property
    def game_over(self):
        return self.phase == GAME_OVER_PHASE

    def add_listener(self, listener):
        self.channel.add_listener(listener)

    def remove_listener(self, listener):
        self.channel.remove_listener(listener)

    def snapshot(self) -> MatchSnapshot:
        """Get an immutable copy of the current state."""
        before_full = self.player_before_board_full
        return MatchSnapshot(
            board=self.board.to_symbols(),
            current_player=symbol(self.current_player),
            scores={symbol(X): self.scores[X], symbol(O): self.scores[O]},
            phase=self.phase,
            removal_turns_left=self.removal_turns_left,
            game_over=self.game_over,
            player_before_board_full=symbol(before_full) if before_full is not None else None,
            last_win=self.last_win,
            events=self.last_events,
        )

    def legal_actions(self):
        """
        Get the cells the current player may act on.

        Returns:
            list: Empty cells while playing, opposing pieces while removing,
            nothing once the match is over
        """
        if self.phase == PLAYING:
            return self.board.get_legal_moves()
        if self.phase == REMOVAL:
            return self.board.pieces_of(other(self.current_player))
        return []

    def reset(self) -> MatchSnapshot:
        """Start over with a fresh board and zeroed scores."""
        self._new_state()
        self._commit([MatchEvent(MATCH_RESET, symbol(self.current_player))])
        return self.snapshot()

    def submit_move(self, row, col, player=None) -> MatchSnapshot:
        """
        Place the current player's symbol.

        Args:
            row (int): Row position (0-4)
            col (int): Column position (0-4)
            player (int, optional): Acting player; checked against the player to move

        Returns:
            MatchSnapshot: State after the move

        Raises:
            EngineError: If the move is rejected; the match is left unchanged
            ListenerError: If the move was applied but a listener failed
        """
        try:
            self._validate(PLAYING, player)
            if self.board.get(row, col) != EMPTY:
                raise CellOccupied(f"Cell ({row}, {col}) is already taken")
        except EngineError as error:
            self._reject('move', row, col, player, error)
        return self._commit(self._apply_move(row, col))

    def submit_removal(self, row, col, player=None) -> MatchSnapshot:
        """
        Erase one of the opponent's pieces during the removal phase.

        Raises:
            EngineError: If the removal is rejected; the match is left unchanged
            ListenerError: If the removal was applied but a listener failed
        """
        try:
            self._validate(REMOVAL, player)
            if self.board.get(row, col) != other(self.current_player):
                raise InvalidRemovalTarget(f"Cell ({row}, {col}) does not hold an opponent piece")
        except EngineError as error:
            self._reject('removal', row, col, player, error)
        return self._commit(self._apply_removal(row, col))

    def play_agent_turn(self, agent) -> MatchSnapshot:
        """
        Let an agent act for the current player.

        The agent's choice is submitted exactly like a human intent.
        """
        if self.game_over:
            raise GameAlreadyOver("The match is over")
        action = agent.select_action(self)
        if action is None:
            raise NoLegalMove(f"{type(agent).__name__} found no action in phase {self.phase}")
        row, col = action
        if self.phase == REMOVAL:
            return self.submit_removal(row, col, self.current_player)
        return self.submit_move(row, col, self.current_player)

    def _validate(self, expected_phase, player):
        if self.game_over:
            raise GameAlreadyOver("The match is over")
        if self.phase != expected_phase:
            raise IllegalMove(f"Cannot do that during the {self.phase} phase")
        if player is not None and player != self.current_player:
            raise NotYourTurn(f"It is {symbol(self.current_player)}'s turn")

    def _reject(self, intent, row, col, player, error):
        """Announce a rejected intent, then re-raise its error."""
        actor = player if player is not None else self.current_player
        event = MatchEvent(MOVE_REJECTED, symbol(actor) if actor in (X, O) else None, {
            'intent': intent,
            'row': row,
            'col': col,
            'error': type(error).__name__,
            'message': str(error),
        })
        self.last_events = (event,)
        failures = self.channel.publish(self.last_events)
        if failures:
            raise error from ListenerError(self.snapshot(), failures)
        raise error

    def _commit(self, events):
        """
        Publish the events of an applied intent.

        Raises:
            ListenerError: If a listener failed; carries the committed snapshot
        """
        self.board.check_invariants()
        self.last_events = tuple(events)
        snapshot = self.snapshot()
        failures = self.channel.publish(self.last_events)
        if failures:
            raise ListenerError(snapshot, failures) from failures[0]
        return snapshot

    def _apply_move(self, row, col):
        player = self.current_player
        mark = symbol(player)
        self.board.set(row, col, player)
        events = [MatchEvent(MOVE_ACCEPTED, mark, {'row': row, 'col': col})]

        # Connect-5 takes precedence over connect-4
        win = scan_run(self.board, row, col, 5) or scan_run(self.board, row, col, 4)
        if win is not None:
            points = self.config.points_for(win.length)
            win = replace(win, points=points)
            self.scores[player] += points
            self.last_win = win
            events.append(MatchEvent(RUN_SCORED, mark, {
                'length': win.length,
                'points': points,
                'cells': [list(cell) for cell in win.cells],
                'score': self.scores[player],
            }))
            if self.scores[player] >= self.config.winning_score:
                events.extend(self._change_phase(GAME_OVER_PHASE))
                events.append(MatchEvent(GAME_OVER, mark, {
                    'scores': {symbol(X): self.scores[X], symbol(O): self.scores[O]},
                }))
                return events
            for r, c in win.cells:
                self.board.set(r, c, EMPTY)
            events.append(MatchEvent(BONUS_TURN, mark))
            return events

        if self.board.is_full():
            self.player_before_board_full = player
            self.current_player = X  # X always opens removal
            self.removal_turns_left = self.config.removal_turns_total
            events.extend(self._change_phase(REMOVAL))
            return events

        self.current_player = other(player)
        events.append(MatchEvent(TURN_PASSED, symbol(self.current_player)))
        return events

    def _apply_removal(self, row, col):
        mark = symbol(self.current_player)
        self.board.set(row, col, EMPTY)
        self.removal_turns_left -= 1
        events = [MatchEvent(PIECE_REMOVED, mark, {
            'row': row,
            'col': col,
            'removal_turns_left': self.removal_turns_left,
        })]

        if self.removal_turns_left == 0:
            # The player who did not fill the board resumes play
            self.current_player = other(self.player_before_board_full)
            self.player_before_board_full = None
            events.extend(self._change_phase(PLAYING))
            return events

        self.current_player = other(self.current_player)
        events.append(MatchEvent(TURN_PASSED, symbol(self.current_player)))
        return events

    def _change_phase(self, phase):
        previous, self.phase = self.phase, phase
        return [MatchEvent(PHASE_CHANGED, symbol(self.current_player), {
            'from': previous,
            'to': phase,
            'removal_turns_left': self.removal_turns_left,
        })]
