"""
Errors reported by the match engine.

EngineError subclasses are local and non-fatal: the match state is left
unchanged and the error is handed back to the caller as-is. ListenerError
is raised after an intent was applied.
"""


class EngineError(Exception):
    """Base class for rejected intents and strategy failures."""


class OutOfBounds(EngineError):
    """Coordinates fall outside the grid."""


class CellOccupied(EngineError):
    """A placement targeted a non-empty cell."""


class IllegalMove(EngineError):
    """The intent does not match the current phase."""


class InvalidRemovalTarget(IllegalMove):
    """A removal targeted an empty cell or the remover's own piece."""


class NotYourTurn(EngineError):
    """The acting player is not the player to move."""


class GameAlreadyOver(EngineError):
    """The match has ended; no further intents are accepted."""


class NoLegalMove(EngineError):
    """The opponent strategy found no candidate for the current phase."""


class NotAuthoritative(EngineError):
    """A mirror received a local mutation attempt."""


class SessionFull(EngineError):
    """Both seats of a session are already taken."""


class ListenerError(Exception):
    """
    One or more event listeners failed after an intent was committed.

    Not an EngineError: the intent was applied. `snapshot` holds the
    committed state and `errors` the exceptions raised by the listeners.
    """

    def __init__(self, snapshot, errors):
        super().__init__(f"{len(errors)} listener(s) failed: {errors[0]!r}")
        self.snapshot = snapshot
        self.errors = list(errors)
