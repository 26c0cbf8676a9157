"""
Board implementation for the 5x5 connect-and-remove game.
"""
from contextlib import contextmanager

import numpy as np

from .errors import OutOfBounds

GRID_SIZE = 5

# Cell values
EMPTY = 0
X = 1
O = -1

_SYMBOLS = {X: 'X', O: 'O'}


def symbol(player):
    """Return the display symbol ('X' or 'O') for a player value."""
    return _SYMBOLS[player]


def player_from_symbol(value):
    """
    Convert a symbol back to its player value.

    Args:
        value (str or None): 'X', 'O' or None for an empty cell

    Returns:
        int: X, O or EMPTY
    """
    if value is None:
        return EMPTY
    if value == 'X':
        return X
    if value == 'O':
        return O
    raise ValueError(f"Unknown symbol: {value!r}")


def other(player):
    """Return the opposing player."""
    return -player


class Board:
    """
    Represents the 5x5 game board.

    Board state representation:
    - 0: empty cell
    - 1: X
    - -1: O
    """

    def __init__(self):
        """Initialize an empty 5x5 board."""
        self.size = GRID_SIZE
        self.state = np.zeros((self.size, self.size), dtype=np.int8)

    def in_bounds(self, row, col):
        return 0 <= row < self.size and 0 <= col < self.size

    def _require_in_bounds(self, row, col):
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} grid")

    def get(self, row, col):
        """
        Get the value of a cell.

        Raises:
            OutOfBounds: If row or col is outside [0, 5)
        """
        self._require_in_bounds(row, col)
        return int(self.state[row, col])

    def set(self, row, col, value):
        """
        Set the value of a cell.

        Args:
            row (int): Row position (0-4)
            col (int): Column position (0-4)
            value (int): EMPTY, X or O

        Raises:
            OutOfBounds: If row or col is outside [0, 5)
        """
        self._require_in_bounds(row, col)
        if value not in (EMPTY, X, O):
            raise ValueError(f"Invalid cell value: {value!r}")
        self.state[row, col] = value

    def is_full(self):
        """Return True iff no cell is empty."""
        return not np.any(self.state == EMPTY)

    def get_legal_moves(self):
        """
        Get all empty positions on the board.

        Returns:
            list: (row, col) tuples in row-major order
        """
        return self.pieces_of(EMPTY)

    def pieces_of(self, player):
        """List the cells holding the given value in row-major order."""
        rows, cols = np.nonzero(self.state == player)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def count(self, player):
        return int(np.count_nonzero(self.state == player))

    def copy(self):
        """Return an independent copy of this board."""
        board = Board()
        board.state = self.state.copy()
        return board

    @contextmanager
    def probe(self, row, col, player):
        """
        Temporarily place a player's piece for the duration of a with-block.

        The previous value of the cell is restored on every exit path.
        """
        previous = self.get(row, col)
        self.state[row, col] = player
        try:
            yield self
        finally:
            self.state[row, col] = previous

    def check_invariants(self):
        """Fail loudly if any cell holds a value outside {EMPTY, X, O}."""
        assert self.state.shape == (self.size, self.size), "board shape changed"
        assert np.isin(self.state, (EMPTY, X, O)).all(), "board holds an invalid cell value"
        assert self.count(X) + self.count(O) <= self.size * self.size

    def to_symbols(self):
        """
        Convert the board into rows of 'X', 'O' or None.

        Returns:
            tuple: Tuple of row tuples
        """
        return tuple(
            tuple(_SYMBOLS.get(int(value)) for value in row)
            for row in self.state
        )

    @classmethod
    def from_symbols(cls, rows):
        """Build a board from rows of 'X', 'O' or None."""
        board = cls()
        if len(rows) != board.size or any(len(row) != board.size for row in rows):
            raise ValueError(f"Expected {board.size}x{board.size} rows")
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                board.state[r, c] = player_from_symbol(value)
        return board

    def __str__(self):
        lines = []
        for row in self.to_symbols():
            lines.append(" ".join(value or "." for value in row))
        return "\n".join(lines)
