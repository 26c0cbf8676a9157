"""
Line detection for exact-length runs.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .board import EMPTY, symbol

DIRECTIONS = (
    (0, 1),   # Horizontal
    (1, 0),   # Vertical
    (1, 1),   # Diagonal (↘)
    (1, -1),  # Anti-diagonal (↙)
)


@dataclass(frozen=True)
class WinResult:
    """
    The exact cells of a qualifying run and the player who owns it.

    `points` is 0 as returned by `scan_run`; the match fills it in from its
    config when the run scores.
    """
    player: int
    cells: Tuple[Tuple[int, int], ...]
    points: int = 0

    @property
    def length(self):
        return len(self.cells)

    def to_dict(self):
        return {
            'player': symbol(self.player),
            'cells': [list(cell) for cell in self.cells],
            'points': self.points,
        }


def _walk(board, row, col, player, dr, dc):
    """Collect contiguous cells of `player` starting one step away from (row, col)."""
    cells = []
    r, c = row + dr, col + dc
    while board.in_bounds(r, c) and board.state[r, c] == player:
        cells.append((r, c))
        r, c = r + dr, c + dc
    return cells


def run_cells(board, row, col, dr, dc):
    """
    Return the full run through (row, col) along one direction.

    Cells are ordered from the negative end to the positive end.
    """
    player = board.get(row, col)
    if player == EMPTY:
        return []
    backward = _walk(board, row, col, player, -dr, -dc)
    forward = _walk(board, row, col, player, dr, dc)
    return list(reversed(backward)) + [(row, col)] + forward


def scan_run(board, row, col, length) -> Optional[WinResult]:
    """
    Look for a run of exactly `length` through a just-occupied cell.

    A longer run does not qualify: a run of 5 is not also a run of 4.

    Args:
        board: Board instance
        row, col: The cell that was just occupied
        length (int): Required run length

    Returns:
        WinResult or None
    """
    player = board.get(row, col)
    if player == EMPTY:
        return None

    for dr, dc in DIRECTIONS:
        cells = run_cells(board, row, col, dr, dc)
        if len(cells) == length:
            return WinResult(player=player, cells=tuple(cells))
    return None


def longest_run_through(board, row, col, player):
    """
    Length of the longest run of `player` through (row, col) in any direction.

    Returns 0 when the cell does not hold `player`.
    """
    if board.get(row, col) != player:
        return 0
    return max(len(run_cells(board, row, col, dr, dc)) for dr, dc in DIRECTIONS)


def find_completing_cell(board, player, length):
    """
    Find the first empty cell (row-major) where `player` would complete an exact run.

    Placement is probed and rolled back; the board is left unchanged.

    Returns:
        tuple or None: (row, col) of the completing cell
    """
    for row, col in board.get_legal_moves():
        with board.probe(row, col, player):
            found = scan_run(board, row, col, length)
        if found is not None:
            return (row, col)
    return None
