"""
Heuristic agent for the 5x5 connect-and-remove game.
"""
import random

from ...core.board import EMPTY, other
from ...core.errors import NoLegalMove
from ...core.game import PLAYING, REMOVAL
from ...core.lines import find_completing_cell, longest_run_through

# Center-outward placement preference
CENTER_PRIORITY = (
    (2, 2),
    (1, 2), (2, 1), (2, 3), (3, 2),
    (1, 1), (1, 3), (3, 1), (3, 3),
)


class HeuristicAgent:
    """
    Rule-based opponent.

    Placement priority order:
    1. Complete a 5-run for ourselves
    2. Complete a 4-run for ourselves
    3. Block the opponent's 5-run
    4. Block the opponent's 4-run
    5. First safe cell from the center-outward list
    6. Random safe cell, or any random cell if none is safe

    A cell is safe when taking it does not leave the opponent an immediate
    4- or 5-run. Tiers 1-4 are deterministic.
    """

    def __init__(self, seed=None):
        """
        Initialize the heuristic agent.

        Args:
            seed (int, optional): Random seed for tie-breaking reproducibility
        """
        self.rng = random.Random(seed)

    def select_action(self, match):
        """
        Select a placement or a removal target for the player to move.

        Args:
            match: Match instance with current board state

        Returns:
            tuple or None: (row, col), or None once the match is over
        """
        if match.phase == PLAYING:
            return self.choose_move(match.board, match.current_player)
        if match.phase == REMOVAL:
            return self.choose_removal(match.board, match.current_player)
        return None

    def choose_move(self, board, player):
        """
        Choose a placement for `player`.

        All probing happens on a private copy; `board` is never touched.

        Raises:
            NoLegalMove: If the board has no empty cell
        """
        board = board.copy()
        empty_cells = board.get_legal_moves()
        if not empty_cells:
            raise NoLegalMove("No empty cell left to place on")

        opponent = other(player)
        for target, length in ((player, 5), (player, 4), (opponent, 5), (opponent, 4)):
            move = find_completing_cell(board, target, length)
            if move is not None:
                return move

        for row, col in CENTER_PRIORITY:
            if board.get(row, col) == EMPTY and self._is_safe(board, row, col, player):
                return (row, col)

        safe_moves = [cell for cell in empty_cells if self._is_safe(board, *cell, player)]
        if safe_moves:
            return self.rng.choice(safe_moves)
        return self.rng.choice(empty_cells)

    def choose_removal(self, board, player):
        """
        Choose which opposing piece `player` removes.

        Targets the piece on the longest current opposing run when that run
        is at least 2 long, otherwise a random opposing piece.

        Raises:
            NoLegalMove: If the opponent has no piece on the board
        """
        opponent = other(player)
        opponent_cells = board.pieces_of(opponent)
        if not opponent_cells:
            raise NoLegalMove("Opponent has no piece to remove")

        best_cell = None
        best_length = 0
        for row, col in opponent_cells:
            length = longest_run_through(board, row, col, opponent)
            if length > best_length:
                best_length = length
                best_cell = (row, col)

        if best_cell is not None and best_length >= 2:
            return best_cell
        return self.rng.choice(opponent_cells)

    def _is_safe(self, board, row, col, player):
        """Check that playing (row, col) leaves the opponent no immediate run."""
        opponent = other(player)
        with board.probe(row, col, player):
            return (find_completing_cell(board, opponent, 5) is None and
                    find_completing_cell(board, opponent, 4) is None)
