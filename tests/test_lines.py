"""
Tests for line detection.
"""
import numpy as np
import pytest
from tttmega.core.board import Board, EMPTY, X, O
from tttmega.core.lines import (
    WinResult, find_completing_cell, longest_run_through, scan_run,
)


def test_horizontal_run_of_five():
    """Test detection of a full row."""
    board = Board()
    for col in range(5):
        board.set(0, col, X)

    result = scan_run(board, 0, 4, 5)
    assert isinstance(result, WinResult)
    assert result.player == X
    assert result.cells == ((0, 0), (0, 1), (0, 2), (0, 3), (0, 4))
    assert result.length == 5


def test_run_of_five_is_not_a_run_of_four():
    """Test that only exact-length runs qualify."""
    board = Board()
    for col in range(5):
        board.set(2, col, O)

    for col in range(5):
        assert scan_run(board, 2, col, 4) is None, f"5-run should not count as 4 at (2, {col})"
        assert scan_run(board, 2, col, 5) is not None


def test_vertical_run_of_four():
    """Test detection of an exact vertical 4-run."""
    board = Board()
    for row in range(1, 5):
        board.set(row, 3, X)

    result = scan_run(board, 2, 3, 4)
    assert result is not None
    assert result.cells == ((1, 3), (2, 3), (3, 3), (4, 3))
    assert scan_run(board, 2, 3, 5) is None


def test_diagonal_runs():
    """Test both diagonal directions."""
    board = Board()
    for i in range(5):
        board.set(i, i, X)
    result = scan_run(board, 2, 2, 5)
    assert result.cells == tuple((i, i) for i in range(5))

    board = Board()
    for i in range(4):
        board.set(i, 3 - i, O)
    result = scan_run(board, 0, 3, 4)
    assert result is not None
    assert set(result.cells) == {(0, 3), (1, 2), (2, 1), (3, 0)}


def test_short_and_broken_runs():
    """Test that runs shorter than required or interrupted do not qualify."""
    board = Board()
    board.set(3, 0, X)
    board.set(3, 1, X)
    board.set(3, 2, O)
    board.set(3, 3, X)
    board.set(3, 4, X)

    for col in (0, 1, 3, 4):
        assert scan_run(board, 3, col, 4) is None
    assert scan_run(board, 4, 4, 4) is None  # Empty cell


def test_returned_length_always_matches_request():
    """Test over random boards that results hold exactly the requested number of cells."""
    rng = np.random.default_rng(7)
    for _ in range(200):
        board = Board()
        board.state = rng.choice(np.array([EMPTY, X, O], dtype=np.int8), size=(5, 5))
        for row in range(5):
            for col in range(5):
                for length in (4, 5):
                    result = scan_run(board, row, col, length)
                    if result is not None:
                        assert len(result.cells) == length
                        assert all(board.get(r, c) == result.player for r, c in result.cells)


def test_longest_run_through():
    """Test the longest run through a cell in any direction."""
    board = Board()
    board.set(0, 0, X)
    board.set(0, 1, X)
    board.set(0, 2, X)
    board.set(1, 1, X)
    board.set(2, 2, O)

    assert longest_run_through(board, 0, 1, X) == 3
    assert longest_run_through(board, 1, 1, X) == 2  # Diagonal with (0, 0)
    assert longest_run_through(board, 2, 2, O) == 1
    assert longest_run_through(board, 2, 2, X) == 0  # Not an X cell
    assert longest_run_through(board, 4, 4, X) == 0  # Empty


def test_find_completing_cell():
    """Test finding the cell that completes a run, without changing the board."""
    board = Board()
    for col in range(4):
        board.set(4, col, O)
    before = board.state.copy()

    assert find_completing_cell(board, O, 5) == (4, 4)
    assert find_completing_cell(board, O, 4) is None  # (4, 4) would make 5
    assert find_completing_cell(board, X, 4) is None
    assert np.array_equal(board.state, before)


def test_win_result_to_dict():
    """Test serialization of a win result."""
    result = WinResult(player=O, cells=((1, 0), (1, 1), (1, 2), (1, 3)))
    assert result.to_dict() == {
        'player': 'O',
        'cells': [[1, 0], [1, 1], [1, 2], [1, 3]],
        'points': 0,
    }
