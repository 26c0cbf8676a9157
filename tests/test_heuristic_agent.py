"""
Tests for HeuristicAgent class.
"""
import numpy as np
import pytest
from tttmega.core.board import Board, EMPTY, X, O
from tttmega.core.errors import NoLegalMove
from tttmega.core.game import Match
from tttmega.ai.agents.heuristic_agent import CENTER_PRIORITY, HeuristicAgent


def place(board, player, cells):
    for row, col in cells:
        board.set(row, col, player)


def quiet_center(board):
    """Occupy the 3x3 center without giving either side a 4- or 5-run threat."""
    place(board, X, [(1, 2), (1, 3), (2, 1), (3, 2), (3, 3)])
    place(board, O, [(1, 1), (2, 2), (2, 3), (3, 1)])


def test_heuristic_agent_initialization():
    """Test that HeuristicAgent initializes correctly."""
    agent = HeuristicAgent()
    assert agent.rng is not None

    agent_seeded = HeuristicAgent(seed=42)
    assert agent_seeded.rng is not None


def test_empty_board_takes_center():
    """Test that the first choice on an empty board is the center."""
    agent = HeuristicAgent(seed=42)
    assert agent.choose_move(Board(), O) == (2, 2)


def test_completes_own_five_first():
    """Test that completing a 5-run beats completing a 4-run."""
    board = Board()
    place(board, O, [(4, 0), (4, 1), (4, 2), (4, 3)])  # (4, 4) completes 5
    place(board, O, [(0, 4), (1, 4), (2, 4)])          # (3, 4) completes 4

    agent = HeuristicAgent(seed=1)
    assert agent.choose_move(board, O) == (4, 4)


def test_completes_own_four():
    """Test that an own 4-run is taken when no 5-run exists."""
    board = Board()
    place(board, O, [(0, 4), (1, 4), (2, 4)])

    agent = HeuristicAgent(seed=1)
    assert agent.choose_move(board, O) == (3, 4)


def test_own_four_beats_blocking_five():
    """Test that scoring for ourselves comes before blocking."""
    board = Board()
    place(board, X, [(0, 0), (0, 1), (0, 2), (0, 3)])  # X threatens (0, 4)
    place(board, O, [(4, 0), (4, 1), (4, 2)])          # O completes 4 at (4, 3)

    agent = HeuristicAgent(seed=1)
    assert agent.choose_move(board, O) == (4, 3)


def test_blocks_opponent_five():
    """Test blocking the opponent's 5-run."""
    board = Board()
    place(board, X, [(0, 0), (0, 1), (0, 2), (0, 3)])

    agent = HeuristicAgent(seed=1)
    assert agent.choose_move(board, O) == (0, 4)


def test_blocks_opponent_four():
    """Test blocking the opponent's 4-run."""
    board = Board()
    place(board, X, [(1, 0), (1, 1), (1, 2)])

    agent = HeuristicAgent(seed=1)
    assert agent.choose_move(board, O) == (1, 3)


def test_plays_for_either_symbol():
    """Test that the agent also works when playing X."""
    board = Board()
    place(board, X, [(3, 0), (3, 1), (3, 2), (3, 3)])

    agent = HeuristicAgent(seed=1)
    assert agent.choose_move(board, X) == (3, 4)


def test_center_priority_order():
    """Test that the center-outward list is walked in order."""
    board = Board()
    board.set(2, 2, X)
    board.set(1, 2, X)

    agent = HeuristicAgent(seed=1)
    assert agent.choose_move(board, O) == (2, 1)


def test_random_fallback_outside_center():
    """Test the random tier once the center is occupied."""
    board = Board()
    quiet_center(board)

    agent = HeuristicAgent(seed=5)
    move = agent.choose_move(board, O)
    assert move not in CENTER_PRIORITY
    assert board.get(*move) == EMPTY

    # Same seed, same board, same choice
    assert HeuristicAgent(seed=5).choose_move(board, O) == move


def test_priority_tiers_are_deterministic():
    """Test that tiers 1-4 do not depend on the random seed."""
    board = Board()
    place(board, X, [(2, 0), (2, 1), (2, 2)])

    choices = {HeuristicAgent(seed=seed).choose_move(board, O) for seed in range(10)}
    assert choices == {(2, 3)}


def test_safety_check():
    """Test detection of moves that leave the opponent an immediate run."""
    board = Board()
    place(board, X, [(0, 0), (0, 1), (0, 2), (0, 3)])

    agent = HeuristicAgent(seed=1)
    assert not agent._is_safe(board, 2, 2, O)
    assert agent._is_safe(board, 0, 4, O)


def test_board_untouched_by_probing():
    """Test that choosing a move never changes the given board."""
    board = Board()
    place(board, X, [(0, 0), (1, 1), (3, 3)])
    place(board, O, [(0, 1), (2, 2)])
    before = board.state.copy()

    HeuristicAgent(seed=9).choose_move(board, O)
    assert np.array_equal(board.state, before)


def test_full_board_has_no_move():
    """Test that an exhausted board is reported."""
    board = Board()
    for row in range(5):
        for col in range(5):
            board.set(row, col, X if (row + col) % 2 else O)

    with pytest.raises(NoLegalMove):
        HeuristicAgent(seed=1).choose_move(board, O)


def test_removal_targets_longest_run():
    """Test removal of the piece on the longest opposing run."""
    board = Board()
    place(board, X, [(0, 0), (0, 1), (0, 2), (4, 4)])

    agent = HeuristicAgent(seed=1)
    assert agent.choose_removal(board, O) == (0, 0)


def test_removal_random_when_pieces_isolated():
    """Test the random removal fallback when no opposing run reaches 2."""
    board = Board()
    isolated = [(0, 0), (0, 2), (4, 4)]
    place(board, X, isolated)
    place(board, O, [(0, 1)])

    agent = HeuristicAgent(seed=3)
    assert agent.choose_removal(board, O) in isolated


def test_removal_without_opposing_pieces():
    """Test that a removal with nothing to remove is reported."""
    board = Board()
    board.set(2, 2, O)
    with pytest.raises(NoLegalMove):
        HeuristicAgent(seed=1).choose_removal(board, O)


def test_select_action_follows_phase():
    """Test that select_action chooses placements or removals by phase."""
    match = Match()
    agent = HeuristicAgent(seed=2)
    assert agent.select_action(match) == (2, 2)

    # Removal phase: X removes an O piece
    for row in range(5):
        for col in range(5):
            if (row, col) != (4, 4):
                match.board.set(row, col, X if (col + 2 * row) % 4 in (0, 1) else O)
    match.submit_move(4, 4)
    target = agent.select_action(match)
    assert match.board.get(*target) == O
