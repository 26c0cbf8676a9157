"""
Tests for MatchConfig.
"""
import json
import pytest
from tttmega.core.config import MatchConfig
from tttmega.core.board import X
from tttmega.core.game import Match


def test_default_rules():
    """Test the default rule constants."""
    config = MatchConfig()
    assert config.winning_score == 5
    assert config.connect_5_points == 2
    assert config.connect_4_points == 1
    assert config.removal_turns_each == 3
    assert config.removal_turns_total == 6
    assert config.points_for(5) == 2
    assert config.points_for(4) == 1

    with pytest.raises(ValueError):
        config.points_for(3)


def test_dict_round_trip():
    """Test conversion to and from a dictionary."""
    config = MatchConfig(winning_score=7, ai_delay=0.0)
    restored = MatchConfig.from_dict(config.to_dict())
    assert restored == config
    assert restored.winning_score == 7


def test_save_and_load(tmp_path):
    """Test writing and reading a JSON config file."""
    path = tmp_path / "configs" / "match.json"
    MatchConfig(removal_turns_each=2).save(path)

    with open(path) as f:
        assert json.load(f)['removal_turns_each'] == 2
    assert MatchConfig.load(path).removal_turns_total == 4


@pytest.mark.parametrize("kwargs", [
    {'winning_score': 0},
    {'connect_5_points': -1},
    {'removal_turns_each': 1.5},
    {'ai_delay': -0.1},
])
def test_invalid_values(kwargs):
    """Test that invalid settings are rejected."""
    with pytest.raises(ValueError):
        MatchConfig(**kwargs)


def test_unknown_keys_rejected():
    """Test that unknown keys in a config dictionary are rejected."""
    with pytest.raises(ValueError):
        MatchConfig.from_dict({'grid_size': 7})


def test_config_drives_match_rules():
    """Test that a match uses its configured points and winning score."""
    match = Match(MatchConfig(winning_score=3, connect_5_points=3))
    for col in range(4):
        match.board.set(0, col, X)

    snapshot = match.submit_move(0, 4)
    assert snapshot.scores['X'] == 3
    assert snapshot.game_over
