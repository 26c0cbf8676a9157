"""
Configuration for matches and the scripts that present them.
"""
import json
from pathlib import Path
from typing import Dict, Union


class MatchConfig:
    """Rule constants plus presentation pauses."""

    def __init__(self,
                 # Scoring
                 winning_score: int = 5,
                 connect_5_points: int = 2,
                 connect_4_points: int = 1,

                 # Removal phase
                 removal_turns_each: int = 3,

                 # Presentation pauses (seconds), used by scripts only
                 ai_delay: float = 0.5,
                 bonus_delay: float = 1.3):

        self.winning_score = winning_score
        self.connect_5_points = connect_5_points
        self.connect_4_points = connect_4_points

        self.removal_turns_each = removal_turns_each

        self.ai_delay = ai_delay
        self.bonus_delay = bonus_delay

        self._validate()

    def _validate(self):
        for name in ('winning_score', 'connect_5_points', 'connect_4_points', 'removal_turns_each'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        for name in ('ai_delay', 'bonus_delay'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @property
    def removal_turns_total(self):
        return self.removal_turns_each * 2

    def points_for(self, length):
        """Points awarded for a run of the given length."""
        if length == 5:
            return self.connect_5_points
        if length == 4:
            return self.connect_4_points
        raise ValueError(f"No points defined for a run of {length}")

    def to_dict(self) -> Dict:
        """Convert config to dictionary."""
        return {k: v for k, v in self.__dict__.items()}

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'MatchConfig':
        """Create config from dictionary."""
        unknown = set(config_dict) - set(cls().to_dict())
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**config_dict)

    def save(self, path: Union[str, Path]):
        """Write the config as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'MatchConfig':
        """Read a config written by `save`."""
        with open(Path(path)) as f:
            return cls.from_dict(json.load(f))

    def __eq__(self, other):
        return isinstance(other, MatchConfig) and self.to_dict() == other.to_dict()

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"MatchConfig({fields})"
