"""
Random agent for the 5x5 connect-and-remove game.
"""
import random


class RandomAgent:
    """
    An agent that plays random legal actions.

    Picks uniformly among empty cells while playing and among opposing
    pieces during the removal phase.
    """

    def __init__(self, seed=None):
        """
        Initialize the random agent.

        Args:
            seed (int, optional): Random seed for reproducible behavior
        """
        self.rng = random.Random(seed)

    def select_action(self, match):
        """
        Select a random legal action from the current match state.

        Args:
            match: Match instance with current board state

        Returns:
            tuple: (row, col) of the selected action, or None if there is none
        """
        legal_actions = match.legal_actions()

        if not legal_actions:
            return None

        return self.rng.choice(legal_actions)
