"""
Self-play system for pitting agents against each other.

Plays complete matches between two agents and collects per-match results.
"""
import json
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from ..core.board import X, symbol
from ..core.config import MatchConfig
from ..core.events import PHASE_CHANGED, RUN_SCORED
from ..core.game import Match, REMOVAL


class SelfPlayMatch:
    """
    Manages a single match between two agents.

    Player 1 plays X and opens the match; player 2 plays O.
    """

    def __init__(self,
                 player1_agent,
                 player2_agent,
                 max_turns: int = 500,
                 verbose: bool = False,
                 config: Optional[MatchConfig] = None):
        """
        Initialize a self-play match.

        Args:
            player1_agent: Agent playing X
            player2_agent: Agent playing O
            max_turns: Maximum accepted intents before the match is abandoned
            verbose: Whether to print match progress
            config: Rule configuration (defaults to MatchConfig())
        """
        self.player1_agent = player1_agent
        self.player2_agent = player2_agent
        self.max_turns = max_turns
        self.verbose = verbose
        self.config = config or MatchConfig()

        self.move_times = []
        self.runs_scored = 0
        self.removal_phases = 0

    def _on_event(self, event):
        if event.type == RUN_SCORED:
            self.runs_scored += 1
        elif event.type == PHASE_CHANGED and event.data['to'] == REMOVAL:
            self.removal_phases += 1

    def play_match(self) -> Dict[str, Any]:
        """
        Play a complete match and return results.

        Returns:
            dict: Match results including winner, scores, turns, duration
        """
        match = Match(self.config)
        match.add_listener(self._on_event)
        turns = 0
        start_time = time.time()

        if self.verbose:
            print(f"Starting self-play match...")
            print(f"Player 1 (X): {type(self.player1_agent).__name__}")
            print(f"Player 2 (O): {type(self.player2_agent).__name__}")

        while not match.game_over and turns < self.max_turns:
            agent = self.player1_agent if match.current_player == X else self.player2_agent
            mover = symbol(match.current_player)
            phase = match.phase

            move_start = time.time()
            snapshot = match.play_agent_turn(agent)
            self.move_times.append(time.time() - move_start)
            turns += 1

            if self.verbose:
                action = snapshot.events[0].data
                print(f"Turn {turns}: {mover} {phase} at ({action['row']}, {action['col']}) "
                      f"score X={snapshot.scores['X']} O={snapshot.scores['O']}")

        match.remove_listener(self._on_event)
        duration = time.time() - start_time
        snapshot = match.snapshot()

        results = {
            'outcome': 'win' if snapshot.game_over else 'turn_limit',
            'winner': snapshot.winner,
            'scores': dict(snapshot.scores),
            'turns': turns,
            'runs_scored': self.runs_scored,
            'removal_phases': self.removal_phases,
            'duration': duration,
            'avg_move_time': float(np.mean(self.move_times)) if self.move_times else 0.0,
            'final_board': [list(row) for row in snapshot.board],
            'player1_agent': type(self.player1_agent).__name__,
            'player2_agent': type(self.player2_agent).__name__,
        }

        if self.verbose:
            print(f"Match finished: {results['outcome']}")
            if results['winner']:
                print(f"Winner: {results['winner']}")
            print(f"Turns: {turns}, Duration: {duration:.2f}s")

        return results


class SelfPlayManager:
    """
    Runs series of matches between two agents and aggregates the results.
    """

    def __init__(self, config: Optional[MatchConfig] = None, max_turns: int = 500, verbose: bool = True):
        self.config = config or MatchConfig()
        self.max_turns = max_turns
        self.verbose = verbose

    def run_games(self, agent1, agent2, num_games: int = 100, swap_sides: bool = True) -> Dict[str, Any]:
        """
        Play several matches between two agents.

        Args:
            agent1: First agent
            agent2: Second agent
            num_games: Number of matches to play
            swap_sides: Whether to alternate which agent plays X

        Returns:
            dict: Aggregated statistics plus the list of per-match results
        """
        stats = {
            'games_played': 0,
            'agent1_wins': 0,
            'agent2_wins': 0,
            'unfinished': 0,
            'agent1_as_x_wins': 0,
            'agent2_as_x_wins': 0,
            'total_turns': 0,
            'total_duration': 0.0,
            'results': [],
        }

        if self.verbose:
            print(f"Starting {num_games} self-play matches...")

        for game_idx in range(num_games):
            agent1_is_x = not (swap_sides and game_idx % 2 == 1)
            player1, player2 = (agent1, agent2) if agent1_is_x else (agent2, agent1)

            result = SelfPlayMatch(
                player1_agent=player1,
                player2_agent=player2,
                max_turns=self.max_turns,
                verbose=False,
                config=self.config,
            ).play_match()
            result['agent1_side'] = 'X' if agent1_is_x else 'O'
            stats['results'].append(result)
            self._update_stats(stats, result, agent1_is_x)

            if self.verbose and (game_idx + 1) % 10 == 0:
                print(f"Completed {game_idx + 1}/{num_games} matches")

        if self.verbose:
            self._print_summary(stats)

        return stats

    def _update_stats(self, stats: Dict[str, Any], result: Dict[str, Any], agent1_is_x: bool):
        stats['games_played'] += 1
        stats['total_turns'] += result['turns']
        stats['total_duration'] += result['duration']

        if result['outcome'] != 'win':
            stats['unfinished'] += 1
            return

        agent1_won = (result['winner'] == 'X') == agent1_is_x
        if agent1_won:
            stats['agent1_wins'] += 1
            if agent1_is_x:
                stats['agent1_as_x_wins'] += 1
        else:
            stats['agent2_wins'] += 1
            if not agent1_is_x:
                stats['agent2_as_x_wins'] += 1

    def _print_summary(self, stats: Dict[str, Any]):
        total_games = stats['games_played']
        if total_games == 0:
            return

        print(f"\n=== Self-Play Summary ===")
        print(f"Matches played: {total_games}")
        print(f"Agent 1 wins: {stats['agent1_wins']} ({stats['agent1_wins'] / total_games:.2%})")
        print(f"Agent 2 wins: {stats['agent2_wins']} ({stats['agent2_wins'] / total_games:.2%})")
        print(f"Unfinished: {stats['unfinished']}")
        print(f"Average turns per match: {stats['total_turns'] / total_games:.1f}")
        print(f"Average match duration: {stats['total_duration'] / total_games:.3f}s")

    def save_results(self, stats: Dict[str, Any], save_dir: str) -> Path:
        """
        Save aggregated results as JSON.

        Returns:
            Path: File that was written
        """
        save_dir = Path(save_dir)
        save_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        results_file = save_dir / f"selfplay_results_{timestamp}.json"
        with open(results_file, 'w') as f:
            json.dump({'config': self.config.to_dict(), **stats}, f, indent=2)

        if self.verbose:
            print(f"Results saved to {results_file}")
        return results_file
