#!/usr/bin/env python3
"""
Simple evaluation script for testing agents against each other.
"""
import argparse
import sys
import time
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tttmega.core.config import MatchConfig
from tttmega.ai.agents.random_agent import RandomAgent
from tttmega.ai.agents.heuristic_agent import HeuristicAgent
from tttmega.ai.self_play import SelfPlayManager


def evaluate_agents(agent1_name, agent1, agent2_name, agent2, num_games=100, swap_sides=True,
                    config=None, save_dir=None):
    """
    Evaluate two agents by playing multiple matches.

    Args:
        agent1_name: Name of agent1 for display
        agent1: Agent1 instance
        agent2_name: Name of agent2 for display
        agent2: Agent2 instance
        num_games: Number of matches to play
        swap_sides: Whether to swap X/O every match
        config: MatchConfig for the matches
        save_dir: Optional directory for a JSON results file

    Returns:
        dict: Results summary
    """
    print(f"Evaluating {agent1_name} vs {agent2_name}")
    print(f"Playing {num_games} matches{' with side swapping' if swap_sides else ''}...")
    print()

    manager = SelfPlayManager(config=config, verbose=False)
    start_time = time.time()
    results = manager.run_games(agent1, agent2, num_games=num_games, swap_sides=swap_sides)
    elapsed = time.time() - start_time

    total_games = results['games_played']
    agent1_win_rate = results['agent1_wins'] / total_games * 100 if total_games > 0 else 0
    agent2_win_rate = results['agent2_wins'] / total_games * 100 if total_games > 0 else 0

    print(f"=== Results after {total_games} matches ({elapsed:.1f}s) ===")
    print(f"{agent1_name}: {results['agent1_wins']} wins ({agent1_win_rate:.1f}%)")
    print(f"{agent2_name}: {results['agent2_wins']} wins ({agent2_win_rate:.1f}%)")
    print(f"Unfinished (turn limit): {results['unfinished']}")
    print()

    if swap_sides:
        print("=== Side Balance ===")
        print(f"{agent1_name} wins as X: {results['agent1_as_x_wins']}")
        print(f"{agent2_name} wins as X: {results['agent2_as_x_wins']}")
        print()

    results.update({
        'agent1_win_rate': agent1_win_rate,
        'agent2_win_rate': agent2_win_rate,
        'elapsed_time': elapsed
    })

    if save_dir:
        manager.save_results(results, save_dir)

    return results


def main():
    """Main evaluation function."""
    parser = argparse.ArgumentParser(description='Evaluate the heuristic bot against a random baseline')
    parser.add_argument('--games', type=int, default=200, help='Number of matches')
    parser.add_argument('--config', type=str, default=None, help='Path to a MatchConfig JSON file')
    parser.add_argument('--save-dir', type=str, default=None, help='Directory for a JSON results file')
    args = parser.parse_args()

    config = MatchConfig.load(args.config) if args.config else MatchConfig()

    print("Agent Evaluation")
    print("================")
    print()

    results = evaluate_agents(
        "HeuristicAgent", HeuristicAgent(seed=42),
        "RandomAgent", RandomAgent(seed=123),
        num_games=args.games,
        swap_sides=True,
        config=config,
        save_dir=args.save_dir,
    )

    print(f"HeuristicAgent win rate: {results['agent1_win_rate']:.1f}%")
    return results


if __name__ == "__main__":
    main()
