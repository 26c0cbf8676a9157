#!/usr/bin/env python3
"""
CLI interface for playing against a human or the built-in bot.
"""
import argparse
import sys
import os
import time

# Add the parent directory to Python path so we can import tttmega
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from tttmega.core.board import GRID_SIZE, X, O, symbol
from tttmega.core.config import MatchConfig
from tttmega.core.errors import EngineError
from tttmega.core.events import BONUS_TURN, GAME_OVER, PHASE_CHANGED, RUN_SCORED
from tttmega.core.game import Match, REMOVAL
from tttmega.ai.agents.random_agent import RandomAgent
from tttmega.ai.agents.heuristic_agent import HeuristicAgent


def display_board(snapshot):
    """Display the current board state in ASCII format."""
    print("\n   " + " ".join(f"{col:2d}" for col in range(GRID_SIZE)))
    print("   " + "---" * GRID_SIZE)
    for row, cells in enumerate(snapshot.board):
        print(f"{row:2d}|" + " ".join(f" {cell or '.'}" for cell in cells) + f" |{row:2d}")
    print("   " + "---" * GRID_SIZE)
    print(f"Score  X: {snapshot.scores['X']}  O: {snapshot.scores['O']}")


def print_event(event, names):
    """Report the events a renderer would animate."""
    name = names.get(event.player, event.player)
    if event.type == RUN_SCORED:
        print(f"*** {name} scores {event.data['points']}! (Connect {event.data['length']}) ***")
    elif event.type == BONUS_TURN:
        print(f"{name} gets a bonus turn.")
    elif event.type == PHASE_CHANGED and event.data['to'] == REMOVAL:
        print(f"Board full! Remove opponent pieces. ({event.data['removal_turns_left']} left)")
    elif event.type == PHASE_CHANGED and event.data['from'] == REMOVAL:
        print("Removal phase over. Play resumes.")
    elif event.type == GAME_OVER:
        scores = event.data['scores']
        print(f"{name} wins! ({scores['X']}-{scores['O']})")


def parse_move(move_input):
    """
    Parse move input from user.

    Args:
        move_input (str): User input like "2 2" or "2,2"

    Returns:
        tuple: (row, col) or None if invalid
    """
    try:
        if ',' in move_input:
            parts = move_input.split(',')
        else:
            parts = move_input.split()

        if len(parts) != 2:
            return None

        return (int(parts[0].strip()), int(parts[1].strip()))

    except ValueError:
        return None


def select_game_mode(seed):
    """
    Let user select game mode.

    Returns:
        tuple: (mode, x_agent, o_agent) where agents are None for humans
    """
    print("\nSelect Game Mode:")
    print("1. Player vs Bot")
    print("2. Player vs Player (same terminal)")
    print("3. Player vs Random")
    print("4. Bot vs Bot")

    while True:
        try:
            choice = input("\nEnter your choice (1-4): ").strip()

            if choice == '1':
                return ('pvbot', None, HeuristicAgent(seed=seed))
            elif choice == '2':
                return ('pvp', None, None)
            elif choice == '3':
                return ('pvrandom', None, RandomAgent(seed=seed))
            elif choice == '4':
                return ('botvbot', HeuristicAgent(seed=seed), HeuristicAgent(seed=None if seed is None else seed + 1))
            else:
                print("Invalid choice! Please enter 1, 2, 3 or 4.")

        except (KeyboardInterrupt, EOFError):
            print("\nExiting...")
            sys.exit(0)


def get_human_action(match, name):
    """
    Get a placement or removal from a human player.

    Returns:
        tuple: (row, col) or None if quit
    """
    verb = "remove an opponent piece at" if match.phase == REMOVAL else "place at"
    while True:
        try:
            move_input = input(f"{name}, {verb} (row col) or 'quit': ").strip()

            if move_input.lower() in ['quit', 'exit', 'q']:
                return None

            move = parse_move(move_input)
            if move is None:
                print("Invalid input! Please enter: row col (e.g., '2 2')")
                continue
            return move

        except (KeyboardInterrupt, EOFError):
            return None


def main():
    """Main game loop."""
    parser = argparse.ArgumentParser(description='Play the 5x5 connect-and-remove game')
    parser.add_argument('--config', type=str, default=None, help='Path to a MatchConfig JSON file')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the bots')
    args = parser.parse_args()

    config = MatchConfig.load(args.config) if args.config else MatchConfig()

    print("=" * 60)
    print("               CONNECT 4/5 ON A 5x5 GRID")
    print("=" * 60)
    print(f"Connect 4 in a row: {config.connect_4_points} point(s). "
          f"Connect 5: {config.connect_5_points} points.")
    print("Scoring pieces are removed and you get another turn.")
    print(f"If the board fills up, each side removes {config.removal_turns_each} opposing pieces.")
    print(f"First to {config.winning_score} points wins. X goes first.")
    print("=" * 60)

    _, x_agent, o_agent = select_game_mode(args.seed)
    agents = {X: x_agent, O: o_agent}
    names = {
        'X': 'Bot X' if x_agent else 'Player X',
        'O': ('Bot' if isinstance(o_agent, HeuristicAgent) else 'Random') if o_agent else 'Player O',
    }

    match = Match(config)
    match.add_listener(lambda event: print_event(event, names))

    try:
        while not match.game_over:
            snapshot = match.snapshot()
            display_board(snapshot)
            mover = match.current_player
            name = names[symbol(mover)]
            agent = agents[mover]

            if snapshot.is_removal_phase:
                print(f"Removal: {name}'s turn ({snapshot.removal_turns_left} left)")
            else:
                print(f"{name}'s turn")

            if agent is None:
                move = get_human_action(match, name)
                if move is None:
                    print("\nThanks for playing!")
                    return
                try:
                    if match.phase == REMOVAL:
                        match.submit_removal(*move, mover)
                    else:
                        match.submit_move(*move, mover)
                except EngineError as error:
                    print(f"Rejected: {error}")
                continue

            print(f"{name} is thinking...")
            time.sleep(config.ai_delay)
            snapshot = match.play_agent_turn(agent)
            if snapshot.is_bonus_turn:
                time.sleep(config.bonus_delay)

    except (KeyboardInterrupt, EOFError):
        print("\nThanks for playing!")
        return

    display_board(match.snapshot())
    print("\n" + "=" * 60)
    print(f"GAME OVER - {names[match.snapshot().winner]} wins!")
    print("=" * 60)


if __name__ == "__main__":
    main()
