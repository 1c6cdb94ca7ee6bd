#!/usr/bin/env python3
# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Interactive Battleship client for the terminal.

Place your four ships, then trade shots with the computer.
"""

import argparse
import logging
import re

from .config import load_config, setup_logging
from .coordinates import format_coordinate, parse_coordinate
from .fleet import SHIP_SIZES
from .render import board_string, counters_string, outcome_message
from .session import GameSession, blocking_scheduler

logger = logging.getLogger(__name__)

# Letter then digits; parse_coordinate does the range checks.
COORDINATE_PATTERN = re.compile(r"^[a-z]\d{1,2}$")

USAGE = {
    "select": "select <ship>",
    "place": "place <coord>",
    "fire": "fire <coord>",
}


def print_help():
    """Print help message."""
    print("""
Placement commands:
  select <ship>    - Select a ship (carrier, cruiser, submarine, boat)
  rotate           - Toggle the selected ship's orientation
  place <coord>    - Place the selected ship starting at coord
  auto             - Place all remaining ships randomly

Battle commands:
  <coordinate>     - Fire at coordinate (e.g., A5, B10, J1)
  fire <coord>     - Same as above

Other:
  board            - Show both boards
  status           - Show ship counters and win count
  reset            - Start a new game
  help             - Show this help
  quit             - Exit game

Coordinate format: Letter (A-J) + Number (1-10)
""")


def print_boards(session: GameSession):
    state = session.state
    print("\nYour board:")
    print(board_string(state.human_board, state.computer_hits, state.computer_misses, reveal_ships=True))
    if session.all_ships_placed():
        print("\nComputer's board:")
        print(board_string(state.computer_board, state.human_hits, state.human_misses))
    print()


def print_status(session: GameSession):
    state = session.state
    print(f"\n--- Wins: {state.wins} | Turn: {state.turn.value} ---")
    print(counters_string(state.human_fleet, "Your ships"))
    if session.all_ships_placed():
        print(counters_string(state.computer_fleet, "Computer ships"))
    print(outcome_message(state))
    print()


def fire(session: GameSession, coord: str):
    row, col = parse_coordinate(coord)
    if session.winner() is not None:
        print("The game is over. Type 'reset' to play again.")
        return

    result = session.human_attack(row, col)
    print(f"\nYou: {result['message']}")
    if not result["valid"]:
        return

    # The blocking scheduler has already played the computer's reply.
    reply = session.last_computer_result
    if reply is not None and reply["valid"]:
        print(f"Computer fires at {format_coordinate(*reply['coordinate'])}: {reply['message']}")
    print_boards(session)
    print(outcome_message(session.state))


def handle_command(session: GameSession, user_input: str) -> bool:
    """
    Apply one line of input.

    Returns:
        False when the user asked to quit.
    """
    parts = user_input.split()
    cmd = parts[0].lower()
    arg = parts[1] if len(parts) > 1 else None

    if cmd in ("quit", "exit", "q"):
        print("Thanks for playing!")
        return False

    if cmd == "help":
        print_help()
    elif cmd == "board":
        print_boards(session)
    elif cmd == "status":
        print_status(session)
    elif cmd == "reset":
        session.reset()
        print("New game. Place your ships.")
    elif cmd == "select" and arg:
        if arg.lower() not in SHIP_SIZES:
            print(f"Unknown ship '{arg}'. Choose from: {', '.join(SHIP_SIZES)}")
        else:
            print(session.select_ship(arg.lower())["message"])
    elif cmd == "rotate":
        print(session.rotate_selected_ship()["message"])
    elif cmd == "place" and arg:
        row, col = parse_coordinate(arg)
        result = session.attempt_place_selected_ship(row, col)
        print(result["message"])
        if result["valid"]:
            print_boards(session)
    elif cmd == "auto":
        session.place_remaining_randomly()
        print_boards(session)
    elif cmd == "fire" and arg:
        fire(session, arg)
    elif len(parts) == 1 and COORDINATE_PATTERN.match(cmd):
        fire(session, cmd)
    elif cmd in USAGE:
        print(f"Usage: {USAGE[cmd]}")
    else:
        print(f"Unknown command '{parts[0]}'. Type 'help' for commands.")
    return True


def main():
    """Run interactive Battleship game."""
    parser = argparse.ArgumentParser(description="Play Battleship against the computer")
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration file'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed (overrides config)'
    )
    parser.add_argument(
        '--delay',
        type=float,
        default=None,
        help='Seconds before the computer replies (overrides config)'
    )
    args = parser.parse_args()

    config = load_config(args.config)
    if args.seed is not None:
        config['game']['seed'] = args.seed
    if args.delay is not None:
        config['game']['computer_delay'] = args.delay
    setup_logging(config)

    session = GameSession(
        seed=config['game']['seed'],
        computer_delay=config['game']['computer_delay'],
        scheduler=blocking_scheduler,
    )
    logger.info(f"Session started (seed: {config['game']['seed']})")

    print("=" * 50)
    print("       BATTLESHIP")
    print("=" * 50)
    print("\nShips: carrier(5), cruiser(4), submarine(3), boat(2)")
    print("Type 'help' for commands.\n")
    print_boards(session)

    while True:
        try:
            user_input = input("> ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if not user_input:
            continue

        try:
            if not handle_command(session, user_input):
                break
        except ValueError as e:
            print(e)


if __name__ == "__main__":
    main()
