# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Turn engine for a human vs. computer Battleship game.

The whole game lives in one immutable GameState. Every command takes a
state and returns a new one together with a result dict describing what
happened:
    - 'valid': bool, whether the command changed anything
    - 'result': short outcome code ('hit', 'miss', 'placed', 'ignored', ...)
    - 'coordinate': (row, col) the command acted on, if any
    - 'ship': ship name involved, if any
    - 'message': human-readable result message

Rejected commands return the input state unchanged. The game-over state
is never stored; it is derived from fleet health by winner().
"""

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .computer import TargetPool, draw_target, full_pool, generate_computer_board, place_randomly
from .coordinates import format_coordinate, parse_coordinate
from .fleet import (
    COMPUTER_ORIENTATIONS,
    SHIP_SIZES,
    Fleet,
    all_placed,
    decrement_health,
    init_fleet,
    is_fleet_destroyed,
    mark_placed,
    remaining_health,
    set_orientation,
    sunk_ships,
)
from .grid import (
    OccupancyGrid,
    count_marked,
    create_empty_occupancy_grid,
    create_empty_tracking_grid,
    in_bounds,
    mark,
    occupied_cells,
)
from .placement import Orientation, can_place, place, place_checked

logger = logging.getLogger(__name__)


class Turn(Enum):
    """Whose move it is. NONE while the human is still placing ships."""
    NONE = "none"
    PLAYER = "player"
    COMPUTER = "computer"


class Side(Enum):
    HUMAN = "human"
    COMPUTER = "computer"


_TURN_OF = {Side.HUMAN: Turn.PLAYER, Side.COMPUTER: Turn.COMPUTER}
_NEXT_TURN = {Turn.PLAYER: Turn.COMPUTER, Turn.COMPUTER: Turn.PLAYER}


@dataclass(frozen=True, eq=False)
class GameState:
    """
    Snapshot of a game.

    Tracking grids belong to the attacker: human_hits/human_misses record
    the human's shots at the computer board, computer_hits/computer_misses
    the computer's shots at the human board.
    """
    human_board: OccupancyGrid = field(default_factory=create_empty_occupancy_grid)
    computer_board: OccupancyGrid = field(default_factory=create_empty_occupancy_grid)
    human_fleet: Fleet = field(default_factory=init_fleet)
    computer_fleet: Fleet = field(default_factory=lambda: init_fleet(COMPUTER_ORIENTATIONS))
    human_hits: np.ndarray = field(default_factory=create_empty_tracking_grid)
    human_misses: np.ndarray = field(default_factory=create_empty_tracking_grid)
    computer_hits: np.ndarray = field(default_factory=create_empty_tracking_grid)
    computer_misses: np.ndarray = field(default_factory=create_empty_tracking_grid)
    target_pool: TargetPool = field(default_factory=full_pool)
    turn: Turn = Turn.NONE
    selected_ship: Optional[str] = None
    wins: int = 0
    win_recorded: bool = False
    generation: int = 0


def new_game(wins: int = 0, generation: int = 0) -> GameState:
    """Create a fresh game in the placement phase."""
    return GameState(wins=wins, generation=generation)


def reset(state: GameState) -> GameState:
    """Discard the current game. The win counter is carried over."""
    logger.info(f"Game reset (wins so far: {state.wins})")
    return new_game(wins=state.wins, generation=state.generation + 1)


def _result(valid: bool, result: str, message: str,
            coordinate: Optional[Tuple[int, int]] = None,
            ship: Optional[str] = None) -> Dict:
    return {
        "valid": valid,
        "result": result,
        "coordinate": coordinate,
        "ship": ship,
        "message": message,
    }


# ----------------------------------------------------------------------
# Placement phase
# ----------------------------------------------------------------------

def select_ship(state: GameState, ship_id: str) -> Tuple[GameState, Dict]:
    """
    Select the ship the next placement click applies to.

    Raises:
        ValueError: If ship_id is not part of the fleet.
    """
    if ship_id not in SHIP_SIZES:
        raise ValueError(f"Unknown ship: {ship_id}")
    return replace(state, selected_ship=ship_id), _result(
        True, "selected", f"Selected {ship_id}.", ship=ship_id
    )


def rotate_selected_ship(state: GameState) -> Tuple[GameState, Dict]:
    """Toggle the selected ship's orientation if it is not placed yet."""
    ship_id = state.selected_ship
    if ship_id is None or state.human_fleet[ship_id].placed:
        return state, _result(False, "ignored", "No unplaced ship selected.", ship=ship_id)

    orientation = state.human_fleet[ship_id].orientation.toggle()
    fleet = set_orientation(state.human_fleet, ship_id, orientation)
    return replace(state, human_fleet=fleet), _result(
        True, "rotated", f"{ship_id} is now {orientation.value}.", ship=ship_id
    )


def _commit_human_ship(state: GameState, ship_id: str, board: OccupancyGrid, rng) -> GameState:
    """Record a placed human ship, starting the battle once all are down."""
    state = replace(
        state,
        human_board=board,
        human_fleet=mark_placed(state.human_fleet, ship_id),
        selected_ship=None,
    )
    if state.turn is Turn.NONE and all_placed(state.human_fleet):
        state = _start_battle(state, rng)
    return state


def _start_battle(state: GameState, rng) -> GameState:
    computer_board, computer_fleet = generate_computer_board(rng)
    logger.info("All ships placed, battle started")
    return replace(
        state,
        computer_board=computer_board,
        computer_fleet=computer_fleet,
        target_pool=full_pool(),
        turn=Turn.PLAYER,
    )


def attempt_place_selected_ship(
    state: GameState, row: int, col: int, rng=random
) -> Tuple[GameState, Dict]:
    """
    Place the selected ship with its current orientation at (row, col).

    Placing the last ship generates the computer board and hands the
    first move to the player.

    Args:
        state: Current game state.
        row, col: Start cell of the ship.
        rng: Randomness for the computer board.

    Returns:
        (new state, result dict). 'result' is 'placed', 'invalid',
        'no_selection' or 'already_placed'.
    """
    ship_id = state.selected_ship
    if ship_id is None:
        return state, _result(False, "no_selection", "Select a ship first.", (row, col))

    ship = state.human_fleet[ship_id]
    if ship.placed:
        return state, _result(False, "already_placed", f"{ship_id} is already placed.",
                              (row, col), ship_id)

    if not can_place(state.human_board, row, col, ship.size, ship.orientation):
        logger.debug(f"Rejected {ship_id} at ({row}, {col}) {ship.orientation.value}")
        return state, _result(
            False, "invalid",
            "Invalid ship position. Please choose a different position.",
            (row, col), ship_id,
        )

    board = place(state.human_board, ship_id, row, col, ship.size, ship.orientation)
    state = _commit_human_ship(state, ship_id, board, rng)
    return state, _result(True, "placed", f"Placed {ship_id}.", (row, col), ship_id)


def place_remaining_randomly(state: GameState, rng=random) -> GameState:
    """Randomly place every unplaced human ship using its current orientation."""
    for ship_id, ship in state.human_fleet.items():
        if ship.placed:
            continue
        board = place_randomly(state.human_board, ship_id, ship.size, ship.orientation, rng)
        state = _commit_human_ship(state, ship_id, board, rng)
    return state


def place_human_fleet(state: GameState, placements: List[dict], rng=random) -> GameState:
    """
    Place human ships at specific positions (for scripted games).

    Args:
        placements: List of dicts with 'name', 'start' (e.g., 'A1'),
                   'horizontal' (bool)

    Raises:
        ValueError: Unknown ship, bad coordinate, ship already placed,
            or a placement that is out of bounds or overlapping.
    """
    for placement in placements:
        ship_id = placement["name"]
        if ship_id not in SHIP_SIZES:
            raise ValueError(f"Unknown ship: {ship_id}")
        if state.human_fleet[ship_id].placed:
            raise ValueError(f"Ship {ship_id} is already placed")

        row, col = parse_coordinate(placement["start"])
        orientation = Orientation.HORIZONTAL if placement["horizontal"] else Orientation.VERTICAL
        fleet = set_orientation(state.human_fleet, ship_id, orientation)
        board = place_checked(state.human_board, ship_id, row, col, SHIP_SIZES[ship_id], orientation)
        state = _commit_human_ship(replace(state, human_fleet=fleet), ship_id, board, rng)
    return state


# ----------------------------------------------------------------------
# Battle phase
# ----------------------------------------------------------------------

def _record_win(state: GameState) -> GameState:
    if not state.win_recorded and is_fleet_destroyed(state.computer_fleet):
        logger.info(f"Computer fleet destroyed, win recorded (wins: {state.wins + 1})")
        return replace(state, wins=state.wins + 1, win_recorded=True)
    return state


def resolve_attack(state: GameState, attacker: Side, row: int, col: int) -> Tuple[GameState, Dict]:
    """
    Fire one shot for `attacker` at (row, col) of the opponent's board.

    A hit marks the attacker's hits grid and costs the struck ship one
    health point; anything else marks the attacker's misses grid. The
    turn then passes to the other side, hit or miss. The engine does not
    refuse shots after the game is decided.

    Returns:
        (new state, result dict) with 'result' 'hit', 'miss', 'ignored'
        (not this side's turn) or 'already_shot'.
    """
    coord = (row, col)
    if state.turn is not _TURN_OF[attacker]:
        logger.debug(f"Ignored {attacker.value} attack at {coord} during {state.turn.value} turn")
        return state, _result(False, "ignored", "Not your turn.", coord)

    if attacker is Side.HUMAN:
        target, hits, misses = state.computer_board, state.human_hits, state.human_misses
    else:
        target, hits, misses = state.human_board, state.computer_hits, state.computer_misses

    label = format_coordinate(row, col)
    if hits[row, col] or misses[row, col]:
        return state, _result(False, "already_shot", f"Already shot at {label}.", coord)

    ship_id = target[row][col]
    next_turn = _NEXT_TURN[state.turn]

    if ship_id is None:
        if attacker is Side.HUMAN:
            state = replace(state, human_misses=mark(misses, row, col), turn=next_turn)
        else:
            state = replace(state, computer_misses=mark(misses, row, col), turn=next_turn)
        logger.debug(f"{attacker.value} missed at {label}")
        return state, _result(True, "miss", "Miss!", coord)

    if attacker is Side.HUMAN:
        state = replace(
            state,
            human_hits=mark(hits, row, col),
            computer_fleet=decrement_health(state.computer_fleet, ship_id),
            turn=next_turn,
        )
        sunk = state.computer_fleet[ship_id].is_sunk
    else:
        state = replace(
            state,
            computer_hits=mark(hits, row, col),
            human_fleet=decrement_health(state.human_fleet, ship_id),
            turn=next_turn,
        )
        sunk = state.human_fleet[ship_id].is_sunk
    state = _record_win(state)

    logger.debug(f"{attacker.value} hit {ship_id} at {label}")
    message = f"Hit! {ship_id} sunk!" if sunk else "Hit!"
    return state, _result(True, "hit", message, coord, ship_id)


def human_attack(state: GameState, row: int, col: int) -> Tuple[GameState, Dict]:
    """Fire the human's shot at the computer board."""
    if not in_bounds(row, col):
        return state, _result(False, "invalid", f"({row}, {col}) is off the board.", (row, col))
    return resolve_attack(state, Side.HUMAN, row, col)


def computer_attack(state: GameState, rng=random) -> Tuple[GameState, Dict]:
    """Draw an untried cell at random and fire the computer's shot there."""
    if state.turn is not Turn.COMPUTER:
        return state, _result(False, "ignored", "Not the computer's turn.")
    if not state.target_pool:
        logger.debug("Computer has no targets left")
        return state, _result(False, "ignored", "No targets left.")

    coord, pool = draw_target(state.target_pool, rng)
    return resolve_attack(replace(state, target_pool=pool), Side.COMPUTER, *coord)


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------

def all_ships_placed(state: GameState) -> bool:
    return all_placed(state.human_fleet)


def winner(state: GameState) -> Optional[Side]:
    """The side that won, or None while both fleets still float."""
    if is_fleet_destroyed(state.human_fleet):
        return Side.COMPUTER
    if is_fleet_destroyed(state.computer_fleet):
        return Side.HUMAN
    return None


def is_game_over(state: GameState) -> bool:
    return winner(state) is not None


def status(state: GameState) -> Dict:
    """
    Summary of the game for display.

    Returns:
        Dict with turn, wins, placement flag, remaining health and sunk
        ships of both fleets, shot counts and the winner (or None).
    """
    won_by = winner(state)
    return {
        "turn": state.turn.value,
        "wins": state.wins,
        "all_ships_placed": all_ships_placed(state),
        "human_remaining": remaining_health(state.human_fleet),
        "computer_remaining": remaining_health(state.computer_fleet),
        "human_sunk": sunk_ships(state.human_fleet),
        "computer_sunk": sunk_ships(state.computer_fleet),
        "human_hits": count_marked(state.human_hits),
        "human_misses": count_marked(state.human_misses),
        "computer_hits": count_marked(state.computer_hits),
        "computer_misses": count_marked(state.computer_misses),
        "targets_left": len(state.target_pool),
        "placed_cells": len(occupied_cells(state.human_board)),
        "winner": won_by.value if won_by else None,
    }
