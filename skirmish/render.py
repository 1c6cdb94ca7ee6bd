# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
ASCII rendering of boards and ship counters.
"""

import numpy as np

from .coordinates import ROW_LABELS
from .engine import GameState, Side, all_ships_placed, winner
from .fleet import Fleet
from .grid import BOARD_SIZE, OccupancyGrid

HIT_MARK = "X"
MISS_MARK = "O"
UNKNOWN_MARK = "_"

SHIP_SYMBOLS = {
    "carrier": "A",  # Aircraft carrier (avoid clash with Cruiser)
    "cruiser": "C",
    "submarine": "S",
    "boat": "B",
}


def board_string(
    occupancy: OccupancyGrid,
    hits: np.ndarray,
    misses: np.ndarray,
    reveal_ships: bool = False,
) -> str:
    """
    Render a board as an ASCII grid.

    Args:
        occupancy: The board's ship layout.
        hits: Attacker's hits against this board.
        misses: Attacker's misses against this board.
        reveal_ships: Show unhit ships (the player's own board).

    Returns:
        Multi-line string, one row per line with a column header.
    """
    lines = ["    |" + "|".join(f"{i:^3}" for i in range(1, BOARD_SIZE + 1))]

    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            if hits[row, col]:
                symbol = HIT_MARK
            elif misses[row, col]:
                symbol = MISS_MARK
            elif reveal_ships and occupancy[row][col] is not None:
                symbol = SHIP_SYMBOLS.get(occupancy[row][col], "#")
            else:
                symbol = UNKNOWN_MARK
            cells.append(f" {symbol} ")
        lines.append(f"  {ROW_LABELS[row]} |" + "|".join(cells))

    return "\n".join(lines)


def counters_string(fleet: Fleet, label: str) -> str:
    """One line listing each ship's remaining health."""
    parts = [f"{name} {ship.health}/{ship.size}" for name, ship in fleet.items()]
    return f"{label}: " + ", ".join(parts)


def outcome_message(state: GameState) -> str:
    if not all_ships_placed(state):
        return "Place your ships."
    won_by = winner(state)
    if won_by is Side.COMPUTER:
        return "YOU LOSE!"
    if won_by is Side.HUMAN:
        return "YOU WIN!"
    return "The war started!"
