# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Computer opponent: random fleet placement and random targeting.

Placement is rejection sampling: a random start cell is drawn until the
ship fits. There is no retry cap. With a 10x10 board and ships of at
most 5 cells the search ends after a handful of draws, but that is an
assumption about the board, not a proven bound.

Targeting samples the board uniformly without replacement and never
looks at earlier results.
"""

import logging
import random
from typing import Optional, Tuple

from .fleet import COMPUTER_ORIENTATIONS, SHIP_SIZES, Fleet, init_fleet
from .grid import BOARD_SIZE, Coordinate, OccupancyGrid, all_coordinates, create_empty_occupancy_grid
from .placement import Orientation, can_place, place

logger = logging.getLogger(__name__)

TargetPool = Tuple[Coordinate, ...]


def place_randomly(
    grid: OccupancyGrid,
    ship_id: str,
    size: int,
    orientation: Orientation,
    rng=random,
) -> OccupancyGrid:
    """Draw random start cells until the ship fits, then place it."""
    attempts = 0
    while True:
        attempts += 1
        row = rng.randint(0, BOARD_SIZE - 1)
        col = rng.randint(0, BOARD_SIZE - 1)
        if can_place(grid, row, col, size, orientation):
            logger.debug(
                f"Placed {ship_id} at ({row}, {col}) {orientation.value} "
                f"after {attempts} attempt(s)"
            )
            return place(grid, ship_id, row, col, size, orientation)


def generate_computer_board(rng=random) -> Tuple[OccupancyGrid, Fleet]:
    """
    Build the computer's board.

    Ships go down in fleet order (carrier, cruiser, submarine, boat) with
    the fixed computer orientations.

    Args:
        rng: Source of randomness (random.Random or the random module).

    Returns:
        Tuple of (occupancy grid, placed computer fleet).
    """
    grid = create_empty_occupancy_grid()
    for ship_id, size in SHIP_SIZES.items():
        grid = place_randomly(grid, ship_id, size, COMPUTER_ORIENTATIONS[ship_id], rng)
    fleet = init_fleet(COMPUTER_ORIENTATIONS, placed=True)
    return grid, fleet


def full_pool() -> TargetPool:
    """Every board coordinate, untargeted."""
    return tuple(all_coordinates())


def draw_target(pool: TargetPool, rng=random) -> Tuple[Optional[Coordinate], TargetPool]:
    """
    Pick a random coordinate from the pool.

    Returns:
        (coordinate, pool without it), or (None, pool) if the pool is empty.
    """
    if not pool:
        return None, pool
    index = rng.randrange(len(pool))
    return pool[index], pool[:index] + pool[index + 1:]
