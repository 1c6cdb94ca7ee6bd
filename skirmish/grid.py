# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Grid model for Battleship boards.

Two flavors of N x N grid are used:
- Occupancy grids: nested lists where each cell is None or a ship name.
- Tracking grids: boolean numpy arrays recording hits or misses.

Writes never mutate their input; each one returns a fresh copy so older
game states stay valid.
"""

from typing import List, Optional, Tuple

import numpy as np

BOARD_SIZE = 10

Coordinate = Tuple[int, int]
OccupancyGrid = List[List[Optional[str]]]


def create_empty_occupancy_grid() -> OccupancyGrid:
    """Create an N x N occupancy grid with every cell empty."""
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


def create_empty_tracking_grid() -> np.ndarray:
    """Create an N x N tracking grid with every cell unmarked."""
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=bool)


def copy_occupancy_grid(grid: OccupancyGrid) -> OccupancyGrid:
    return [list(row) for row in grid]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def all_coordinates() -> List[Coordinate]:
    """All board coordinates in row-major order."""
    return [(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]


def mark(grid: np.ndarray, row: int, col: int) -> np.ndarray:
    """Return a copy of a tracking grid with (row, col) marked."""
    marked = grid.copy()
    marked[row, col] = True
    return marked


def count_marked(grid: np.ndarray) -> int:
    return int(np.count_nonzero(grid))


def occupied_cells(grid: OccupancyGrid, ship_id: Optional[str] = None) -> List[Coordinate]:
    """
    List occupied cells of an occupancy grid.

    Args:
        grid: Occupancy grid to scan.
        ship_id: Restrict to cells holding this ship. All ships if None.
    """
    cells = []
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            cell = grid[row][col]
            if cell is not None and (ship_id is None or cell == ship_id):
                cells.append((row, col))
    return cells
