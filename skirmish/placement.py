# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Ship placement validation and writing.
"""

from enum import Enum
from typing import List, Optional, Tuple

from .grid import Coordinate, OccupancyGrid, copy_occupancy_grid, in_bounds


class Orientation(Enum):
    """Direction a ship extends from its starting cell."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def toggle(self) -> "Orientation":
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class InvalidPlacementError(ValueError):
    """Raised by place_checked when a ship cannot go where it was asked."""


def ship_cells(row: int, col: int, size: int, orientation: Orientation) -> List[Coordinate]:
    """Cells covered by a ship of `size` starting at (row, col)."""
    if orientation is Orientation.HORIZONTAL:
        return [(row, col + k) for k in range(size)]
    return [(row + k, col) for k in range(size)]


def placement_conflict(
    grid: OccupancyGrid,
    row: int,
    col: int,
    size: int,
    orientation: Orientation,
) -> Optional[Tuple[str, Coordinate]]:
    """
    Find the first covered cell that blocks a placement.

    Returns:
        ('out of bounds', cell) or ('overlaps', cell), or None if the
        ship fits.
    """
    for r, c in ship_cells(row, col, size, orientation):
        if not in_bounds(r, c):
            return "out of bounds", (r, c)
        if grid[r][c] is not None:
            return "overlaps", (r, c)
    return None


def can_place(
    grid: OccupancyGrid,
    row: int,
    col: int,
    size: int,
    orientation: Orientation,
) -> bool:
    """
    Check whether a ship fits at (row, col) without leaving the board
    or overlapping another ship.
    """
    return placement_conflict(grid, row, col, size, orientation) is None


def place(
    grid: OccupancyGrid,
    ship_id: str,
    row: int,
    col: int,
    size: int,
    orientation: Orientation,
) -> OccupancyGrid:
    """
    Write `ship_id` into every covered cell and return the new grid.

    The placement is not re-validated; call can_place first.
    """
    placed = copy_occupancy_grid(grid)
    for r, c in ship_cells(row, col, size, orientation):
        placed[r][c] = ship_id
    return placed


def place_checked(
    grid: OccupancyGrid,
    ship_id: str,
    row: int,
    col: int,
    size: int,
    orientation: Orientation,
) -> OccupancyGrid:
    """
    Validate and place a ship, raising on failure.

    Raises:
        InvalidPlacementError: If the ship leaves the board or overlaps.
    """
    conflict = placement_conflict(grid, row, col, size, orientation)
    if conflict is not None:
        reason, (r, c) = conflict
        if reason == "out of bounds":
            raise InvalidPlacementError(f"Ship {ship_id} goes out of bounds")
        raise InvalidPlacementError(
            f"Ship {ship_id} overlaps with {grid[r][c]} at ({r}, {c})"
        )
    return place(grid, ship_id, row, col, size, orientation)
