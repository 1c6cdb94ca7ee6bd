# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Conversion between (row, col) indices and labels like 'A5'.
"""

from typing import Tuple

from .grid import BOARD_SIZE

ROW_LABELS = "ABCDEFGHIJ"


def parse_coordinate(coord: str) -> Tuple[int, int]:
    """
    Parse a coordinate string like 'A5' or 'B10' into (row, col).

    Args:
        coord: Coordinate string (e.g., 'A5', 'J10')

    Returns:
        Tuple of (row_index, col_index), both 0-based.

    Raises:
        ValueError: If coordinate is invalid.
    """
    coord = coord.strip().upper()

    if len(coord) < 2 or len(coord) > 3:
        raise ValueError(f"Invalid coordinate format: {coord}")

    row_char = coord[0]
    col_str = coord[1:]

    if row_char not in ROW_LABELS:
        raise ValueError(f"Invalid row '{row_char}'. Must be A-J.")

    try:
        col_num = int(col_str)
    except ValueError:
        raise ValueError(f"Invalid column '{col_str}'. Must be 1-{BOARD_SIZE}.")

    if not (1 <= col_num <= BOARD_SIZE):
        raise ValueError(f"Column {col_num} out of range. Must be 1-{BOARD_SIZE}.")

    return ROW_LABELS.index(row_char), col_num - 1


def format_coordinate(row: int, col: int) -> str:
    """Convert (row, col) indices to coordinate string like 'A5'."""
    return f"{ROW_LABELS[row]}{col + 1}"
