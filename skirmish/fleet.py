# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Fleet registry: ship sizes, orientations, placement flags and health.

Fleets are plain ordered dicts of immutable Ship records. Every
operation returns a new fleet.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from .placement import Orientation

# Order matters: computer placement goes largest first.
SHIP_SIZES: Dict[str, int] = {
    "carrier": 5,
    "cruiser": 4,
    "submarine": 3,
    "boat": 2,
}

HUMAN_ORIENTATIONS: Dict[str, Orientation] = {
    "carrier": Orientation.HORIZONTAL,
    "cruiser": Orientation.HORIZONTAL,
    "submarine": Orientation.HORIZONTAL,
    "boat": Orientation.HORIZONTAL,
}

COMPUTER_ORIENTATIONS: Dict[str, Orientation] = {
    "carrier": Orientation.HORIZONTAL,
    "cruiser": Orientation.VERTICAL,
    "submarine": Orientation.HORIZONTAL,
    "boat": Orientation.VERTICAL,
}


@dataclass(frozen=True)
class Ship:
    """A ship's registry entry."""
    name: str
    size: int
    orientation: Orientation = Orientation.HORIZONTAL
    health: int = 0
    placed: bool = False

    @property
    def is_sunk(self) -> bool:
        return self.health == 0


Fleet = Dict[str, Ship]


def init_fleet(
    orientations: Optional[Dict[str, Orientation]] = None,
    placed: bool = False,
) -> Fleet:
    """
    Create a fleet at full health.

    Args:
        orientations: Per-ship orientation. Defaults to HUMAN_ORIENTATIONS.
        placed: Whether ships start out placed (computer fleets do).
    """
    if orientations is None:
        orientations = HUMAN_ORIENTATIONS
    return {
        name: Ship(
            name=name,
            size=size,
            orientation=orientations[name],
            health=size,
            placed=placed,
        )
        for name, size in SHIP_SIZES.items()
    }


def remaining_health(fleet: Fleet) -> Dict[str, int]:
    return {name: ship.health for name, ship in fleet.items()}


def decrement_health(fleet: Fleet, ship_id: str) -> Fleet:
    """Take one point of health from a ship, never going below zero."""
    ship = fleet[ship_id]
    if ship.health <= 0:
        return fleet
    updated = dict(fleet)
    updated[ship_id] = replace(ship, health=ship.health - 1)
    return updated


def is_fleet_destroyed(fleet: Fleet) -> bool:
    return all(ship.health == 0 for ship in fleet.values())


def set_orientation(fleet: Fleet, ship_id: str, orientation: Orientation) -> Fleet:
    updated = dict(fleet)
    updated[ship_id] = replace(fleet[ship_id], orientation=orientation)
    return updated


def mark_placed(fleet: Fleet, ship_id: str) -> Fleet:
    updated = dict(fleet)
    updated[ship_id] = replace(fleet[ship_id], placed=True)
    return updated


def all_placed(fleet: Fleet) -> bool:
    return all(ship.placed for ship in fleet.values())


def sunk_ships(fleet: Fleet) -> List[str]:
    return [name for name, ship in fleet.items() if ship.is_sunk]
