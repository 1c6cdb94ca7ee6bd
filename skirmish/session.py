# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Game session for a presentation layer.

GameSession holds the current GameState and applies each command to it
in turn. After the player's shot it schedules the computer's reply
after a short delay so the turn change can be seen. Each scheduled
reply remembers the game generation it belongs to; a reply that fires
after a reset, or when it is no longer the computer's turn, does nothing.
"""

import logging
import random
import threading
import time
from typing import Callable, Dict, List, Optional

from . import engine
from .engine import GameState, Side, Turn

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], object]


def timer_scheduler(delay: float, callback: Callable[[], None]) -> threading.Timer:
    """Run callback on a daemon timer thread after delay seconds."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class _FinishedCall:
    def cancel(self) -> None:
        pass


def blocking_scheduler(delay: float, callback: Callable[[], None]) -> _FinishedCall:
    """Sleep, then run callback on the calling thread."""
    time.sleep(delay)
    callback()
    return _FinishedCall()


class GameSession:
    """
    Mutable holder of one player's Battleship session.

    Args:
        seed: Random seed for computer placement and targeting.
        computer_delay: Seconds before the computer replies. 0 replies at once.
        scheduler: schedule(delay, callback) returning a handle with cancel().
            Defaults to a threading.Timer.
        on_change: Called with the new state after every change.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        computer_delay: float = 1.0,
        scheduler: Optional[Scheduler] = None,
        on_change: Optional[Callable[[GameState], None]] = None,
    ):
        self.seed = seed
        self.rng = random.Random(seed)
        self.computer_delay = computer_delay
        self.state = engine.new_game()
        self.last_computer_result: Optional[Dict] = None
        self._schedule = scheduler or timer_scheduler
        self._on_change = on_change
        self._pending = None
        self._lock = threading.RLock()

    # Queries

    @property
    def turn(self) -> Turn:
        return self.state.turn

    @property
    def wins(self) -> int:
        return self.state.wins

    def all_ships_placed(self) -> bool:
        return engine.all_ships_placed(self.state)

    def winner(self) -> Optional[Side]:
        return engine.winner(self.state)

    def status(self) -> Dict:
        return engine.status(self.state)

    # Commands

    def select_ship(self, ship_id: str) -> Dict:
        with self._lock:
            return self._apply(*engine.select_ship(self.state, ship_id))

    def rotate_selected_ship(self) -> Dict:
        with self._lock:
            return self._apply(*engine.rotate_selected_ship(self.state))

    def attempt_place_selected_ship(self, row: int, col: int) -> Dict:
        with self._lock:
            return self._apply(*engine.attempt_place_selected_ship(self.state, row, col, self.rng))

    def place_remaining_randomly(self) -> None:
        with self._lock:
            self._set_state(engine.place_remaining_randomly(self.state, self.rng))

    def place_human_fleet(self, placements: List[dict]) -> None:
        with self._lock:
            self._set_state(engine.place_human_fleet(self.state, placements, self.rng))

    def human_attack(self, row: int, col: int) -> Dict:
        """Fire at the computer board; schedules the computer's reply."""
        with self._lock:
            result = self._apply(*engine.human_attack(self.state, row, col))
            if result["valid"] and self.state.turn is Turn.COMPUTER:
                self._schedule_computer_move()
            return result

    def reset(self) -> None:
        """Start over, keeping the win counter. A pending computer move is dropped."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self.last_computer_result = None
            self._set_state(engine.reset(self.state))

    # Internals

    def _apply(self, state: GameState, result: Dict) -> Dict:
        if result["valid"]:
            self._set_state(state)
        return result

    def _set_state(self, state: GameState) -> None:
        previous = engine.winner(self.state)
        self.state = state
        current = engine.winner(state)
        if current is not None and current is not previous:
            logger.info(f"Game over: {current.value} wins")
        if self._on_change is not None:
            self._on_change(state)

    def _schedule_computer_move(self) -> None:
        generation = self.state.generation
        if self.computer_delay <= 0:
            self.run_computer_move(generation)
            return
        self._pending = self._schedule(
            self.computer_delay, lambda: self.run_computer_move(generation)
        )

    def run_computer_move(self, generation: int) -> Optional[Dict]:
        """
        Play the computer's shot if it is still wanted.

        Args:
            generation: Game generation the move was scheduled for.

        Returns:
            The attack result, or None if the move was stale.
        """
        with self._lock:
            if generation != self.state.generation or self.state.turn is not Turn.COMPUTER:
                logger.debug(f"Dropped stale computer move (generation {generation})")
                return None
            self._pending = None
            result = self._apply(*engine.computer_attack(self.state, self.rng))
            self.last_computer_result = result
            return result
