# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for GameSession and the deferred computer move.
"""

import sys
import threading
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from skirmish.engine import Turn
from skirmish.grid import count_marked, occupied_cells
from skirmish.session import GameSession, blocking_scheduler

HUMAN_LAYOUT = [
    {"name": "carrier", "start": "A1", "horizontal": True},
    {"name": "cruiser", "start": "B1", "horizontal": True},
    {"name": "submarine", "start": "C1", "horizontal": True},
    {"name": "boat", "start": "D1", "horizontal": True},
]


class ScheduledCall:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # Runs even when cancelled, like a timer that already fired.
        return self.callback()


class ManualScheduler:
    """Collects scheduled calls so tests decide when they fire."""

    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        call = ScheduledCall(delay, callback)
        self.calls.append(call)
        return call


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def session(scheduler):
    session = GameSession(seed=42, computer_delay=1.0, scheduler=scheduler)
    session.place_human_fleet(HUMAN_LAYOUT)
    return session


def empty_cell(session):
    for row in range(10):
        for col in range(10):
            if session.state.computer_board[row][col] is None:
                return row, col
    pytest.fail("No empty cells found")


def computer_shots(session):
    return count_marked(session.state.computer_hits) + count_marked(session.state.computer_misses)


class TestGameSession:
    """Tests for session commands."""

    def test_new_session(self):
        """Test a fresh session is in the placement phase."""
        session = GameSession(seed=1, scheduler=ManualScheduler())
        assert session.turn is Turn.NONE
        assert session.wins == 0
        assert not session.all_ships_placed()
        assert session.winner() is None

    def test_interactive_placement(self, scheduler):
        """Test selecting, rotating and placing through the session."""
        session = GameSession(seed=1, scheduler=scheduler)
        session.select_ship("carrier")
        session.rotate_selected_ship()
        result = session.attempt_place_selected_ship(0, 0)
        assert result["result"] == "placed"
        assert occupied_cells(session.state.human_board, "carrier") == [(r, 0) for r in range(5)]

        session.select_ship("cruiser")
        result = session.attempt_place_selected_ship(0, 0)
        assert result["result"] == "invalid"
        assert not session.state.human_fleet["cruiser"].placed

    def test_placing_all_ships_starts_battle(self, session):
        """Test the scripted fleet puts the session in the player's turn."""
        assert session.all_ships_placed()
        assert session.turn is Turn.PLAYER
        assert len(occupied_cells(session.state.computer_board)) == 14

    def test_seeded_sessions_repeat(self, scheduler):
        """Test the same seed produces the same computer board."""
        first = GameSession(seed=7, scheduler=scheduler)
        second = GameSession(seed=7, scheduler=scheduler)
        first.place_human_fleet(HUMAN_LAYOUT)
        second.place_human_fleet(HUMAN_LAYOUT)
        assert first.state.computer_board == second.state.computer_board

    def test_on_change_listener(self, scheduler):
        """Test the listener sees every state change."""
        seen = []
        session = GameSession(seed=3, scheduler=scheduler, on_change=seen.append)
        session.select_ship("boat")
        session.attempt_place_selected_ship(0, 0)
        assert len(seen) == 2
        assert seen[-1] is session.state

    def test_rejected_command_keeps_state(self, session):
        """Test a rejected attack leaves the session untouched."""
        state = session.state
        result = session.human_attack(12, 0)
        assert result["result"] == "invalid"
        assert session.state is state


class TestComputerMove:
    """Tests for the deferred computer move."""

    def test_attack_schedules_computer_move(self, session, scheduler):
        """Test the player's shot schedules one delayed computer reply."""
        row, col = empty_cell(session)
        result = session.human_attack(row, col)
        assert result["result"] == "miss"
        assert session.turn is Turn.COMPUTER
        assert len(scheduler.calls) == 1
        assert scheduler.calls[0].delay == 1.0
        assert computer_shots(session) == 0

        reply = scheduler.calls[0].fire()
        assert reply["valid"] is True
        assert session.last_computer_result is reply
        assert session.turn is Turn.PLAYER
        assert computer_shots(session) == 1

    def test_ignored_attack_schedules_nothing(self, session, scheduler):
        """Test an out-of-turn shot does not schedule a reply."""
        row, col = empty_cell(session)
        session.human_attack(row, col)
        session.human_attack(row, col)
        assert len(scheduler.calls) == 1

    def test_reset_cancels_pending_move(self, session, scheduler):
        """Test a reply that fires after reset changes nothing."""
        row, col = empty_cell(session)
        session.human_attack(row, col)
        session.reset()

        call = scheduler.calls[0]
        assert call.cancelled
        assert call.fire() is None
        assert session.turn is Turn.NONE
        assert computer_shots(session) == 0
        assert len(session.state.target_pool) == 100

    def test_stale_move_from_previous_game(self, session, scheduler):
        """Test an old reply cannot act on a new game in the computer's turn."""
        row, col = empty_cell(session)
        session.human_attack(row, col)
        stale = scheduler.calls[0]

        session.reset()
        session.place_human_fleet(HUMAN_LAYOUT)
        row, col = empty_cell(session)
        session.human_attack(row, col)
        assert session.turn is Turn.COMPUTER

        assert stale.fire() is None
        assert computer_shots(session) == 0
        assert scheduler.calls[1].fire()["valid"] is True
        assert computer_shots(session) == 1

    def test_move_fired_twice(self, session, scheduler):
        """Test a reply only acts while it is the computer's turn."""
        row, col = empty_cell(session)
        session.human_attack(row, col)
        call = scheduler.calls[0]
        call.fire()
        assert call.fire() is None
        assert computer_shots(session) == 1

    def test_zero_delay_replies_at_once(self, scheduler):
        """Test a zero delay plays the computer's move immediately."""
        session = GameSession(seed=42, computer_delay=0, scheduler=scheduler)
        session.place_human_fleet(HUMAN_LAYOUT)
        row, col = empty_cell(session)
        session.human_attack(row, col)
        assert scheduler.calls == []
        assert session.turn is Turn.PLAYER
        assert computer_shots(session) == 1

    def test_timer_fires_computer_move(self):
        """Test the default timer plays the computer's reply on its own thread."""
        session = GameSession(seed=42, computer_delay=0.2)
        session.place_human_fleet(HUMAN_LAYOUT)
        row, col = empty_cell(session)
        session.human_attack(row, col)

        timer = session._pending
        assert isinstance(timer, threading.Timer)
        assert timer.daemon
        timer.join(timeout=2.0)

        assert not timer.is_alive()
        assert session.turn is Turn.PLAYER
        assert computer_shots(session) == 1
        assert session.last_computer_result["valid"] is True

    def test_reset_cancels_timer(self):
        """Test reset stops the default timer before the reply is played."""
        session = GameSession(seed=42, computer_delay=0.5)
        session.place_human_fleet(HUMAN_LAYOUT)
        row, col = empty_cell(session)
        session.human_attack(row, col)

        timer = session._pending
        session.reset()
        timer.join(timeout=2.0)

        assert not timer.is_alive()
        assert session.turn is Turn.NONE
        assert computer_shots(session) == 0
        assert len(session.state.target_pool) == 100

    def test_blocking_scheduler(self):
        """Test the blocking scheduler runs the reply before returning."""
        session = GameSession(seed=42, computer_delay=0.01, scheduler=blocking_scheduler)
        session.place_human_fleet(HUMAN_LAYOUT)
        row, col = empty_cell(session)
        session.human_attack(row, col)
        assert session.turn is Turn.PLAYER
        assert computer_shots(session) == 1

    def test_full_game_to_victory(self, session, scheduler):
        """Test a whole game through the session ends in a recorded win."""
        targets = occupied_cells(session.state.computer_board)
        for row, col in targets:
            result = session.human_attack(row, col)
            assert result["result"] == "hit"
            scheduler.calls[-1].fire()
        assert session.winner().value == "human"
        assert session.wins == 1
        assert session.status()["winner"] == "human"

        session.reset()
        assert session.wins == 1
        assert session.turn is Turn.NONE


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
