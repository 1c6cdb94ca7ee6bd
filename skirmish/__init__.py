# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Battleship skirmish: one human against a randomly playing computer.
"""

from .engine import GameState, Side, Turn, new_game
from .session import GameSession

__all__ = ['GameSession', 'GameState', 'Side', 'Turn', 'new_game']
