# -*- coding: utf-8 -*-
"""
Game state management for 2048.

This module provides the pure state-transition functions (`initialize_game`, `move`, `undo`, ...)
and the `TwentyFortyEight` class, a session that owns the current state.
"""

from .gamestate import (
    GameState,
    GameStatistics,
    MoveResult,
    can_undo,
    continue_after_win,
    create_state_snapshot,
    deserialize_game_state,
    get_available_undos,
    get_game_statistics,
    get_highest_tile_value,
    initialize_game,
    move,
    reset_game,
    reset_game_with_config,
    serialize_game_state,
    undo,
)
from .twentyfortyeight import TwentyFortyEight

__all__ = [
    "GameState",
    "GameStatistics",
    "MoveResult",
    "can_undo",
    "continue_after_win",
    "create_state_snapshot",
    "deserialize_game_state",
    "get_available_undos",
    "get_game_statistics",
    "get_highest_tile_value",
    "initialize_game",
    "move",
    "reset_game",
    "reset_game_with_config",
    "serialize_game_state",
    "undo",
    "TwentyFortyEight",
]
