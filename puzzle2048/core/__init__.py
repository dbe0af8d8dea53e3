# -*- coding: utf-8 -*-
"""
This module provides the rule engine of the 2048 game.

It includes grid primitives, weighted tile spawning, the slide-and-merge move engine and the
win/loss evaluation.
"""

from .gameboard import (
    Grid,
    RandomSource,
    board_values,
    clone_grid,
    create_empty_grid,
    get_all_tiles,
    get_empty_cells,
    grid_from_values,
    seeded_random,
    select_spawn_value,
    spawn_random_tile,
)
from .gamemove import MoveOutcome, can_move, illegal_directions, legal_directions, perform_move
from .status import GameStatus, determine_game_status, has_moves_available, has_won
from .tiles import Cell, Direction, Tile, TileIdGenerator, create_tile, generate_tile_id

__all__ = [
    "Grid",
    "RandomSource",
    "board_values",
    "clone_grid",
    "create_empty_grid",
    "get_all_tiles",
    "get_empty_cells",
    "grid_from_values",
    "seeded_random",
    "select_spawn_value",
    "spawn_random_tile",
    "MoveOutcome",
    "can_move",
    "illegal_directions",
    "legal_directions",
    "perform_move",
    "GameStatus",
    "determine_game_status",
    "has_moves_available",
    "has_won",
    "Cell",
    "Direction",
    "Tile",
    "TileIdGenerator",
    "create_tile",
    "generate_tile_id",
]
