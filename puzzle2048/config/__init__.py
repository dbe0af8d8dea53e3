# -*- coding: utf-8 -*-
"""
Game configuration: defaults, structural validation and URL-hash sharing.
"""

from .gameconfig import (
    DEFAULT_GAME_CONFIG,
    DEFAULT_SPAWN_VALUES,
    GameConfig,
    SpawnConfig,
    is_power_of_two,
    validate_game_config,
)
from .urlconfig import (
    VALID_GRID_SIZES,
    VALID_TARGET_VALUES,
    merge_config_with_hash,
    parse_config_from_hash,
    parse_spawn_values,
    serialize_config_to_hash,
)

__all__ = [
    "DEFAULT_GAME_CONFIG",
    "DEFAULT_SPAWN_VALUES",
    "GameConfig",
    "SpawnConfig",
    "is_power_of_two",
    "validate_game_config",
    "VALID_GRID_SIZES",
    "VALID_TARGET_VALUES",
    "merge_config_with_hash",
    "parse_config_from_hash",
    "parse_spawn_values",
    "serialize_config_to_hash",
]
