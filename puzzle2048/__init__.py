"""2048 sliding-tile puzzle engine."""

from .config import DEFAULT_GAME_CONFIG, GameConfig, SpawnConfig, validate_game_config
from .core import Cell, Direction, GameStatus, Tile, TileIdGenerator
from .envs import (
    GameState,
    GameStatistics,
    MoveResult,
    TwentyFortyEight,
    continue_after_win,
    deserialize_game_state,
    get_game_statistics,
    initialize_game,
    move,
    reset_game,
    reset_game_with_config,
    serialize_game_state,
    undo,
)
from .errors import ConfigurationError, DeserializationError, GameError, StorageError

__all__ = [
    "DEFAULT_GAME_CONFIG",
    "GameConfig",
    "SpawnConfig",
    "validate_game_config",
    "Cell",
    "Direction",
    "GameStatus",
    "Tile",
    "TileIdGenerator",
    "GameState",
    "GameStatistics",
    "MoveResult",
    "TwentyFortyEight",
    "continue_after_win",
    "deserialize_game_state",
    "get_game_statistics",
    "initialize_game",
    "move",
    "reset_game",
    "reset_game_with_config",
    "serialize_game_state",
    "undo",
    "ConfigurationError",
    "DeserializationError",
    "GameError",
    "StorageError",
]
