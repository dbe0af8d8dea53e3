"""
Game state management for 2048: initialization, turns, undo, continuation and serialization.

Every operation returns a new ``GameState``; states are never mutated. Operations that have
nothing to do (a move that slides nothing, an undo without history) return their input.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace

from puzzle2048.config.gameconfig import DEFAULT_GAME_CONFIG, GameConfig, validate_game_config
from puzzle2048.core.gameboard import Grid, RandomSource, clone_grid, create_empty_grid, spawn_random_tile
from puzzle2048.core.gamemove import perform_move
from puzzle2048.core.status import GameStatus, determine_game_status
from puzzle2048.core.tiles import Direction, IdSource, Tile, tile_from_dict
from puzzle2048.errors import ConfigurationError, DeserializationError, GameError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """
    Complete state of a game.

    Attributes
    ----------
    grid : Grid
        The tiles on the board.
    score : int
        Accumulated score.
    status : GameStatus
        Whether the game is being played, won or lost.
    config : GameConfig
        Configuration the game was started with.
    move_count : int
        Number of successful moves.
    previous_states : tuple[GameState, ...]
        Undo history, most recent first, at most ``config.max_undo_states`` long. Entries carry
        no history of their own.
    won_and_continued : bool
        Whether the player kept playing after winning.
    """

    grid: Grid
    score: int
    status: GameStatus
    config: GameConfig
    move_count: int = 0
    previous_states: tuple[GameState, ...] = field(default=())
    won_and_continued: bool = False


@dataclass(frozen=True)
class MoveResult:
    """Outcome of ``move``: the new state, whether it changed, the score gained and merged tiles."""

    new_state: GameState
    moved: bool
    score: int
    merged_tiles: list[Tile] = field(default_factory=list)


@dataclass(frozen=True)
class GameStatistics:
    """Summary of a game state."""

    score: int
    move_count: int
    highest_tile: int
    tile_count: int
    empty_cell_count: int
    status: GameStatus
    can_undo: bool
    available_undos: int


def clone_game_state(state: GameState, include_previous_states: bool = False) -> GameState:
    """
    Deep copy a state.

    Parameters
    ----------
    state : GameState
        The state to copy.
    include_previous_states : bool, optional
        Copy the undo history as well (default is False, which leaves it empty).

    Returns
    -------
    GameState
        A state sharing no grid rows or tiles with ``state``.
    """
    previous_states = ()
    if include_previous_states:
        previous_states = tuple(clone_game_state(previous) for previous in state.previous_states)
    return replace(state, grid=clone_grid(state.grid), previous_states=previous_states)


def initialize_game(
    config: GameConfig = DEFAULT_GAME_CONFIG, random: RandomSource | None = None, next_id: IdSource | None = None
) -> GameState:
    """
    Start a new game with two spawned tiles.

    Parameters
    ----------
    config : GameConfig, optional
        The game configuration (default is a 4x4 grid targeting 2048).
    random : RandomSource, optional
        Source of uniform floats in ``[0, 1)`` for spawning.
    next_id : IdSource, optional
        Identifier source for the spawned tiles.

    Returns
    -------
    GameState
        A playing state with score 0, no moves and no history.

    Raises
    ------
    ConfigurationError
        If the configuration is invalid. Carries every violation.
    GameError
        If an initial tile cannot be placed.
    """
    errors = validate_game_config(config)
    if errors:
        raise ConfigurationError(errors)

    grid = create_empty_grid(config.grid_size)
    for label in ('first', 'second'):
        spawned = spawn_random_tile(grid, config.spawn_values, random, next_id)
        if spawned is None:
            raise GameError(f'Failed to spawn {label} tile')
        grid = spawned

    return GameState(grid=grid, score=0, status=GameStatus.PLAYING, config=config)


def move(
    state: GameState, direction: Direction, random: RandomSource | None = None, next_id: IdSource | None = None
) -> MoveResult:
    """
    Play one turn: slide, merge, spawn a tile and update the status.

    Parameters
    ----------
    state : GameState
        The current state.
    direction : Direction
        The move direction.
    random : RandomSource, optional
        Source of uniform floats in ``[0, 1)`` for spawning.
    next_id : IdSource, optional
        Identifier source for merged and spawned tiles.

    Returns
    -------
    MoveResult
        The new state with the score gained and the merged tiles. When the game is lost or nothing
        slides, ``new_state`` is ``state`` itself and ``moved`` is False.

    Notes
    -----
    - The pre-move state is cloned (without its own history) to the front of the undo history,
      which is trimmed to ``config.max_undo_states``.
    - A won game can keep being played: the status stays WON.
    """
    unchanged = MoveResult(new_state=state, moved=False, score=0)
    if state.status == GameStatus.LOST:
        return unchanged

    outcome = perform_move(state.grid, direction, next_id)
    if not outcome.moved:
        logger.debug('Move %s rejected: no tile can slide', Direction(direction).value)
        return unchanged

    grid = spawn_random_tile(outcome.grid, state.config.spawn_values, random, next_id)
    if grid is None:
        logger.warning('No empty cell to spawn a tile after moving %s', Direction(direction).value)
        return unchanged

    status = determine_game_status(grid, state.config.target_value, state.status, state.won_and_continued)
    previous_states = (clone_game_state(state),) + state.previous_states
    new_state = replace(
        state,
        grid=grid,
        score=state.score + outcome.score,
        status=status,
        move_count=state.move_count + 1,
        previous_states=previous_states[: state.config.max_undo_states],
    )
    return MoveResult(new_state=new_state, moved=True, score=outcome.score, merged_tiles=outcome.merged_tiles)


def undo(state: GameState) -> GameState:
    """Restore the most recent history entry, keeping the remaining history."""
    if not state.previous_states:
        return state
    return replace(state.previous_states[0], previous_states=state.previous_states[1:])


def reset_game(state: GameState, random: RandomSource | None = None, next_id: IdSource | None = None) -> GameState:
    """Start over with the same configuration."""
    return initialize_game(state.config, random, next_id)


def reset_game_with_config(
    config: GameConfig, random: RandomSource | None = None, next_id: IdSource | None = None
) -> GameState:
    """Start over with a new configuration."""
    return initialize_game(config, random, next_id)


def continue_after_win(state: GameState) -> GameState:
    """Keep playing after a win. Does nothing unless the game is won."""
    if state.status != GameStatus.WON:
        return state
    return replace(state, status=GameStatus.PLAYING, won_and_continued=True)


def can_undo(state: GameState) -> bool:
    return bool(state.previous_states)


def get_available_undos(state: GameState) -> int:
    return len(state.previous_states)


def get_highest_tile_value(state: GameState) -> int:
    """Highest tile value on the board, 0 for an empty board."""
    return max((tile.value for row in state.grid for tile in row if tile is not None), default=0)


def get_game_statistics(state: GameState) -> GameStatistics:
    tile_count = sum(tile is not None for row in state.grid for tile in row)
    return GameStatistics(
        score=state.score,
        move_count=state.move_count,
        highest_tile=get_highest_tile_value(state),
        tile_count=tile_count,
        empty_cell_count=len(state.grid) ** 2 - tile_count,
        status=state.status,
        can_undo=can_undo(state),
        available_undos=get_available_undos(state),
    )


def create_state_snapshot(state: GameState) -> GameState:
    """Deep copy a state including its undo history."""
    return clone_game_state(state, include_previous_states=True)


# ##: Serialization.


def game_state_to_dict(state: GameState) -> dict:
    """Plain representation of a state, history included."""
    return {
        'grid': [[tile.to_dict() if tile is not None else None for tile in row] for row in state.grid],
        'score': state.score,
        'status': state.status.value,
        'config': state.config.to_dict(),
        'move_count': state.move_count,
        'previous_states': [game_state_to_dict(previous) for previous in state.previous_states],
        'won_and_continued': state.won_and_continued,
    }


def serialize_game_state(state: GameState) -> str:
    """Serialize a state to JSON text."""
    return json.dumps(game_state_to_dict(state))


def _parse_config(data: dict) -> GameConfig:
    if 'config' not in data or data['config'] is None:
        raise DeserializationError('missing config')
    try:
        config = GameConfig.from_dict(data['config'])
    except (KeyError, TypeError) as error:
        raise DeserializationError(f'malformed config ({error})') from error

    errors = validate_game_config(config)
    if errors:
        raise DeserializationError(f"invalid config: {', '.join(errors)}")
    return config


def _parse_grid(data: dict, size: int) -> Grid:
    rows = data.get('grid')
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise DeserializationError('missing or invalid grid')
    if len(rows) != size or any(len(row) != size for row in rows):
        raise DeserializationError(f'grid does not match the configured size {size}')

    grid = create_empty_grid(size)
    for row_index, row in enumerate(rows):
        for col_index, cell in enumerate(row):
            if cell is None:
                continue
            try:
                tile = tile_from_dict(cell)
            except (KeyError, TypeError, ValueError) as error:
                raise DeserializationError(f'malformed tile at ({row_index}, {col_index}): {error}') from error
            if tile.position != (row_index, col_index):
                raise DeserializationError(f'tile position does not match its cell ({row_index}, {col_index})')
            grid[row_index][col_index] = tile
    return grid


def _parse_game_state(data) -> GameState:
    if not isinstance(data, dict):
        raise DeserializationError('game state must be an object')

    config = _parse_config(data)
    grid = _parse_grid(data, config.grid_size)

    score = data.get('score')
    if isinstance(score, bool) or not isinstance(score, int) or score < 0:
        raise DeserializationError('missing or invalid score')

    try:
        status = GameStatus(data.get('status', GameStatus.PLAYING.value))
    except (TypeError, ValueError) as error:
        raise DeserializationError(f"invalid status {data.get('status')!r}") from error

    move_count = data.get('move_count', 0)
    if isinstance(move_count, bool) or not isinstance(move_count, int) or move_count < 0:
        raise DeserializationError('invalid move count')

    won_and_continued = data.get('won_and_continued', False)
    if not isinstance(won_and_continued, bool):
        raise DeserializationError('invalid won_and_continued flag')

    previous_states = data.get('previous_states', [])
    if not isinstance(previous_states, list):
        raise DeserializationError('invalid history')

    return GameState(
        grid=grid,
        score=score,
        status=status,
        config=config,
        move_count=move_count,
        previous_states=tuple(_parse_game_state(previous) for previous in previous_states),
        won_and_continued=won_and_continued,
    )


def deserialize_game_state(text: str) -> GameState:
    """
    Rebuild a state from JSON text produced by ``serialize_game_state``.

    Parameters
    ----------
    text : str
        The serialized state.

    Returns
    -------
    GameState
        The restored state, history included.

    Raises
    ------
    DeserializationError
        If the text is not JSON or violates a structural invariant: missing grid, non-numeric
        score, missing config, invalid config, and so on. Values are never coerced.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as error:
        raise DeserializationError(f'invalid JSON ({error})') from error
    return _parse_game_state(data)
