"""Stateful 2048 session owning the current game state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from numpy import ndarray

from puzzle2048.config.gameconfig import DEFAULT_GAME_CONFIG, GameConfig
from puzzle2048.core.gameboard import board_values, seeded_random
from puzzle2048.core.status import GameStatus
from puzzle2048.core.tiles import Direction
from puzzle2048.envs.gamestate import (
    GameState,
    GameStatistics,
    continue_after_win,
    get_game_statistics,
    initialize_game,
    move,
    undo,
)
from puzzle2048.errors import StorageError

if TYPE_CHECKING:
    from puzzle2048.utils.storage import GameStorage

logger = logging.getLogger(__name__)


class TwentyFortyEight:
    """
    2048 game session.

    This class holds the single current ``GameState`` and advances it through the pure
    operations of ``puzzle2048.envs.gamestate``. It optionally saves every new state and records
    high scores through a ``GameStorage``.
    """

    # ##: All Actions.
    ACTIONS = {'left': Direction.LEFT, 'up': Direction.UP, 'right': Direction.RIGHT, 'down': Direction.DOWN}

    def __init__(
        self, config: GameConfig = DEFAULT_GAME_CONFIG, seed: int | None = None, storage: GameStorage | None = None
    ):
        """
        Initialize the session.

        Parameters
        ----------
        config : GameConfig, optional
            The game configuration (default is a 4x4 grid targeting 2048).
        seed : int, optional
            Random number generator seed for reproducibility.
        storage : GameStorage, optional
            When given, a saved game with the same grid size and target is resumed along with its
            configuration, and every new state is saved.
        """
        self.config = config
        self._storage = storage
        self._random = seeded_random(seed)
        self._reward = 0

        if storage is not None:
            self._state = storage.load_or_initialize(config, self._random)
            self.config = self._state.config
            self._save()
        else:
            self.reset(seed)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_finished(self) -> bool:
        """True once no move is possible."""
        return self._state.status == GameStatus.LOST

    @property
    def observation(self) -> ndarray:
        """
        Get the current board as tile values.

        Returns
        -------
        ndarray
            An ``int64`` matrix with 0 for empty cells.
        """
        return board_values(self._state.grid)

    @property
    def reward(self) -> int:
        """Score gained by the last step."""
        return self._reward

    @property
    def statistics(self) -> GameStatistics:
        return get_game_statistics(self._state)

    def _save(self) -> None:
        if self._storage is not None:
            self._storage.save_game_state(self._state)

    def _commit(self, state: GameState) -> None:
        finished = self._state.status == GameStatus.PLAYING and state.status != GameStatus.PLAYING
        self._state = state
        self._save()
        if finished and self._storage is not None:
            try:
                self._storage.record_game(state)
            except StorageError as error:
                logger.warning('Failed to record finished game: %s', error)

    def reset(self, seed: int | None = None, config: GameConfig | None = None) -> ndarray:
        """
        Start a new game, optionally with a new configuration.

        Returns
        -------
        ndarray
            The new board.
        """
        if seed is not None:
            self._random = seeded_random(seed)
        if config is not None:
            self.config = config
        self._state = initialize_game(self.config, self._random)
        self._reward = 0
        self._save()
        return self.observation

    def step(self, action: str | Direction) -> tuple[ndarray, int, bool]:
        """
        Apply the selected action to the board.

        Parameters
        ----------
        action : str | Direction
            An action name from ``ACTIONS`` or a ``Direction``.

        Returns
        -------
        tuple[ndarray, int, bool]
            The board, the score gained by this action and whether the game is over.
        """
        direction = self.ACTIONS[action] if action in self.ACTIONS else Direction(action)
        result = move(self._state, direction, self._random)
        self._reward = result.score
        if result.moved:
            self._commit(result.new_state)
        return self.observation, self.reward, self.is_finished

    def undo(self) -> ndarray:
        self._reward = 0
        self._commit(undo(self._state))
        return self.observation

    def continue_after_win(self) -> None:
        self._commit(continue_after_win(self._state))

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        for row in self.observation.tolist():
            print(' \t'.join(map(str, row)))
