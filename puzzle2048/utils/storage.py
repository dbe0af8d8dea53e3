"""
File-backed persistence for game states, high scores and game statistics.

Each key is stored as one JSON document in a directory. A corrupt saved game is discarded rather
than surfaced: callers fall back to a fresh game.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass, replace
from math import floor
from pathlib import Path

from puzzle2048.config.gameconfig import DEFAULT_GAME_CONFIG, GameConfig
from puzzle2048.core.gameboard import RandomSource
from puzzle2048.core.status import GameStatus
from puzzle2048.envs.gamestate import GameState, deserialize_game_state, initialize_game, serialize_game_state
from puzzle2048.errors import DeserializationError, StorageError, StorageErrorType

logger = logging.getLogger(__name__)

# ##>: Storage keys.
STORAGE_PREFIX = '2048_'
GAME_STATE_KEY = f'{STORAGE_PREFIX}game_state'
HIGH_SCORES_KEY = f'{STORAGE_PREFIX}high_scores'
GAME_STATS_KEY = f'{STORAGE_PREFIX}game_stats'


@dataclass(frozen=True)
class HighScoreEntry:
    """Best result recorded for one grid size and target value."""

    score: int
    target_value: int
    grid_size: int
    move_count: int
    timestamp: float


@dataclass(frozen=True)
class GameStats:
    """
    Totals over every finished game.

    Attributes
    ----------
    total_games : int
        Number of games that ended, won or lost.
    wins : int
        Games that reached their target.
    losses : int
        Games that ran out of moves.
    best_score : int
        Highest score of any finished game.
    total_score : int
        Sum of the scores of finished games.
    average_score : int
        ``total_score / total_games``, rounded.
    total_moves : int
        Sum of the move counts of finished games.
    average_moves : int
        ``total_moves / total_games``, rounded.
    last_played : float
        Time the last game ended, in seconds since the epoch. 0 when no game ended yet.
    """

    total_games: int = 0
    wins: int = 0
    losses: int = 0
    best_score: int = 0
    total_score: int = 0
    average_score: int = 0
    total_moves: int = 0
    average_moves: int = 0
    last_played: float = 0.0


def high_score_key(grid_size: int, target_value: int) -> str:
    return f'{grid_size}_{target_value}'


class GameStorage:
    """
    Key-value store of JSON documents under a directory.

    Parameters
    ----------
    directory : str | Path
        Where documents are written. Created on first write.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f'{key}.json'

    def _write(self, key: str, text: str) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._path(key).write_text(text, encoding='utf-8')
        except OSError as error:
            raise StorageError(StorageErrorType.NOT_AVAILABLE, f'Failed to save {key}: {error}') from error

    def _read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except OSError as error:
            raise StorageError(StorageErrorType.NOT_AVAILABLE, f'Failed to read {key}: {error}') from error

    def _remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as error:
            raise StorageError(StorageErrorType.NOT_AVAILABLE, f'Failed to remove {key}: {error}') from error

    # ##: Game state.

    def save_game_state(self, state: GameState) -> None:
        self._write(GAME_STATE_KEY, serialize_game_state(state))

    def load_game_state(self) -> GameState | None:
        """
        Load the saved game.

        Returns
        -------
        GameState | None
            The saved game, or None when nothing is saved or the saved blob is corrupt. A corrupt
            blob is deleted.
        """
        text = self._read(GAME_STATE_KEY)
        if text is None:
            return None
        try:
            return deserialize_game_state(text)
        except DeserializationError as error:
            logger.warning('Discarding saved game: %s', error)
            self.clear_game_state()
            return None

    def load_or_initialize(
        self, config: GameConfig = DEFAULT_GAME_CONFIG, random: RandomSource | None = None
    ) -> GameState:
        """Resume the saved game if it was played with the same grid size and target, else start one."""
        saved = self.load_game_state()
        if (
            saved is not None
            and saved.config.grid_size == config.grid_size
            and saved.config.target_value == config.target_value
        ):
            return saved
        return initialize_game(config, random)

    def clear_game_state(self) -> None:
        self._remove(GAME_STATE_KEY)

    def has_saved_game_state(self) -> bool:
        return self._path(GAME_STATE_KEY).exists()

    # ##: High scores.

    def load_high_scores(self) -> dict[str, HighScoreEntry]:
        text = self._read(HIGH_SCORES_KEY)
        if text is None:
            return {}
        try:
            return {key: HighScoreEntry(**entry) for key, entry in json.loads(text).items()}
        except (AttributeError, TypeError, ValueError) as error:
            raise StorageError(StorageErrorType.PARSE_ERROR, f'Failed to parse stored high scores: {error}') from error

    def save_high_score(self, entry: HighScoreEntry) -> bool:
        """
        Record ``entry`` if it beats the stored score for its configuration.

        Returns
        -------
        bool
            Whether the entry was recorded.
        """
        high_scores = self.load_high_scores()
        key = high_score_key(entry.grid_size, entry.target_value)
        existing = high_scores.get(key)
        if existing is not None and entry.score <= existing.score:
            return False

        high_scores[key] = entry
        self._write(HIGH_SCORES_KEY, json.dumps({k: asdict(v) for k, v in high_scores.items()}))
        logger.info('New high score %d for %s', entry.score, key)
        return True

    def record_game(self, state: GameState) -> bool:
        """
        Record a game that left PLAYING.

        The score is a high score candidate. A WON or LOST state also updates the game statistics,
        as a win or a loss respectively.

        Returns
        -------
        bool
            Whether the score was recorded as a new high score.
        """
        if state.status != GameStatus.PLAYING:
            self.update_stats_after_game(state.score, state.move_count, state.status == GameStatus.WON)
        return self.save_high_score(
            HighScoreEntry(
                score=state.score,
                target_value=state.config.target_value,
                grid_size=state.config.grid_size,
                move_count=state.move_count,
                timestamp=time.time(),
            )
        )

    def get_high_score(self, grid_size: int, target_value: int) -> HighScoreEntry | None:
        return self.load_high_scores().get(high_score_key(grid_size, target_value))

    def get_all_high_scores(self) -> list[HighScoreEntry]:
        """Every recorded high score, best first."""
        return sorted(self.load_high_scores().values(), key=lambda entry: entry.score, reverse=True)

    def clear_high_scores(self) -> None:
        self._remove(HIGH_SCORES_KEY)

    # ##: Game statistics.

    def load_stats(self) -> GameStats:
        """Stored statistics, or empty ones when nothing is stored."""
        text = self._read(GAME_STATS_KEY)
        if text is None:
            return GameStats()
        try:
            return GameStats(**json.loads(text))
        except (TypeError, ValueError) as error:
            raise StorageError(StorageErrorType.PARSE_ERROR, f'Failed to parse stored statistics: {error}') from error

    def save_stats(self, stats: GameStats) -> None:
        self._write(GAME_STATS_KEY, json.dumps(asdict(stats)))

    def update_stats_after_game(self, score: int, moves: int, is_win: bool) -> GameStats:
        """
        Add a finished game to the statistics.

        Parameters
        ----------
        score : int
            Final score of the game.
        moves : int
            Number of moves played.
        is_win : bool
            Whether the game was won. Otherwise it counts as a loss.

        Returns
        -------
        GameStats
            The updated statistics, already saved.
        """
        stats = self.load_stats()
        total_games = stats.total_games + 1
        total_score = stats.total_score + score
        total_moves = stats.total_moves + moves

        # ##>: Averages round half up.
        stats = replace(
            stats,
            total_games=total_games,
            wins=stats.wins + int(is_win),
            losses=stats.losses + int(not is_win),
            best_score=max(stats.best_score, score),
            total_score=total_score,
            average_score=floor(total_score / total_games + 0.5),
            total_moves=total_moves,
            average_moves=floor(total_moves / total_games + 0.5),
            last_played=time.time(),
        )
        self.save_stats(stats)
        logger.debug('Game recorded as a %s, %d games played', 'win' if is_win else 'loss', total_games)
        return stats

    def reset_stats(self) -> None:
        self.save_stats(GameStats())

    def clear_all(self) -> None:
        for key in (GAME_STATE_KEY, HIGH_SCORES_KEY, GAME_STATS_KEY):
            self._remove(key)
