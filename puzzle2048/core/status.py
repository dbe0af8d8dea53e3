"""
Win and loss detection.
"""

from enum import Enum

from numpy import any as np_any

from puzzle2048.core.gameboard import Grid, board_values, get_all_tiles


class GameStatus(str, Enum):
    """Status of a game."""

    PLAYING = 'PLAYING'
    WON = 'WON'
    LOST = 'LOST'


def has_won(grid: Grid, target_value: int) -> bool:
    """Check whether any tile reached ``target_value``."""
    return any(tile.value >= target_value for tile in get_all_tiles(grid))


def has_moves_available(grid: Grid) -> bool:
    """
    Check whether any move is still possible.

    Parameters
    ----------
    grid : Grid
        The grid to inspect.

    Returns
    -------
    bool
        False only when the grid is full and no two orthogonally adjacent tiles share a value.
    """
    values = board_values(grid)
    if not values.all():
        return True
    return bool(np_any(values[:-1] == values[1:]) or np_any(values[:, :-1] == values[:, 1:]))


def determine_game_status(
    grid: Grid, target_value: int, current_status: GameStatus, won_and_continued: bool = False
) -> GameStatus:
    """
    Compute the status after a turn.

    Parameters
    ----------
    grid : Grid
        The grid after the turn.
    target_value : int
        Tile value that wins the game.
    current_status : GameStatus
        The status before the turn.
    won_and_continued : bool, optional
        Whether the player chose to keep playing after winning (default is False).

    Returns
    -------
    GameStatus
        The new status.

    Notes
    -----
    - WON is sticky: once won, the status stays WON until the game is reset.
    - After continuing past a win, WON is never evaluated again but LOST still is, so a continued
      game that runs out of moves is lost.
    """
    if current_status == GameStatus.WON:
        return GameStatus.WON

    if not won_and_continued and has_won(grid, target_value):
        return GameStatus.WON

    if not has_moves_available(grid):
        return GameStatus.LOST

    return GameStatus.PLAYING
