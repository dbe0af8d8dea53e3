"""
Value types shared by the engine: cells, tiles, directions and tile identifiers.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import Callable, NamedTuple
from uuid import uuid4

from puzzle2048.config.gameconfig import is_power_of_two

logger = logging.getLogger(__name__)

# ##>: Zero-argument callable returning a fresh tile identifier.
IdSource = Callable[[], str]


class Direction(str, Enum):
    """The four directions a move can take."""

    UP = 'UP'
    DOWN = 'DOWN'
    LEFT = 'LEFT'
    RIGHT = 'RIGHT'

    @property
    def vector(self) -> tuple[int, int]:
        """Unit step ``(d_row, d_col)`` toward the edge the tiles slide to."""
        return _VECTORS[self]


_VECTORS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class Cell(NamedTuple):
    """A grid coordinate, 0-indexed."""

    row: int
    col: int


@dataclass(frozen=True)
class Tile:
    """
    A numbered piece occupying one cell.

    Attributes
    ----------
    id : str
        Identifier unique across the lifetime of the generator that produced it.
    value : int
        Tile value, a power of two.
    position : Cell
        Current location in the grid.
    merged_from : tuple[Tile, Tile] | None
        The two source tiles consumed to produce this tile during the current turn, with their
        pre-move positions. Provenance only.
    """

    id: str
    value: int
    position: Cell
    merged_from: tuple[Tile, ...] | None = None

    def to_dict(self) -> dict:
        """Plain representation used by serialization."""
        data = {'id': self.id, 'value': self.value, 'position': {'row': self.position.row, 'col': self.position.col}}
        if self.merged_from is not None:
            data['merged_from'] = [source.to_dict() for source in self.merged_from]
        return data


class TileIdGenerator:
    """
    Thread-safe monotonic tile identifier source.

    Identifiers take the form ``"<prefix>-<n>"``. Instances are callable so they can be passed
    wherever an ``IdSource`` is expected.

    Parameters
    ----------
    start : int, optional
        First counter value (default is 0).
    prefix : str, optional
        Identifier prefix (default is ``'tile'``).
    """

    def __init__(self, start: int = 0, prefix: str = 'tile'):
        self._prefix = prefix
        self._lock = threading.Lock()
        self._counter = count(start)

    def __call__(self) -> str:
        with self._lock:
            return f'{self._prefix}-{next(self._counter)}'

    def reset(self, start: int = 0) -> None:
        """Restart the counter. Only meant for tests and fresh processes."""
        with self._lock:
            self._counter = count(start)
        logger.debug('Tile id counter reset to %d', start)


# ##>: Process-wide default, used when no generator is injected. Its prefix is random per process
# ##>: so ids never repeat those of a game saved by another process.
DEFAULT_ID_GENERATOR = TileIdGenerator(prefix=f'tile-{uuid4().hex[:12]}')


def generate_tile_id() -> str:
    """Return a new identifier from the process-wide generator."""
    return DEFAULT_ID_GENERATOR()


def create_tile(
    position: Cell, value: int, next_id: IdSource | None = None, merged_from: tuple[Tile, ...] | None = None
) -> Tile:
    """Create a fresh tile with a new identifier."""
    next_id = next_id or DEFAULT_ID_GENERATOR
    return Tile(id=next_id(), value=value, position=Cell(*position), merged_from=merged_from)


def tile_from_dict(data: dict) -> Tile:
    """
    Rebuild a tile from its plain representation.

    Raises ``KeyError``, ``TypeError`` or ``ValueError`` on malformed input; callers translate
    these into their own error type.
    """
    if not isinstance(data, dict):
        raise TypeError('tile must be an object')
    tile_id = data['id']
    if not isinstance(tile_id, str):
        raise TypeError(f'tile id must be a string, got {tile_id!r}')
    value = data['value']
    if not is_power_of_two(value):
        raise ValueError(f'tile value must be a power of two, got {value!r}')
    position = data['position']
    row, col = position['row'], position['col']
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (row, col)):
        raise ValueError('tile position must hold integer coordinates')

    merged_from = data.get('merged_from')
    if merged_from is not None:
        merged_from = tuple(tile_from_dict(source) for source in merged_from)
    return Tile(id=tile_id, value=value, position=Cell(row, col), merged_from=merged_from)
