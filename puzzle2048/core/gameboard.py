"""
Grid primitives and tile spawning for the 2048 engine.

A grid is a square ``list[list[Tile | None]]``. ``None`` is the only representation of an empty
cell. Every function here treats its input grid as read-only.
"""

from math import floor
from typing import Callable, Optional, Sequence

from numpy import int64, ndarray, zeros
from numpy.random import PCG64DXSM, default_rng

from puzzle2048.config.gameconfig import SpawnConfig
from puzzle2048.core.tiles import Cell, IdSource, Tile, create_tile

# ##>: Type aliases.
Grid = list[list[Optional[Tile]]]
RandomSource = Callable[[], float]

# ##>: Module-level generator, used when no random source is injected.
_GENERATOR = default_rng(PCG64DXSM())


def default_random() -> float:
    """Draw a uniform float in ``[0, 1)`` from the module-level generator."""
    return float(_GENERATOR.random())


def seeded_random(seed: int | None = None) -> RandomSource:
    """
    Build an independent random source.

    Parameters
    ----------
    seed : int, optional
        Seed for reproducibility.

    Returns
    -------
    RandomSource
        A zero-argument callable returning floats in ``[0, 1)``.
    """
    generator = default_rng(PCG64DXSM(seed))
    return lambda: float(generator.random())


def create_empty_grid(size: int) -> Grid:
    """Create a ``size x size`` grid of empty cells with independent rows."""
    return [[None] * size for _ in range(size)]


def grid_from_values(values: Sequence[Sequence[Optional[int]]], next_id: IdSource | None = None) -> Grid:
    """
    Build a grid from a square matrix of tile values.

    Parameters
    ----------
    values : Sequence[Sequence[int | None]]
        Tile values, None for empty cells.
    next_id : IdSource, optional
        Identifier source for the created tiles.

    Returns
    -------
    Grid
        A grid holding a fresh tile for every value.
    """
    return [
        [create_tile(Cell(row, col), value, next_id) if value is not None else None for col, value in enumerate(cells)]
        for row, cells in enumerate(values)
    ]


def clone_tile(tile: Tile) -> Tile:
    """Copy a tile, its position and its merge provenance by value."""
    merged_from = None
    if tile.merged_from is not None:
        merged_from = tuple(clone_tile(source) for source in tile.merged_from)
    return Tile(id=tile.id, value=tile.value, position=Cell(*tile.position), merged_from=merged_from)


def clone_grid(grid: Grid) -> Grid:
    """
    Deep copy a grid.

    Parameters
    ----------
    grid : Grid
        The grid to copy.

    Returns
    -------
    Grid
        A grid sharing no row lists and no tile objects with ``grid``.
    """
    return [[clone_tile(tile) if tile is not None else None for tile in row] for row in grid]


def get_empty_cells(grid: Grid) -> list[Cell]:
    """Return every empty cell, row-major."""
    return [Cell(row, col) for row, cells in enumerate(grid) for col, tile in enumerate(cells) if tile is None]


def get_all_tiles(grid: Grid) -> list[Tile]:
    """Return every tile, row-major."""
    return [tile for cells in grid for tile in cells if tile is not None]


def board_values(grid: Grid) -> ndarray:
    """
    Numeric view of a grid.

    Parameters
    ----------
    grid : Grid
        The grid to convert.

    Returns
    -------
    ndarray
        An ``int64`` matrix holding tile values, with 0 where a cell is empty.

    Notes
    -----
    This view exists for vectorized checks and observations. It is never turned back into a grid.
    """
    values = zeros((len(grid), len(grid)), dtype=int64)
    for tile in get_all_tiles(grid):
        values[tile.position] = tile.value
    return values


def select_spawn_value(spawn_values: Sequence[SpawnConfig], random: RandomSource | None = None) -> int:
    """
    Draw a tile value from a weighted spawn table.

    Parameters
    ----------
    spawn_values : Sequence[SpawnConfig]
        The spawn table.
    random : RandomSource, optional
        Source of uniform floats in ``[0, 1)``. Defaults to the module-level generator.

    Returns
    -------
    int
        The first value whose cumulative probability reaches the draw.

    Notes
    -----
    If the probabilities do not sum to 1 and the draw falls past the table, the first entry's
    value is returned.
    """
    draw = (random or default_random)()
    cumulative = 0.0
    for entry in spawn_values:
        cumulative += entry.probability
        if draw <= cumulative:
            return entry.value
    return spawn_values[0].value


def spawn_random_tile(
    grid: Grid,
    spawn_values: Sequence[SpawnConfig],
    random: RandomSource | None = None,
    next_id: IdSource | None = None,
) -> Grid | None:
    """
    Place a new tile in a uniformly chosen empty cell.

    Parameters
    ----------
    grid : Grid
        The current grid. Never modified.
    spawn_values : Sequence[SpawnConfig]
        Weighted table for the new tile's value.
    random : RandomSource, optional
        Source of uniform floats in ``[0, 1)``. Defaults to the module-level generator.
    next_id : IdSource, optional
        Identifier source for the new tile. Defaults to the process-wide generator.

    Returns
    -------
    Grid | None
        A cloned grid holding the new tile, or None when the grid has no empty cell.

    Notes
    -----
    - The first draw picks the cell, the second picks the value.
    - A full grid is an expected condition, hence the None marker instead of an exception.
    """
    random = random or default_random

    # ##: Only if there are still available places.
    empty_cells = get_empty_cells(grid)
    if not empty_cells:
        return None

    # ##: Randomly choose the cell, then the value.
    index = min(floor(random() * len(empty_cells)), len(empty_cells) - 1)
    cell = empty_cells[index]
    value = select_spawn_value(spawn_values, random)

    new_grid = clone_grid(grid)
    new_grid[cell.row][cell.col] = create_tile(cell, value, next_id)
    return new_grid
