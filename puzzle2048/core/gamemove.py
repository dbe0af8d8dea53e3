"""
Move engine for the 2048 game: traversal ordering, sliding and single-generation merging.
"""

from typing import NamedTuple

from puzzle2048.core.gameboard import Grid, create_empty_grid
from puzzle2048.core.tiles import Cell, Direction, IdSource, Tile, create_tile


class MoveOutcome(NamedTuple):
    """
    Result of sliding a grid in one direction.

    Attributes
    ----------
    grid : Grid
        The new grid. No tile has been spawned yet.
    moved : bool
        Whether any tile ended on a different cell.
    score : int
        Sum of the values of the tiles created by merging.
    merged_tiles : list[Tile]
        Tiles created by merging, in creation order.
    """

    grid: Grid
    moved: bool
    score: int
    merged_tiles: list[Tile]


def traversal_order(direction: Direction, size: int) -> list[Cell]:
    """
    Order in which cells are processed for a move.

    Parameters
    ----------
    direction : Direction
        The move direction.
    size : int
        Side of the grid.

    Returns
    -------
    list[Cell]
        Every cell, those closest to the target edge first in each line.
    """
    forward = list(range(size))
    backward = forward[::-1]

    if direction is Direction.UP:
        return [Cell(row, col) for col in forward for row in forward]
    if direction is Direction.DOWN:
        return [Cell(row, col) for col in forward for row in backward]
    if direction is Direction.LEFT:
        return [Cell(row, col) for row in forward for col in forward]
    return [Cell(row, col) for row in forward for col in backward]


def _within_bounds(cell: Cell, size: int) -> bool:
    return 0 <= cell.row < size and 0 <= cell.col < size


def find_farthest_position(
    position: Cell, direction: Direction, grid: Grid, merged_cells: set[Cell]
) -> tuple[Cell, Cell | None]:
    """
    Walk from ``position`` toward the edge of ``direction``.

    Parameters
    ----------
    position : Cell
        Starting cell of the sliding tile.
    direction : Direction
        The move direction.
    grid : Grid
        The grid being built for this move.
    merged_cells : set[Cell]
        Cells that already received a merge this turn. They block sliding.

    Returns
    -------
    farthest : Cell
        Last reachable empty cell (``position`` itself if the tile cannot slide).
    next : Cell | None
        The in-bounds cell just beyond ``farthest``, or None at the edge.
    """
    d_row, d_col = direction.vector
    size = len(grid)

    previous = position
    current = Cell(position.row + d_row, position.col + d_col)
    while _within_bounds(current, size) and grid[current.row][current.col] is None and current not in merged_cells:
        previous = current
        current = Cell(current.row + d_row, current.col + d_col)

    return previous, current if _within_bounds(current, size) else None


def perform_move(grid: Grid, direction: Direction, next_id: IdSource | None = None) -> MoveOutcome:
    """
    Slide and merge every tile of a grid in one direction.

    Parameters
    ----------
    grid : Grid
        The current grid. Never modified.
    direction : Direction
        The move direction.
    next_id : IdSource, optional
        Identifier source for merged tiles. Defaults to the process-wide generator.

    Returns
    -------
    MoveOutcome
        The new grid, whether anything moved, the score gained and the merged tiles.

    Notes
    -----
    - Tiles are processed closest-to-the-edge first and placed on a fresh grid.
    - A cell that received a merge cannot take part in another merge this turn, and blocks
      tiles sliding past it: ``[2, 2, 2, _]`` moved left gives ``[4, 2, _, _]``.
    - Merged tiles get a new identifier and record both sources with their pre-move positions.
    - Provenance from a previous turn is dropped from every tile.
    """
    direction = Direction(direction)
    size = len(grid)
    new_grid = create_empty_grid(size)
    merged_cells: set[Cell] = set()
    origins: dict[Cell, Cell] = {}
    merged_tiles: list[Tile] = []
    moved = False
    score = 0

    for cell in traversal_order(direction, size):
        tile = grid[cell.row][cell.col]
        if tile is None:
            continue

        farthest, following = find_farthest_position(cell, direction, new_grid, merged_cells)

        # ##: Merge with the blocking tile if it has the same value and has not merged yet.
        blocking = new_grid[following.row][following.col] if following is not None else None
        if blocking is not None and blocking.value == tile.value and following not in merged_cells:
            sources = (
                Tile(id=tile.id, value=tile.value, position=cell),
                Tile(id=blocking.id, value=blocking.value, position=origins[following]),
            )
            merged = create_tile(following, tile.value * 2, next_id, merged_from=sources)
            new_grid[following.row][following.col] = merged
            merged_cells.add(following)
            merged_tiles.append(merged)
            score += merged.value
            destination = following
        else:
            new_grid[farthest.row][farthest.col] = Tile(id=tile.id, value=tile.value, position=farthest)
            origins[farthest] = cell
            destination = farthest

        if destination != cell:
            moved = True

    return MoveOutcome(grid=new_grid, moved=moved, score=score, merged_tiles=merged_tiles)


def can_move(grid: Grid, direction: Direction) -> bool:
    """Check whether moving in ``direction`` would change the grid."""
    d_row, d_col = Direction(direction).vector
    size = len(grid)
    for row, cells in enumerate(grid):
        for col, tile in enumerate(cells):
            if tile is None:
                continue
            neighbour = Cell(row + d_row, col + d_col)
            if not _within_bounds(neighbour, size):
                continue
            other = grid[neighbour.row][neighbour.col]
            if other is None or other.value == tile.value:
                return True
    return False


def legal_directions(grid: Grid) -> list[Direction]:
    """Directions that change the grid."""
    return [direction for direction in Direction if can_move(grid, direction)]


def illegal_directions(grid: Grid) -> list[Direction]:
    """Directions that leave the grid untouched."""
    return [direction for direction in Direction if not can_move(grid, direction)]
