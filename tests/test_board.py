# -*-  coding: utf-8 -*-
"""
Set of tests for grid primitives and tile spawning.
"""
from unittest import TestCase, main

import numpy as np

from puzzle2048.config import SpawnConfig
from puzzle2048.core.gameboard import (
    board_values,
    clone_grid,
    create_empty_grid,
    get_all_tiles,
    get_empty_cells,
    grid_from_values,
    select_spawn_value,
    spawn_random_tile,
)
from puzzle2048.core.tiles import Cell, Tile, TileIdGenerator, create_tile, generate_tile_id

SPAWN_VALUES = (SpawnConfig(2, 0.9), SpawnConfig(4, 0.1))


class TestGridPrimitives(TestCase):
    """Tests for grid construction, copying and enumeration."""

    def test_create_empty_grid(self):
        """Empty grid has the requested size and only empty cells."""
        for size in (3, 4, 6):
            grid = create_empty_grid(size)
            self.assertEqual(len(grid), size)
            self.assertTrue(all(len(row) == size for row in grid))
            self.assertTrue(all(cell is None for row in grid for cell in row))

    def test_create_empty_grid_independent_rows(self):
        """Writing to one row leaves the others untouched."""
        grid = create_empty_grid(4)
        grid[0][0] = create_tile(Cell(0, 0), 2)

        self.assertIsNone(grid[1][0])
        self.assertIsNone(grid[3][0])

    def test_clone_grid_is_deep(self):
        """Clone holds equal tiles but shares no objects with the original."""
        grid = grid_from_values([[2, None, None], [None, 4, None], [None, None, 8]])
        clone = clone_grid(grid)

        self.assertEqual(clone, grid)
        self.assertIsNot(clone[0], grid[0])
        self.assertIsNot(clone[0][0], grid[0][0])

        # ##>: Rows of the clone can be rewritten without affecting the original.
        clone[1][1] = None
        self.assertEqual(grid[1][1].value, 4)

    def test_clone_grid_copies_merge_provenance(self):
        """Merge provenance is copied by value."""
        sources = (Tile('a', 2, Cell(0, 1)), Tile('b', 2, Cell(0, 0)))
        grid = create_empty_grid(3)
        grid[0][0] = Tile('c', 4, Cell(0, 0), merged_from=sources)

        clone = clone_grid(grid)
        self.assertEqual(clone[0][0].merged_from, sources)
        self.assertIsNot(clone[0][0].merged_from[0], sources[0])

    def test_get_empty_cells(self):
        """Empty cells are listed row-major."""
        self.assertEqual(len(get_empty_cells(create_empty_grid(4))), 16)

        grid = grid_from_values([[2, None, None], [None, 4, None], [8, 16, 32]])
        self.assertEqual(get_empty_cells(grid), [Cell(0, 1), Cell(0, 2), Cell(1, 0), Cell(1, 2)])

        full = grid_from_values([[2, 4, 2], [4, 2, 4], [2, 4, 2]])
        self.assertEqual(get_empty_cells(full), [])

    def test_get_all_tiles(self):
        """Tiles are listed row-major."""
        self.assertEqual(get_all_tiles(create_empty_grid(4)), [])

        grid = grid_from_values([[None, 2, None], [4, None, None], [None, None, 8]])
        tiles = get_all_tiles(grid)
        self.assertEqual([tile.value for tile in tiles], [2, 4, 8])
        self.assertEqual([tile.position for tile in tiles], [Cell(0, 1), Cell(1, 0), Cell(2, 2)])

    def test_board_values(self):
        """Numeric view holds tile values and zeros for empty cells."""
        grid = grid_from_values([[2, None, None], [None, 4, None], [None, None, 8]])
        np.testing.assert_array_equal(board_values(grid), np.array([[2, 0, 0], [0, 4, 0], [0, 0, 8]]))


class TestTileIds(TestCase):
    """Tests for tile identifier generation."""

    def test_generate_unique_ids(self):
        """Identifiers from the default generator never repeat."""
        ids = {generate_tile_id() for _ in range(1000)}
        self.assertEqual(len(ids), 1000)

    def test_injected_generator_format_and_reset(self):
        """Injected generator is deterministic and can be reset."""
        generator = TileIdGenerator()
        self.assertEqual([generator(), generator()], ['tile-0', 'tile-1'])

        generator.reset()
        self.assertEqual(generator(), 'tile-0')

    def test_create_tile(self):
        """Created tiles carry value, position and a fresh identifier."""
        generator = TileIdGenerator(start=10)
        first = create_tile(Cell(1, 2), 4, generator)
        second = create_tile(Cell(1, 2), 4, generator)

        self.assertEqual(first.value, 4)
        self.assertEqual(first.position, Cell(1, 2))
        self.assertIsNone(first.merged_from)
        self.assertEqual(first.id, 'tile-10')
        self.assertNotEqual(first.id, second.id)


class TestSpawn(TestCase):
    """Tests for weighted value selection and tile placement."""

    def test_select_spawn_value_follows_probabilities(self):
        """Draws below the first cumulative mass select the first value."""
        self.assertEqual(select_spawn_value(SPAWN_VALUES, lambda: 0.0), 2)
        self.assertEqual(select_spawn_value(SPAWN_VALUES, lambda: 0.5), 2)
        self.assertEqual(select_spawn_value(SPAWN_VALUES, lambda: 0.9), 2)
        self.assertEqual(select_spawn_value(SPAWN_VALUES, lambda: 0.95), 4)

    def test_select_spawn_value_fallback(self):
        """A table that does not reach the draw falls back to its first value."""
        table = (SpawnConfig(2, 0.3), SpawnConfig(4, 0.3))
        self.assertEqual(select_spawn_value(table, lambda: 0.9), 2)

    def test_select_spawn_value_single_entry(self):
        """A single-entry table always yields its value."""
        table = (SpawnConfig(8, 1.0),)
        for draw in (0.0, 0.5, 0.999):
            self.assertEqual(select_spawn_value(table, lambda: draw), 8)

    def test_select_spawn_value_distribution(self):
        """Default random source respects the weights."""
        draws = [select_spawn_value(SPAWN_VALUES) for _ in range(2000)]
        self.assertTrue(set(draws) <= {2, 4})
        self.assertGreater(draws.count(2), draws.count(4))

    def test_spawn_random_tile_places_one_tile(self):
        """Spawning adds exactly one tile, drawn from the table, in an empty cell."""
        grid = create_empty_grid(4)
        new_grid = spawn_random_tile(grid, SPAWN_VALUES)

        tiles = get_all_tiles(new_grid)
        self.assertEqual(len(tiles), 1)
        self.assertIn(tiles[0].value, (2, 4))

    def test_spawn_random_tile_deterministic(self):
        """First draw picks the cell, second draw picks the value."""
        grid = create_empty_grid(4)

        new_grid = spawn_random_tile(grid, SPAWN_VALUES, iter([0.0, 0.0]).__next__)
        self.assertEqual(new_grid[0][0].value, 2)

        new_grid = spawn_random_tile(grid, SPAWN_VALUES, iter([0.99, 0.95]).__next__)
        self.assertEqual(new_grid[3][3].value, 4)
        self.assertEqual(new_grid[3][3].position, Cell(3, 3))

    def test_spawn_random_tile_only_empty_cells(self):
        """The only empty cell is always chosen."""
        grid = grid_from_values([[2, 4, 2], [4, None, 4], [2, 4, 2]])
        new_grid = spawn_random_tile(grid, SPAWN_VALUES, iter([0.7, 0.1]).__next__)
        self.assertEqual(new_grid[1][1].value, 2)

    def test_spawn_random_tile_full_grid(self):
        """Full grid yields no result instead of raising."""
        grid = grid_from_values([[2, 4, 2], [4, 2, 4], [2, 4, 2]])
        self.assertIsNone(spawn_random_tile(grid, SPAWN_VALUES))

    def test_spawn_random_tile_keeps_input(self):
        """Input grid is never modified."""
        grid = create_empty_grid(4)
        spawn_random_tile(grid, SPAWN_VALUES)
        self.assertEqual(get_all_tiles(grid), [])


if __name__ == "__main__":
    main()
