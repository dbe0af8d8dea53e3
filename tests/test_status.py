"""
Tests for win and loss detection.
"""

from unittest import TestCase, main

from puzzle2048.core.gameboard import create_empty_grid, grid_from_values
from puzzle2048.core.status import GameStatus, determine_game_status, has_moves_available, has_won

_ = None

# ##>: Full boards with no equal neighbours.
BLOCKED_2X2 = [[2, 4], [8, 16]]
BLOCKED_4X4 = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]


class TestHasWon(TestCase):
    """Target detection."""

    def test_below_target(self):
        grid = grid_from_values([[1024, 512, _], [_, _, _], [_, _, _]])
        self.assertFalse(has_won(grid, 2048))

    def test_target_reached(self):
        grid = grid_from_values([[2048, _, _], [_, _, _], [_, _, _]])
        self.assertTrue(has_won(grid, 2048))

    def test_target_exceeded(self):
        grid = grid_from_values([[4096, _, _], [_, _, _], [_, _, _]])
        self.assertTrue(has_won(grid, 2048))

    def test_custom_target(self):
        grid = grid_from_values([[128, _, _], [_, _, _], [_, _, _]])
        self.assertTrue(has_won(grid, 128))
        self.assertFalse(has_won(grid, 256))


class TestHasMovesAvailable(TestCase):
    """Loss detection."""

    def test_empty_grid(self):
        self.assertTrue(has_moves_available(create_empty_grid(4)))

    def test_empty_cell_remaining(self):
        grid = grid_from_values([[2, 4, 2], [4, _, 4], [2, 4, 2]])
        self.assertTrue(has_moves_available(grid))

    def test_horizontal_merge(self):
        grid = grid_from_values([[2, 2, 4, 8], [4, 8, 16, 32], [8, 16, 32, 64], [16, 32, 64, 128]])
        self.assertTrue(has_moves_available(grid))

    def test_vertical_merge(self):
        grid = grid_from_values([[2, 4, 8, 16], [2, 8, 16, 32], [8, 16, 32, 64], [16, 32, 64, 128]])
        self.assertTrue(has_moves_available(grid))

    def test_blocked_grid(self):
        self.assertFalse(has_moves_available(grid_from_values(BLOCKED_4X4)))

    def test_blocked_two_by_two(self):
        """A full 2x2 board with no equal neighbours is lost."""
        grid = grid_from_values(BLOCKED_2X2)
        self.assertFalse(has_moves_available(grid))
        self.assertEqual(determine_game_status(grid, 2048, GameStatus.PLAYING), GameStatus.LOST)


class TestDetermineGameStatus(TestCase):
    """Status transitions."""

    def test_playing(self):
        grid = grid_from_values([[2, _, _], [_, 2, _], [_, _, _]])
        self.assertEqual(determine_game_status(grid, 2048, GameStatus.PLAYING), GameStatus.PLAYING)

    def test_won(self):
        grid = grid_from_values([[2048, _, _], [_, _, _], [_, _, _]])
        self.assertEqual(determine_game_status(grid, 2048, GameStatus.PLAYING), GameStatus.WON)

    def test_lost(self):
        grid = grid_from_values(BLOCKED_4X4)
        self.assertEqual(determine_game_status(grid, 2048, GameStatus.PLAYING), GameStatus.LOST)

    def test_won_is_sticky(self):
        """Once won, the grid is not inspected again."""
        grid = grid_from_values(BLOCKED_4X4)
        self.assertEqual(determine_game_status(grid, 2048, GameStatus.WON), GameStatus.WON)

    def test_continued_game_does_not_win_again(self):
        grid = grid_from_values([[2048, _, _], [_, _, _], [_, _, _]])
        status = determine_game_status(grid, 2048, GameStatus.PLAYING, won_and_continued=True)
        self.assertEqual(status, GameStatus.PLAYING)

    def test_continued_game_can_be_lost(self):
        grid = grid_from_values([[2048, 4, 2], [4, 2, 4], [2, 4, 2]])
        status = determine_game_status(grid, 2048, GameStatus.PLAYING, won_and_continued=True)
        self.assertEqual(status, GameStatus.LOST)


if __name__ == '__main__':
    main()
