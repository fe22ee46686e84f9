"""
Tests for tile spawning, score tracking, the end check and the configuration.
"""

from unittest import TestCase, main

import numpy as np
from numpy.random import default_rng

from tileturn.config import GameConfig
from tileturn.core.board import Board
from tileturn.core.ending import is_done, is_terminal
from tileturn.core.score import ScoreTracker
from tileturn.core.spawn import TILE_SPAWN_PROBS, fill_cells
from tileturn.core.tiles import TileArena

# ##>: Full board without equal neighbours.
BLOCKED = np.array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])


class TestSpawn(TestCase):
    """Test random tile placement."""

    def setUp(self):
        self.arena = TileArena()
        self.board = Board(size=4)

    def test_spawn_probabilities(self):
        """Spawn probabilities sum to 1 with 4s at 10%."""
        self.assertAlmostEqual(sum(TILE_SPAWN_PROBS.values()), 1.0)
        self.assertAlmostEqual(TILE_SPAWN_PROBS[4], 0.1)

    def test_fill_two_tiles(self):
        """Two tiles land on two distinct empty cells with value 2 or 4."""
        tiles = fill_cells(self.board, self.arena, number_tile=2, rng=default_rng(42))

        self.assertEqual(len(tiles), 2)
        self.assertNotEqual(tiles[0].position, tiles[1].position)
        self.assertEqual(self.board.occupied, 2)
        for tile in tiles:
            self.assertIn(tile.value, (2, 4))
            self.assertEqual(self.board.get(tile.position).tile_id, tile.tile_id)

    def test_seed_reproducibility(self):
        """Same seed produces identical placements."""
        first = fill_cells(Board(4), TileArena(), number_tile=3, rng=default_rng(7))
        second = fill_cells(Board(4), TileArena(), number_tile=3, rng=default_rng(7))
        self.assertEqual([(t.value, t.position) for t in first], [(t.value, t.position) for t in second])

    def test_only_empty_cells(self):
        """New tiles never replace existing ones."""
        grid = np.full((4, 4), 8)
        grid[1, 2] = 0
        grid[3, 0] = 0
        board = Board.from_values(grid, self.arena)

        tiles = fill_cells(board, self.arena, number_tile=2, rng=default_rng(0))

        self.assertEqual({tile.position for tile in tiles}, {(1, 2), (3, 0)})
        self.assertTrue(board.is_full)

    def test_fewer_empty_cells_than_requested(self):
        """Fills what fits and stops."""
        grid = np.full((4, 4), 8)
        grid[2, 2] = 0
        board = Board.from_values(grid, self.arena)

        tiles = fill_cells(board, self.arena, number_tile=3, rng=default_rng(0))
        self.assertEqual(len(tiles), 1)
        self.assertEqual(tiles[0].position, (2, 2))

    def test_full_board_is_noop(self):
        """A full board is left untouched."""
        board = Board.from_values(BLOCKED, self.arena)
        self.assertEqual(fill_cells(board, self.arena, number_tile=1, rng=default_rng(0)), [])
        self.assertEqual(len(self.arena), 16)
        np.testing.assert_array_equal(board.values(), BLOCKED)

    def test_value_distribution(self):
        """Roughly one tile in ten is a 4."""
        rng = default_rng(123)
        fours = 0
        for _ in range(200):
            tiles = fill_cells(Board(4), TileArena(), number_tile=16, rng=rng)
            fours += sum(tile.value == 4 for tile in tiles)
        self.assertAlmostEqual(fours / 3200, 0.1, delta=0.02)

    def test_forced_values(self):
        """The 4-probability can be forced to either extreme."""
        only_fours = fill_cells(Board(4), TileArena(), number_tile=16, rng=default_rng(1), four_probability=1.0)
        only_twos = fill_cells(Board(4), TileArena(), number_tile=16, rng=default_rng(1), four_probability=0.0)
        self.assertEqual({tile.value for tile in only_fours}, {4})
        self.assertEqual({tile.value for tile in only_twos}, {2})


class TestScoreTracker(TestCase):
    """Test score and high score."""

    def test_add(self):
        """Gains accumulate and drive the high score."""
        score = ScoreTracker()
        self.assertEqual(score.add(4), 4)
        self.assertEqual(score.add(8), 12)
        self.assertEqual(score.high_score, 12)

    def test_reset_keeps_high_score(self):
        """Reset clears the score only."""
        score = ScoreTracker()
        score.add(16)
        score.reset()
        self.assertEqual(score.score, 0)
        self.assertEqual(score.high_score, 16)

        # ##>: A lower game never lowers the high score.
        score.add(4)
        self.assertEqual(score.high_score, 16)
        score.add(20)
        self.assertEqual(score.high_score, 24)

    def test_negative_gain(self):
        """Negative gains are programming errors."""
        with self.assertRaises(ValueError):
            ScoreTracker().add(-2)


class TestEnding(TestCase):
    """Test the terminal state detection."""

    def test_is_done(self):
        """Full board without equal neighbours is terminal."""
        self.assertTrue(is_done(BLOCKED))

    def test_not_done_with_equal_neighbours(self):
        """Equal horizontal or vertical neighbours keep the game going."""
        horizontal = BLOCKED.copy()
        horizontal[0, 1] = 2
        vertical = BLOCKED.copy()
        vertical[1, 0] = 2
        self.assertFalse(is_done(horizontal))
        self.assertFalse(is_done(vertical))

    def test_not_done_with_empty_cell(self):
        """An empty cell keeps the game going."""
        grid = BLOCKED.copy()
        grid[2, 2] = 0
        self.assertFalse(is_done(grid))

    def test_is_terminal_on_board(self):
        """The board-level check agrees with the value check."""
        arena = TileArena()
        self.assertTrue(is_terminal(Board.from_values(BLOCKED, arena)))

        grid = BLOCKED.copy()
        grid[0, 0] = 0
        self.assertFalse(is_terminal(Board.from_values(grid, arena)))
        self.assertFalse(is_terminal(Board(4)))


class TestGameConfig(TestCase):
    """Test configuration validation."""

    def test_defaults(self):
        """Defaults follow the original game."""
        config = GameConfig()
        self.assertEqual(config.size, 4)
        self.assertEqual(config.start_tiles, 2)
        self.assertEqual(config.spawn_per_turn, 1)
        self.assertEqual(config.board_size(), 600.0)

    def test_invalid_values(self):
        """Invalid values are rejected at construction."""
        for kwargs in ({'size': 0}, {'start_tiles': -1}, {'four_probability': 1.5}, {'slide_speed': 0}):
            with self.assertRaises(ValueError):
                GameConfig(**kwargs)


if __name__ == '__main__':
    main()
