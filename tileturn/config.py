"""
Configuration for the 2048 turn engine.

Gameplay constants follow the original game: a 4x4 board, two starting tiles, one tile spawned per
turn with a 10% chance of being a 4. Geometry and animation speed are only used by the reference
animation player and the renderer.
"""

from dataclasses import dataclass


@dataclass
class GameConfig:
    """
    Configuration for a game session.

    Attributes are grouped by the component that reads them.
    """

    # ##>: Board parameters.
    size: int = 4  # Side of the square grid

    # ##>: Spawn parameters.
    start_tiles: int = 2  # Tiles placed by setup and by every new game
    spawn_per_turn: int = 1  # Tiles placed after each resolved move
    four_probability: float = 0.1  # Chance that a spawned tile is a 4
    spawn_on_unchanged_move: bool = False  # Spawn even when the move changed nothing
    seed: int | None = None  # Seed for the spawn generator (None: module generator)

    # ##>: Tile geometry, in pixels.
    tile_size: int = 150
    pad: int = 0

    # ##>: Animation timing.
    slide_speed: float = 4000.0  # Pixels per second
    min_duration: float = 0.01  # Added to every slide, in seconds

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f'size must be >= 1, got {self.size}')
        if self.start_tiles < 0 or self.spawn_per_turn < 0:
            raise ValueError(
                f'tile counts must be >= 0, got start_tiles={self.start_tiles}, spawn_per_turn={self.spawn_per_turn}'
            )
        if not 0.0 <= self.four_probability <= 1.0:
            raise ValueError(f'four_probability must be in [0, 1], got {self.four_probability}')
        if self.slide_speed <= 0:
            raise ValueError(f'slide_speed must be > 0, got {self.slide_speed}')

    def board_size(self) -> float:
        """
        Get the side of the whole board in pixels.

        Returns
        -------
        float
            Board side length.
        """
        return float(self.size * (self.tile_size + 2 * self.pad))
