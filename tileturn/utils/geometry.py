"""Pixel geometry of the board."""

from math import hypot

from tileturn.config import GameConfig
from tileturn.core.board import Position


def pos_to_world(position: Position, config: GameConfig) -> tuple[float, float]:
    """
    Get the pixel centre of a cell.

    Parameters
    ----------
    position : Position
        ``(row, col)`` of the cell.
    config : GameConfig
        Provides the tile size and padding.

    Returns
    -------
    tuple[float, float]
        ``(x, y)`` with y growing downward from the board's top-left corner.
    """
    row, col = position
    step = config.tile_size + 2 * config.pad
    offset = config.tile_size / 2 + config.pad
    return float(col * step + offset), float(row * step + offset)


def slide_duration(origin: Position, target: Position, config: GameConfig) -> float:
    """
    Get the duration of a slide, in seconds.

    Tiles travel at ``config.slide_speed`` pixels per second, plus ``config.min_duration`` so that
    zero-distance slides still take one short step.
    """
    start_x, start_y = pos_to_world(origin, config)
    end_x, end_y = pos_to_world(target, config)
    return hypot(end_x - start_x, end_y - start_y) / config.slide_speed + config.min_duration
