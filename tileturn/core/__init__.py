# -*- coding: utf-8 -*-
"""
Core rules of the 2048 game.

It includes the board and tile arena, move resolution into per-tile instructions, random tile
placement, score tracking and detection of the terminal state.
"""

from .board import Board, Position, TileRef
from .ending import is_done, is_terminal
from .gamemove import (
    Direction,
    Instruction,
    MergeInto,
    MoveResolution,
    Slide,
    can_move,
    legal_directions,
    resolve_line,
    resolve_move,
)
from .score import ScoreTracker
from .spawn import TILE_SPAWN_PROBS, fill_cells, make_generator
from .tiles import Tile, TileArena, TileId

__all__ = [
    "Board",
    "Position",
    "TileRef",
    "Tile",
    "TileArena",
    "TileId",
    "Direction",
    "Instruction",
    "Slide",
    "MergeInto",
    "MoveResolution",
    "resolve_line",
    "resolve_move",
    "can_move",
    "legal_directions",
    "fill_cells",
    "make_generator",
    "TILE_SPAWN_PROBS",
    "ScoreTracker",
    "is_done",
    "is_terminal",
]
