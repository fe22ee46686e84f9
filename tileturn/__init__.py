# -*- coding: utf-8 -*-
"""
Turn-resolution core of the 2048 game.
"""

from .config import GameConfig
from .core import Board, Direction, MergeInto, Slide, TileArena, TileId
from .engine import TurnMachine, TurnPhase

__all__ = ["GameConfig", "Board", "Direction", "Slide", "MergeInto", "TileArena", "TileId", "TurnMachine", "TurnPhase"]
