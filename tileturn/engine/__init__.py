# -*- coding: utf-8 -*-
"""
Frame-driven turn engine of the 2048 game.

This module provides the `TurnMachine` class, which sequences move resolution, animation playback,
spawning and the end check, and the signals it exchanges with its collaborators.
"""

from .signals import AnimationComplete, MoveRequested, NewGameRequested, SignalQueues, TileAdded
from .turn import Animator, TurnContext, TurnMachine, TurnPhase

__all__ = [
    "TurnMachine",
    "TurnContext",
    "TurnPhase",
    "Animator",
    "SignalQueues",
    "MoveRequested",
    "NewGameRequested",
    "AnimationComplete",
    "TileAdded",
]
