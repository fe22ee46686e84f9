# -*- coding: utf-8 -*-
"""
This module provides utilities around the turn engine: board geometry, a simulated animation player
and a Matplotlib window.

The window is not imported here so that the engine can be used without a display backend.
"""

from .animator import SimulatedAnimator
from .geometry import pos_to_world, slide_duration

__all__ = ["SimulatedAnimator", "pos_to_world", "slide_duration"]
