"""
Signals exchanged between the turn engine and its collaborators.

Each signal type has its own queue; the turn machine drains every queue once per tick.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import NamedTuple

from tileturn.core.gamemove import Direction
from tileturn.core.tiles import TileId


class MoveRequested(NamedTuple):
    direction: Direction


class NewGameRequested(NamedTuple):
    pass


class AnimationComplete(NamedTuple):
    tile_id: TileId


class TileAdded(NamedTuple):
    tile_id: TileId


@dataclass
class SignalQueues:
    """One FIFO queue per signal type."""

    moves: deque = field(default_factory=deque)
    new_games: deque = field(default_factory=deque)
    completions: deque = field(default_factory=deque)
    tiles_added: deque = field(default_factory=deque)

    def clear(self):
        for queue in (self.moves, self.new_games, self.completions, self.tiles_added):
            queue.clear()


def drain(queue: deque) -> list:
    """Pop every queued signal, oldest first."""
    items = list(queue)
    queue.clear()
    return items
