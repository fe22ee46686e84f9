"""
Reference animation player.

Plays move instructions on a simulated clock and reports each completion through a callback, the way
a tweening engine would. Used by the keyboard driver and the tests; the turn engine only relies on the
``submit`` method and on the completion callback.
"""

from dataclasses import dataclass
from typing import Callable, Mapping

from tileturn.config import GameConfig
from tileturn.core.board import Position
from tileturn.core.gamemove import Instruction
from tileturn.core.tiles import TileId
from tileturn.utils.geometry import pos_to_world, slide_duration


@dataclass
class Motion:
    """A tile in flight."""

    tile_id: TileId
    origin: Position
    target: Position
    duration: float
    elapsed: float = 0.0

    @property
    def remaining(self) -> float:
        return self.duration - self.elapsed

    @property
    def progress(self) -> float:
        return min(self.elapsed / self.duration, 1.0) if self.duration > 0 else 1.0


class SimulatedAnimator:
    """
    Linear tile motions driven by ``advance``.

    Parameters
    ----------
    on_complete : Callable[[TileId], None]
        Called exactly once per submitted instruction, when its motion ends.
    config : GameConfig, optional
        Geometry and speed of the motions.
    """

    def __init__(self, on_complete: Callable[[TileId], None], config: GameConfig | None = None):
        self._on_complete = on_complete
        self._config = config if config is not None else GameConfig()
        self._motions: dict[TileId, Motion] = {}

    def __len__(self) -> int:
        return len(self._motions)

    def submit(self, instructions: Mapping[TileId, Instruction]):
        """
        Start a motion for every instruction.

        Parameters
        ----------
        instructions : Mapping[TileId, Instruction]
            Instructions of one move.
        """
        for tile_id, instruction in instructions.items():
            self._motions[tile_id] = Motion(
                tile_id=tile_id,
                origin=instruction.origin,
                target=instruction.target,
                duration=slide_duration(instruction.origin, instruction.target, self._config),
            )

    def advance(self, dt: float) -> list[TileId]:
        """
        Move the clock forward.

        Parameters
        ----------
        dt : float
            Elapsed time in seconds.

        Returns
        -------
        list[TileId]
            Tiles whose motion ended, in order of completion.
        """
        for motion in self._motions.values():
            motion.elapsed += dt

        finished = sorted(
            (motion for motion in self._motions.values() if motion.remaining <= 0),
            key=lambda motion: motion.remaining,
        )
        for motion in finished:
            del self._motions[motion.tile_id]
            self._on_complete(motion.tile_id)
        return [motion.tile_id for motion in finished]

    def world_position(self, tile_id: TileId) -> tuple[float, float] | None:
        """
        Get the interpolated pixel centre of a tile in flight.

        Returns
        -------
        tuple[float, float] or None
            None if the tile is not moving.
        """
        motion = self._motions.get(tile_id)
        if motion is None:
            return None

        start_x, start_y = pos_to_world(motion.origin, self._config)
        end_x, end_y = pos_to_world(motion.target, self._config)
        return start_x + (end_x - start_x) * motion.progress, start_y + (end_y - start_y) * motion.progress
