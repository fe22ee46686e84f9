"""
Live tiles and their identity handles.

Tiles live in a ``TileArena``. A ``TileId`` is a generation-checked handle into the arena: once a tile
is destroyed its slot may be reused, but the old handle no longer resolves. This is what lets late
animation signals for destroyed tiles be ignored.
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple


class TileId(NamedTuple):
    """Handle of a tile inside a ``TileArena``."""

    index: int
    generation: int


@dataclass
class Tile:
    """
    A live tile.

    Attributes
    ----------
    tile_id : TileId
        Stable identity, used to correlate animation signals.
    value : int
        Power of two, at least 2.
    position : tuple[int, int]
        Current ``(row, col)`` of the tile.
    """

    tile_id: TileId
    value: int
    position: tuple[int, int]


class TileArena:
    """
    Owner of every live tile.

    Slots are recycled through a free list; each reuse bumps the slot's generation.
    """

    def __init__(self):
        self._slots: list[Tile | None] = []
        self._generations: list[int] = []
        self._free: list[int] = []

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)

    def __iter__(self) -> Iterator[Tile]:
        return (tile for tile in self._slots if tile is not None)

    def __contains__(self, tile_id: TileId) -> bool:
        return self.get(tile_id) is not None

    def spawn(self, value: int, position: tuple[int, int]) -> Tile:
        """
        Create a new tile.

        Parameters
        ----------
        value : int
            Tile value (power of two, at least 2).
        position : tuple[int, int]
            Cell of the tile.

        Returns
        -------
        Tile
            The created tile.
        """
        if value < 2 or value & (value - 1):
            raise ValueError(f'tile value must be a power of two >= 2, got {value}')

        if self._free:
            index = self._free.pop()
        else:
            index = len(self._slots)
            self._slots.append(None)
            self._generations.append(0)

        tile = Tile(tile_id=TileId(index, self._generations[index]), value=value, position=tuple(position))
        self._slots[index] = tile
        return tile

    def get(self, tile_id: TileId) -> Tile | None:
        """
        Resolve a handle.

        Parameters
        ----------
        tile_id : TileId
            Handle to resolve.

        Returns
        -------
        Tile or None
            The live tile, or None when the handle is stale or unknown.
        """
        index, generation = tile_id
        if not 0 <= index < len(self._slots) or self._generations[index] != generation:
            return None
        return self._slots[index]

    def destroy(self, tile_id: TileId) -> bool:
        """
        Destroy a tile. Stale handles are ignored.

        Returns
        -------
        bool
            True if a live tile was destroyed.
        """
        if self.get(tile_id) is None:
            return False

        index = tile_id.index
        self._slots[index] = None
        self._generations[index] += 1
        self._free.append(index)
        return True

    def clear(self):
        """Destroy every live tile."""
        for tile in list(self):
            self.destroy(tile.tile_id)
