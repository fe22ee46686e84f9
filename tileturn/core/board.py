"""
Authoritative grid of tile slots.

The board stores immutable ``TileRef`` snapshots rather than live tiles, so it stays frozen while an
animation mutates the live tiles. It is resynchronised from the arena once the animation settles.
"""

from typing import Iterable, Iterator, NamedTuple

from numpy import asarray, int64, ndarray, zeros

from tileturn.core.tiles import TileArena, TileId

Position = tuple[int, int]


class TileRef(NamedTuple):
    """Snapshot of a tile as seen by the board."""

    tile_id: TileId
    value: int
    position: Position


class Board:
    """
    Square grid of optional tile references, stored row-major.

    Parameters
    ----------
    size : int
        Side of the grid.
    """

    def __init__(self, size: int = 4):
        if size < 1:
            raise ValueError(f'size must be >= 1, got {size}')
        self.size = size
        self._cells: list[TileRef | None] = [None] * (size * size)

    def __iter__(self) -> Iterator[TileRef]:
        return (cell for cell in self._cells if cell is not None)

    def __repr__(self) -> str:
        return f'Board(size={self.size}, values={self.values().tolist()})'

    def index(self, position: Position) -> int:
        """
        Convert a position into a storage index.

        Raises
        ------
        IndexError
            If the position is outside the board.
        """
        row, col = position
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f'position {position} outside a {self.size}x{self.size} board')
        return row * self.size + col

    def position(self, index: int) -> Position:
        """Convert a storage index into a ``(row, col)`` position."""
        if not 0 <= index < len(self._cells):
            raise IndexError(f'index {index} outside a {self.size}x{self.size} board')
        return divmod(index, self.size)

    def get(self, position: Position) -> TileRef | None:
        return self._cells[self.index(position)]

    def set(self, position: Position, tile: TileRef | None):
        self._cells[self.index(position)] = tile

    def clear(self):
        """Empty every cell."""
        self._cells = [None] * (self.size * self.size)

    def rebuild_from(self, tiles: Iterable[tuple[TileId, int, Position]]):
        """
        Resynchronise the board from live tile records.

        Parameters
        ----------
        tiles : Iterable[tuple[TileId, int, Position]]
            ``(tile_id, value, position)`` triples; ``Tile`` objects from a ``TileArena`` are accepted too.
        """
        self.clear()
        for tile in tiles:
            if not isinstance(tile, tuple):
                tile = (tile.tile_id, tile.value, tile.position)
            tile_id, value, position = tile
            self.set(position, TileRef(tile_id, value, tuple(position)))

    def empty_cells(self) -> list[Position]:
        """List the empty positions, in row-major order."""
        return [self.position(index) for index, cell in enumerate(self._cells) if cell is None]

    @property
    def occupied(self) -> int:
        return sum(cell is not None for cell in self._cells)

    @property
    def is_full(self) -> bool:
        return all(cell is not None for cell in self._cells)

    def values(self) -> ndarray:
        """
        Get the tile values as a grid.

        Returns
        -------
        ndarray
            ``(size, size)`` int64 array, 0 for empty cells.
        """
        grid = zeros(self.size * self.size, dtype=int64)
        for index, cell in enumerate(self._cells):
            if cell is not None:
                grid[index] = cell.value
        return grid.reshape(self.size, self.size)

    @classmethod
    def from_values(cls, values, arena: TileArena) -> 'Board':
        """
        Build a board from a grid of values, allocating a tile for every non-zero cell.

        Parameters
        ----------
        values : array_like
            Square grid, 0 for empty cells.
        arena : TileArena
            Arena owning the created tiles.

        Returns
        -------
        Board
            The populated board.
        """
        grid = asarray(values, dtype=int64)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f'expected a square grid, got shape {grid.shape}')

        board = cls(size=grid.shape[0])
        for row, col in zip(*grid.nonzero()):
            position = (int(row), int(col))
            tile = arena.spawn(int(grid[position]), position)
            board.set(position, TileRef(tile.tile_id, tile.value, position))
        return board
