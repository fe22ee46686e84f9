"""
Move resolution for the 2048 game.

A move is resolved line by line. Every tile on the board receives exactly one instruction: a ``Slide``
towards its new cell, or a ``MergeInto`` the tile it is absorbed by. Instructions are consumed by the
animation subsystem; the board itself is left untouched.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Sequence, Union

from numpy import ndarray

from tileturn.core.board import Board, Position, TileRef
from tileturn.core.tiles import TileId


class Direction(str, Enum):
    """
    Direction of a move, named after the edge tiles move toward.

    Building a Direction from an unknown value raises ``ValueError``.
    """

    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    def scan(self, size: int) -> tuple[Position, Position, Position]:
        """
        Get the scan parameters of the direction.

        Parameters
        ----------
        size : int
            Side of the board.

        Returns
        -------
        tuple
            ``(origin, primary, secondary)``: the leading cell of the first line, the step along a line
            (from leading to trailing edge) and the step from one line to the next, all as ``(row, col)``.
        """
        last = size - 1
        return {
            Direction.UP: ((0, 0), (1, 0), (0, 1)),
            Direction.DOWN: ((last, 0), (-1, 0), (0, 1)),
            Direction.LEFT: ((0, 0), (0, 1), (1, 0)),
            Direction.RIGHT: ((0, last), (0, -1), (1, 0)),
        }[self]


class Slide(NamedTuple):
    """Move a tile to ``target``; zero-distance slides are kept."""

    origin: Position
    target: Position


class MergeInto(NamedTuple):
    """Move a tile to ``target`` and fold it into ``survivor``."""

    origin: Position
    target: Position
    survivor: TileId


Instruction = Union[Slide, MergeInto]


@dataclass
class MoveResolution:
    """
    Result of resolving one move.

    Attributes
    ----------
    direction : Direction
        Resolved direction.
    instructions : dict[TileId, Instruction]
        One instruction per tile on the board.
    gain : int
        Sum of the values created by merges.
    merges : int
        Number of merges.
    changed : bool
        True if at least one tile moves or merges.
    """

    direction: Direction
    instructions: dict[TileId, Instruction] = field(default_factory=dict)
    gain: int = 0
    merges: int = 0
    changed: bool = False


def resolve_line(cells: Sequence[TileRef | None]) -> tuple[list[tuple[TileRef, int, TileRef | None]], int]:
    """
    Compact and merge one line.

    Parameters
    ----------
    cells : Sequence[TileRef | None]
        The line, ordered from its leading edge to its trailing edge.

    Returns
    -------
    placements : list[tuple[TileRef, int, TileRef | None]]
        For every tile in scan order: the tile, its target slot along the line and the tile it merges
        into (None for a plain slide).
    gain : int
        Sum of the merged values.

    Notes
    -----
    - A tile only merges with the immediately preceding surviving tile.
    - A slot takes at most one merge per move: ``[2, 2, 2, _]`` gives ``[4, 2, _, _]``.
    """
    # ##: Compaction stack of [tile, value, merged].
    stack: list[list] = []
    placements = []
    gain = 0

    for tile in cells:
        if tile is None:
            continue

        if stack and stack[-1][1] == tile.value and not stack[-1][2]:
            top = stack[-1]
            top[1] *= 2
            top[2] = True
            gain += top[1]
            placements.append((tile, len(stack) - 1, top[0]))
        else:
            placements.append((tile, len(stack), None))
            stack.append([tile, tile.value, False])

    return placements, gain


def resolve_move(board: Board, direction: Direction) -> MoveResolution:
    """
    Compute the instructions of a move.

    Parameters
    ----------
    board : Board
        Authoritative board; not modified.
    direction : Direction
        Direction of the move.

    Returns
    -------
    MoveResolution
        Instructions, score gain, merge count and whether anything changed.
    """
    direction = Direction(direction)
    size = board.size
    (row, col), (d_row, d_col), (s_row, s_col) = direction.scan(size)
    resolution = MoveResolution(direction=direction)

    for _ in range(size):
        line = [board.get((row + d_row * step, col + d_col * step)) for step in range(size)]
        placements, gain = resolve_line(line)

        for tile, slot, survivor in placements:
            target = (row + d_row * slot, col + d_col * slot)
            if survivor is None:
                resolution.instructions[tile.tile_id] = Slide(tile.position, target)
            else:
                resolution.instructions[tile.tile_id] = MergeInto(tile.position, target, survivor.tile_id)
                resolution.merges += 1
            if survivor is not None or target != tile.position:
                resolution.changed = True

        resolution.gain += gain
        row, col = row + s_row, col + s_col

    return resolution


def legal_directions_mask(values: ndarray) -> dict[Direction, bool]:
    """
    Check every direction in a single pass.

    Parameters
    ----------
    values : ndarray
        Board values, 0 for empty cells.

    Returns
    -------
    dict[Direction, bool]
        True where a move in that direction changes the board.
    """
    # ##>: Compute horizontal and vertical merges once.
    left_cols, right_cols = values[:, :-1], values[:, 1:]
    h_can_merge = bool(((left_cols != 0) & (left_cols == right_cols)).any())

    top_rows, bottom_rows = values[:-1, :], values[1:, :]
    v_can_merge = bool(((top_rows != 0) & (top_rows == bottom_rows)).any())

    # ##>: Slides need an empty cell on the leading side of a tile.
    return {
        Direction.LEFT: h_can_merge or bool(((left_cols == 0) & (right_cols != 0)).any()),
        Direction.UP: v_can_merge or bool(((top_rows == 0) & (bottom_rows != 0)).any()),
        Direction.RIGHT: h_can_merge or bool(((right_cols == 0) & (left_cols != 0)).any()),
        Direction.DOWN: v_can_merge or bool(((bottom_rows == 0) & (top_rows != 0)).any()),
    }


def can_move(values: ndarray, direction: Direction) -> bool:
    """Check whether a move in ``direction`` changes the board."""
    return legal_directions_mask(values)[Direction(direction)]


def legal_directions(values: ndarray) -> list[Direction]:
    """List the directions that change the board."""
    return [direction for direction, legal in legal_directions_mask(values).items() if legal]
