"""
Random placement of new tiles.
"""

from numpy.random import PCG64DXSM, Generator, default_rng

from tileturn.core.board import Board, TileRef
from tileturn.core.tiles import Tile, TileArena

# ##>: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Module-level generator for performance (avoids repeated initialization).
_GENERATOR = default_rng(PCG64DXSM())


def make_generator(seed: int | None = None) -> Generator:
    """Get a generator for ``seed``, or the module-level one when no seed is given."""
    return default_rng(seed) if seed is not None else _GENERATOR


def fill_cells(
    board: Board,
    arena: TileArena,
    number_tile: int,
    rng: Generator | None = None,
    four_probability: float = TILE_SPAWN_PROBS[4],
) -> list[Tile]:
    """
    Fill empty cells with new tiles (2 or 4).

    Parameters
    ----------
    board : Board
        The board to fill. **Modified in-place.**
    arena : TileArena
        Arena owning the new tiles.
    number_tile : int
        Number of new tiles to add.
    rng : Generator, optional
        Random generator; the module-level generator is used when omitted.
    four_probability : float, optional
        Chance that a new tile is a 4 (default 0.1).

    Returns
    -------
    list[Tile]
        The created tiles, in placement order.

    Notes
    -----
    - Cells are drawn uniformly among the empty ones, without repetition.
    - If there are fewer empty cells than requested, it fills all available cells.
    - A full board is left untouched.
    """
    rng = rng if rng is not None else _GENERATOR

    # ##: Only if there are still available places.
    available_cells = board.empty_cells()
    number_tile = min(number_tile, len(available_cells))
    if number_tile <= 0:
        return []

    # ##: Randomly choose cell positions and values.
    chosen_indices = rng.choice(len(available_cells), size=number_tile, replace=False)
    values = rng.choice([2, 4], size=number_tile, p=[1.0 - four_probability, four_probability])

    created = []
    for index, value in zip(chosen_indices, values):
        position = available_cells[int(index)]
        tile = arena.spawn(int(value), position)
        board.set(position, TileRef(tile.tile_id, tile.value, position))
        created.append(tile)
    return created
