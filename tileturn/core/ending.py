"""
Detection of the terminal state.
"""

from numpy import all as np_all
from numpy import any as np_any
from numpy import ndarray

from tileturn.core.board import Board


def is_done(values: ndarray) -> bool:
    """
    Check if the game has ended by determining if any moves are possible.

    Parameters
    ----------
    values : ndarray
        Board values, 0 for empty cells.

    Returns
    -------
    bool
        True if the game is over (no moves possible), False otherwise.

    Notes
    -----
    The game is over when there are no empty cells AND no adjacent cells have the same value.
    """
    return bool(
        np_all(values != 0)
        and not np_any(values[:-1] == values[1:])
        and not np_any(values[:, :-1] == values[:, 1:])
    )


def is_terminal(board: Board) -> bool:
    """
    Check the authoritative board for the terminal state.

    An empty cell always leaves a move available, so adjacency is only inspected on a full board.
    """
    if not board.is_full:
        return False
    return is_done(board.values())
