# -*- coding: utf-8 -*-
"""
Graphical User Interface for the 2048 turn engine.

This module provides functionality to create and manage a graphical window for displaying the live
tiles of a game, including tiles in flight. It utilizes Matplotlib for rendering and handling user
interactions. The window only reads game state; it never mutates it.
"""
from typing import Callable, Iterable, Optional

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event
from matplotlib.patches import Rectangle

from tileturn.config import GameConfig
from tileturn.core.tiles import Tile, TileId
from tileturn.utils.geometry import pos_to_world


class WindowBoard:
    """
    A class for rendering the 2048 board using Matplotlib.

    Methods
    -------
    show_tiles(tiles, score, high_score, game_over, locate)
        Redraw the live tiles and the score line.
    register_key_handler(key_handler: Callable)
        Register a function to handle keyboard events.
    register_timer(interval: int, callback: Callable)
        Call a function periodically from the Matplotlib event loop.
    show(block: bool = True)
        Display the game window.
    close()
        Close the game window.
    """

    # ##: Colors mapping for different tile values.
    COLORS = {
        2: "#FFD100",
        4: "#FF8426",
        8: "#D62411",
        16: "#FF80A4",
        32: "#FF2674",
        64: "#BFFF3C",
        128: "#10D275",
        256: "#28C8E1",
        512: "#1F5594",
        1024: "#430067",
        2048: "#94216A",
        4096: "#9B7C44",
        8192: "#C771F4",
        16384: "#6728E1",
        32768: "#EDC783",
        65536: "#9034C0",
    }
    EMPTY_COLOR = "#CCC0B3"
    UNKNOWN_COLOR = "#000000"

    def __init__(self, title: str, config: GameConfig):
        """
        Initialize the game board window.

        Parameters
        ----------
        title : str
            The title of the window.
        config : GameConfig
            Provides the board size and tile geometry.
        """
        self._config = config
        self.fig, self.axe = plt.subplots()
        self.fig.canvas.manager.set_window_title(title)
        self._setup_axes()
        self._artists = []
        self.closed = False
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

    def _setup_axes(self):
        """
        Set up the axes in pixel coordinates and draw the empty cells.
        """
        side = self._config.board_size()
        self.fig.subplots_adjust(left=0.02, bottom=0.02, right=0.98, top=0.9)
        self.axe.set_xlim(0, side)
        self.axe.set_ylim(side, 0)
        self.axe.set_aspect("equal")
        self.axe.set_axis_off()

        for row in range(self._config.size):
            for col in range(self._config.size):
                self.axe.add_patch(self._cell_patch(pos_to_world((row, col), self._config), self.EMPTY_COLOR))

    def _cell_patch(self, centre: tuple[float, float], color: str) -> Rectangle:
        half = self._config.tile_size / 2 * 0.92
        return Rectangle((centre[0] - half, centre[1] - half), 2 * half, 2 * half, facecolor=color, edgecolor="none")

    def _close_handler(self, event: Optional[Event] = None):
        """
        Handle the window close event.

        Parameters
        ----------
        event : Optional[Event]
            The close event (not used but required for event handling).
        """
        self.closed = True

    def show_tiles(
        self,
        tiles: Iterable[Tile],
        score: int,
        high_score: int,
        game_over: bool = False,
        locate: Optional[Callable[[TileId], Optional[tuple[float, float]]]] = None,
    ):
        """
        Redraw the live tiles.

        Parameters
        ----------
        tiles : Iterable[Tile]
            Live tiles of the game.
        score : int
            Current score.
        high_score : int
            Session high score.
        game_over : bool, optional
            Whether to draw the game over banner.
        locate : Callable, optional
            Pixel centre of a tile in flight, or None when the tile rests on its cell.
        """
        for artist in self._artists:
            artist.remove()
        self._artists = []

        for tile in tiles:
            centre = locate(tile.tile_id) if locate is not None else None
            if centre is None:
                centre = pos_to_world(tile.position, self._config)
            patch = self._cell_patch(centre, self.COLORS.get(tile.value, self.UNKNOWN_COLOR))
            self.axe.add_patch(patch)
            text = self.axe.text(
                centre[0], centre[1], str(tile.value), ha="center", va="center", color="white", fontweight="demibold"
            )
            self._artists.extend([patch, text])

        self.axe.set_title(f"Score: {score}    High Score: {high_score}")
        if game_over:
            side = self._config.board_size()
            banner = self.axe.text(
                side / 2, side / 2, "GAME OVER", ha="center", va="center", fontsize="xx-large", fontweight="bold"
            )
            self._artists.append(banner)

        self.fig.canvas.draw_idle()

    def register_key_handler(self, key_handler: Callable):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler : Callable
            A function to handle keyboard events.
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    def register_timer(self, interval: int, callback: Callable):
        """
        Call ``callback`` every ``interval`` milliseconds.

        Returns
        -------
        matplotlib.backend_bases.TimerBase
            The started timer; keep a reference to it.
        """
        timer = self.fig.canvas.new_timer(interval=interval)
        timer.add_callback(callback)
        timer.start()
        return timer

    @classmethod
    def show(cls, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """
        Close the game window.
        """
        plt.close(self.fig)
        self.closed = True
