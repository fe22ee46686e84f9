# -*- coding: utf-8 -*-
"""
Play 2048 Game
"""
import logging
from argparse import ArgumentParser
from typing import Any

from tileturn.config import GameConfig
from tileturn.core import Direction
from tileturn.engine import TurnMachine, TurnPhase
from tileturn.utils import SimulatedAnimator
from tileturn.utils.windows import WindowBoard

# ##: Keyboard mapping.
KEYS = {
    "up": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "s": Direction.DOWN,
    "left": Direction.LEFT,
    "a": Direction.LEFT,
    "right": Direction.RIGHT,
    "d": Direction.RIGHT,
}
NEW_GAME_KEYS = {"r", "backspace"}

# ##: Frame interval in milliseconds.
FRAME_MS = 16


class Session:
    """
    Glue between the window, the animation player and the turn machine.

    Parameters
    ----------
    config: GameConfig
        Game configuration
    """

    def __init__(self, config: GameConfig):
        self.animator = SimulatedAnimator(on_complete=self._on_complete, config=config)
        self.machine = TurnMachine(animator=self.animator, config=config)
        self.window = WindowBoard(title="2048 Game", config=config)

    def _on_complete(self, tile_id):
        self.machine.notify_animation_complete(tile_id)

    def redraw(self):
        """
        Redraw the game board.
        """
        self.window.show_tiles(
            self.machine.live_tiles(),
            score=self.machine.score,
            high_score=self.machine.high_score,
            game_over=self.machine.phase is TurnPhase.GAME_OVER,
            locate=self.animator.world_position,
        )

    def frame(self):
        """
        Advance the animation clock and the turn machine by one frame.
        """
        self.animator.advance(FRAME_MS / 1000)
        self.machine.tick()
        self.redraw()

    def key_handler(self, event: Any):
        """
        Handle the keyboard.

        Parameters
        ----------
        event: Any
            event to handle
        """
        if event.key == "escape":
            self.window.close()
            return None

        if event.key in NEW_GAME_KEYS and self.machine.phase in (TurnPhase.AWAITING_INPUT, TurnPhase.GAME_OVER):
            self.machine.request_new_game()
            return None

        if event.key in KEYS:
            self.machine.request_move(KEYS[event.key])
            return None


if __name__ == "__main__":
    parser = ArgumentParser(description="Play 2048 with the keyboard")
    parser.add_argument("--size", type=int, default=4, help="Side of the board")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the tile spawner")
    parser.add_argument("--spawn-on-unchanged-move", action="store_true", help="Spawn a tile after blocked moves")
    parser.add_argument("--verbose", action="store_true", help="Log phase transitions")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s"
    )

    session = Session(
        GameConfig(
            size=args.size, seed=args.seed, tile_size=100, spawn_on_unchanged_move=args.spawn_on_unchanged_move
        )
    )
    session.window.register_key_handler(session.key_handler)
    timer = session.window.register_timer(FRAME_MS, session.frame)

    # Blocking event loop
    session.window.show(block=True)
