"""
Turn state machine of the 2048 game.

The machine is frame driven: the host calls ``tick`` once per frame. Between ticks, collaborators only
enqueue signals (move and new-game requests from the input mapper, completions from the animation
subsystem). Each tick drains the queues in a fixed order:

1. setup, on the very first tick;
2. new-game requests, which cancel any move in flight;
3. animation completions, committing slides and merges onto the live tiles;
4. settlement, once no instruction is pending: board resync, score, spawn;
5. spawn notifications, running the end check;
6. move requests, starting the next animation.

The board is only rebuilt in step 4, so it stays frozen while tiles are animating.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Protocol

from numpy.random import Generator

from tileturn.config import GameConfig
from tileturn.core.board import Board
from tileturn.core.ending import is_terminal
from tileturn.core.gamemove import Direction, Instruction, MergeInto, MoveResolution, resolve_move
from tileturn.core.score import ScoreTracker
from tileturn.core.spawn import fill_cells, make_generator
from tileturn.core.tiles import Tile, TileArena, TileId
from tileturn.engine.signals import AnimationComplete, MoveRequested, NewGameRequested, SignalQueues, TileAdded, drain

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class TurnPhase(str, Enum):
    """Phase of the current turn."""

    SETUP = 'setup'
    AWAITING_INPUT = 'awaiting_input'
    ANIMATING = 'animating'
    POST_ANIMATION = 'post_animation'
    GAME_OVER = 'game_over'


class Animator(Protocol):
    """
    Animation subsystem driven by the turn machine.

    For every submitted instruction, the subsystem must eventually call
    ``TurnMachine.notify_animation_complete`` exactly once with the instruction's tile id.
    """

    def submit(self, instructions: Mapping[TileId, Instruction]) -> None:
        ...


@dataclass
class TurnContext:
    """
    Everything the turn machine owns.

    Attributes
    ----------
    config : GameConfig
        Session configuration.
    board : Board
        Authoritative grid, rebuilt once per settled turn.
    arena : TileArena
        Live tiles, mutated by animation completions.
    score : ScoreTracker
        Score and high score.
    rng : Generator
        Spawn generator.
    phase : TurnPhase
        Active phase.
    pending : dict[TileId, Instruction]
        Instructions whose completion has not been observed yet.
    pending_gain : int
        Score gain of the move in flight.
    resolution : MoveResolution or None
        Last accepted move.
    """

    config: GameConfig
    board: Board
    arena: TileArena
    score: ScoreTracker
    rng: Generator
    phase: TurnPhase = TurnPhase.SETUP
    pending: dict[TileId, Instruction] = field(default_factory=dict)
    pending_gain: int = 0
    resolution: MoveResolution | None = None


class TurnMachine:
    """
    Sequence moves, animations, spawns and the end check.

    Parameters
    ----------
    animator : Animator
        Receives the instructions of every accepted move.
    config : GameConfig, optional
        Session configuration (default ``GameConfig()``).
    rng : Generator, optional
        Spawn generator; built from ``config.seed`` when omitted.
    """

    def __init__(self, animator: Animator, config: GameConfig | None = None, rng: Generator | None = None):
        config = config if config is not None else GameConfig()
        self.context = TurnContext(
            config=config,
            board=Board(config.size),
            arena=TileArena(),
            score=ScoreTracker(),
            rng=rng if rng is not None else make_generator(config.seed),
        )
        self.signals = SignalQueues()
        self._animator = animator

    # ##: Observation, for renderers.
    @property
    def phase(self) -> TurnPhase:
        return self.context.phase

    @property
    def board(self) -> Board:
        return self.context.board

    @property
    def score(self) -> int:
        return self.context.score.score

    @property
    def high_score(self) -> int:
        return self.context.score.high_score

    @property
    def pending(self) -> frozenset[TileId]:
        return frozenset(self.context.pending)

    def live_tiles(self) -> list[Tile]:
        return list(self.context.arena)

    # ##: Inbound signals.
    def request_move(self, direction: Direction) -> bool:
        """
        Ask for a move.

        Parameters
        ----------
        direction : Direction
            Direction of the move; unknown values raise ``ValueError``.

        Returns
        -------
        bool
            True if the request was queued, False if it was dropped because the machine is not awaiting input.
        """
        direction = Direction(direction)
        if self.context.phase is not TurnPhase.AWAITING_INPUT:
            _logger.debug('Move %s dropped during %s', direction.value, self.context.phase.value)
            return False
        self.signals.moves.append(MoveRequested(direction))
        return True

    def request_new_game(self):
        self.signals.new_games.append(NewGameRequested())

    def notify_animation_complete(self, tile_id: TileId):
        self.signals.completions.append(AnimationComplete(tile_id))

    # ##: Frame update.
    def tick(self) -> TurnPhase:
        """
        Advance the machine by one frame.

        Returns
        -------
        TurnPhase
            The phase at the end of the tick.
        """
        context = self.context

        if context.phase is TurnPhase.SETUP:
            self._setup()

        self._process_new_games()
        self._process_completions()

        if context.phase is TurnPhase.ANIMATING and not context.pending:
            self._enter(TurnPhase.POST_ANIMATION)
            self._settle()

        self._process_tiles_added()
        self._process_moves()
        return context.phase

    def _enter(self, phase: TurnPhase):
        _logger.debug('Phase %s -> %s', self.context.phase.value, phase.value)
        self.context.phase = phase

    def _spawn(self, number_tile: int) -> list[Tile]:
        context = self.context
        tiles = fill_cells(
            board=context.board,
            arena=context.arena,
            number_tile=number_tile,
            rng=context.rng,
            four_probability=context.config.four_probability,
        )
        for tile in tiles:
            self.signals.tiles_added.append(TileAdded(tile.tile_id))
        if len(tiles) < number_tile:
            _logger.debug('Spawned %d of %d tiles, board is full', len(tiles), number_tile)
        return tiles

    def _start_game(self):
        context = self.context
        context.arena.clear()
        context.board.clear()
        context.pending.clear()
        context.pending_gain = 0
        context.resolution = None
        context.score.reset()

        self._enter(TurnPhase.AWAITING_INPUT)
        self._spawn(context.config.start_tiles)

    def _setup(self):
        _logger.info('Setting up a %dx%d board', self.context.config.size, self.context.config.size)
        self._start_game()

    def _process_new_games(self):
        if not drain(self.signals.new_games):
            return

        cancelled = len(self.context.pending)
        self.signals.moves.clear()
        self._start_game()
        _logger.info('New game started (%d animations cancelled)', cancelled)

    def _process_completions(self):
        context = self.context
        for signal in drain(self.signals.completions):
            instruction = context.pending.pop(signal.tile_id, None)
            tile = context.arena.get(signal.tile_id)
            if instruction is None or tile is None:
                _logger.debug('Ignoring stale completion for %s', signal.tile_id)
                continue

            if isinstance(instruction, MergeInto):
                survivor = context.arena.get(instruction.survivor)
                if survivor is not None:
                    survivor.value *= 2
                context.arena.destroy(tile.tile_id)
            else:
                tile.position = instruction.target

    def _settle(self):
        context = self.context
        context.board.rebuild_from(context.arena)

        gain, context.pending_gain = context.pending_gain, 0
        context.score.add(gain)

        changed = context.resolution is not None and context.resolution.changed
        self._enter(TurnPhase.AWAITING_INPUT)
        if changed or context.config.spawn_on_unchanged_move:
            self._spawn(context.config.spawn_per_turn)
        else:
            _logger.debug('Move changed nothing, no tile spawned')

    def _process_tiles_added(self):
        if not drain(self.signals.tiles_added):
            return
        if self.context.phase is not TurnPhase.GAME_OVER and is_terminal(self.context.board):
            self._enter(TurnPhase.GAME_OVER)
            _logger.info('Game over with score %d (high score %d)', self.score, self.high_score)

    def _process_moves(self):
        requests = drain(self.signals.moves)
        if not requests:
            return

        context = self.context
        if context.phase is not TurnPhase.AWAITING_INPUT:
            _logger.debug('Dropped %d move(s) during %s', len(requests), context.phase.value)
            return
        if len(requests) > 1:
            _logger.debug('Dropped %d extra move(s) in the same frame', len(requests) - 1)

        resolution = resolve_move(context.board, requests[0].direction)
        if not resolution.instructions:
            return

        context.resolution = resolution
        context.pending = dict(resolution.instructions)
        context.pending_gain = resolution.gain
        self._enter(TurnPhase.ANIMATING)
        self._animator.submit(dict(resolution.instructions))
