from __future__ import annotations

import logging

from esper import World

from tilefall.components.board import Board
from tilefall.config import BoardConfig
from tilefall.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_MATCH_FOUND,
    EVENT_COLUMN_DROPPED,
    EVENT_TILES_SETTLED,
    EVENT_CASCADE_STEP,
    EVENT_CASCADE_COMPLETE,
    EVENT_BOARD_INVARIANT_VIOLATED,
)
from tilefall.systems.board import BoardSystem
from tilefall.systems.board_ops import get_board, get_palette
from tilefall.systems.falls import advance_falls
from tilefall.systems.gravity import drop_columns
from tilefall.systems.match import find_runs, resolve_matches
from tilefall.systems.swap import SwapSystem
from tilefall.utils.color_source import ColorSource, RandomColorSource

logger = logging.getLogger(__name__)


class GameLoopSystem:
    """Per-tick orchestration.

    Order within a tick: pending match resolution and column drops, queued
    swap gestures, swap animation, falling tiles. Each step reports whether the
    board needs another match pass; the results are OR-ed into the flag used
    on the next tick, so cascades play out over several ticks.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        config: BoardConfig,
        board_system: BoardSystem,
        swap_system: SwapSystem,
        color_source: ColorSource | None = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.board_system = board_system
        self.swap_system = swap_system
        if color_source is None:
            palette = get_palette(world)
            color_source = RandomColorSource(palette.spawnable_colors(), getattr(world, "random", None))
        self.color_source = color_source
        self.cascade_depth = 0
        # A starting layout may already contain runs (e.g. small palettes).
        self.recheck_pending = bool(find_runs(get_board(world)))
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        self.step(dt)

    def step(self, dt: float) -> None:
        board = get_board(self.world)
        recheck = False
        if self.recheck_pending:
            recheck = self._resolve(board)
        for src, dst in self.board_system.take_gestures():
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)
        if self.swap_system.advance(dt):
            recheck = True
        settled = advance_falls(board, dt, self.config.gravity)
        if settled:
            self.event_bus.emit(EVENT_TILES_SETTLED, positions=settled)
            recheck = True
        self.recheck_pending = recheck
        if self.cascade_depth and not recheck and self.is_quiet(board):
            logger.info("Cascade finished at depth %d", self.cascade_depth)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=self.cascade_depth)
            self.cascade_depth = 0

    def is_quiet(self, board: Board | None = None) -> bool:
        """True when nothing is pending, falling or swapping."""
        board = board or get_board(self.world)
        return (
            not self.recheck_pending
            and self.swap_system.active_swap() is None
            and board.falling_count() == 0
        )

    def _resolve(self, board: Board) -> bool:
        matched = resolve_matches(board)
        if not matched:
            return False
        self.cascade_depth += 1
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=matched, size=len(matched))
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=self.cascade_depth, positions=matched)
        results = drop_columns(
            board,
            self.color_source,
            self.config.tile_size,
            strict=self.config.strict_invariants,
        )
        for result in results:
            if result.violations:
                self.event_bus.emit(EVENT_BOARD_INVARIANT_VIOLATED, col=result.col, violations=result.violations)
            if result.changed:
                self.event_bus.emit(
                    EVENT_COLUMN_DROPPED,
                    col=result.col,
                    moved=result.moved,
                    spawned=result.spawned,
                    distance=result.spawn_distance,
                )
        return True
