from __future__ import annotations

import logging

from esper import World

from tilefall.components.animation_swap import SwapAnimation
from tilefall.components.board import Board, Position
from tilefall.components.tile_state import Settled, Swapping
from tilefall.config import BoardConfig
from tilefall.events.bus import (
    EventBus,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_STARTED,
    EVENT_TILE_SWAP_REJECTED,
    EVENT_TILE_SWAP_FINALIZE,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_CANCELLED,
)
from tilefall.systems.board_ops import get_board
from tilefall.systems.match import has_match_through, is_adjacent, settled_color_map

logger = logging.getLogger(__name__)


class SwapSystem:
    """Runs the single in-flight swap.

    Idle -> forward -> idle (committed, recheck) with an optional reverse phase
    that plays an unmatched swap back when ``require_match`` is set. The cells
    hold ``Swapping`` with their post-swap colors for the whole animation.
    """

    def __init__(self, world: World, event_bus: EventBus, config: BoardConfig):
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.swap_entity: int | None = None
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def active_swap(self) -> SwapAnimation | None:
        if self.swap_entity is None:
            return None
        return self.world.component_for_entity(self.swap_entity, SwapAnimation)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.request(tuple(src), tuple(dst))

    def request(self, src: Position, dst: Position) -> bool:
        """Start a swap between two cells; False when the gesture is rejected."""
        board = get_board(self.world)
        a = board.get(*src)
        b = board.get(*dst)
        if self.swap_entity is not None:
            return self._reject(src, dst, 'busy')
        if not is_adjacent(src, dst):
            return self._reject(src, dst, 'not_adjacent')
        if not (isinstance(a, Settled) and isinstance(b, Settled)):
            return self._reject(src, dst, 'not_settled')
        board.set(*src, Swapping(b.color))
        board.set(*dst, Swapping(a.color))
        self.swap_entity = self.world.create_entity(
            SwapAnimation(src=src, dst=dst, duration=self.config.swap_time)
        )
        self.event_bus.emit(EVENT_TILE_SWAP_STARTED, src=src, dst=dst)
        return True

    def _reject(self, src: Position, dst: Position, reason: str) -> bool:
        logger.debug("Swap %s -> %s rejected: %s", src, dst, reason)
        self.event_bus.emit(EVENT_TILE_SWAP_REJECTED, src=src, dst=dst, reason=reason)
        return False

    def advance(self, dt: float) -> bool:
        """Step the active swap; True when tiles settled and matches need a recheck."""
        swap = self.active_swap()
        if swap is None:
            return False
        board = get_board(self.world)
        a = board.get(*swap.src)
        b = board.get(*swap.dst)
        if not (isinstance(a, Swapping) and isinstance(b, Swapping)):
            return self._cancel(board, swap)
        if swap.phase == 'forward':
            swap.elapsed += dt
            if swap.elapsed <= swap.duration:
                return False
            if self.config.require_match and not self._forms_match(board, swap):
                swap.phase = 'reverse'
                swap.elapsed = swap.duration
                self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=swap.src, dst=swap.dst)
                return False
            board.set(*swap.src, Settled(a.color))
            board.set(*swap.dst, Settled(b.color))
            src, dst = swap.src, swap.dst
            self._end_swap()
            self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=src, dst=dst)
            return True
        # Reverse: play back toward the starting cells and restore the colors.
        swap.elapsed -= dt
        if swap.elapsed > 0.0:
            return False
        board.set(*swap.src, Settled(b.color))
        board.set(*swap.dst, Settled(a.color))
        self._end_swap()
        return False

    def _forms_match(self, board: Board, swap: SwapAnimation) -> bool:
        colors = settled_color_map(board)
        colors[swap.src] = board.get(*swap.src).color
        colors[swap.dst] = board.get(*swap.dst).color
        return has_match_through(colors, swap.src) or has_match_through(colors, swap.dst)

    def _cancel(self, board: Board, swap: SwapAnimation) -> bool:
        # An endpoint was pulled away (e.g. dropped into a gap); settle whatever is left.
        for pos in (swap.src, swap.dst):
            state = board.get(*pos)
            if isinstance(state, Swapping):
                board.set(*pos, Settled(state.color))
        src, dst = swap.src, swap.dst
        self._end_swap()
        logger.debug("Swap %s -> %s cancelled: endpoint no longer swapping", src, dst)
        self.event_bus.emit(EVENT_TILE_SWAP_CANCELLED, src=src, dst=dst, reason='endpoint_moved')
        return True

    def _end_swap(self):
        if self.swap_entity is not None:
            self.world.delete_entity(self.swap_entity, immediate=True)
        self.swap_entity = None
