from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from esper import World

from tilefall.components.animation_swap import SwapAnimation
from tilefall.components.board import Position
from tilefall.components.tile_color import TileColor
from tilefall.components.tile_state import Falling, tile_color
from tilefall.config import BoardConfig
from tilefall.systems.board_ops import get_board


@dataclass(slots=True, frozen=True)
class CellView:
    """What to draw for one cell. Offsets are pixels, y grows downward."""
    col: int
    row: int
    color: Optional[TileColor]
    offset_x: float = 0.0
    offset_y: float = 0.0


@dataclass(slots=True)
class BoardSnapshot:
    """Frame-scoped, read-only view of the board for a renderer."""
    cols: int
    rows: int
    tile_size: float
    cells: Dict[Position, CellView] = field(default_factory=dict)

    def cell(self, col: int, row: int) -> CellView:
        return self.cells[(col, row)]

    def drawable(self) -> List[CellView]:
        return [view for view in self.cells.values() if view.color is not None]


def swap_offsets(swap: SwapAnimation, tile_size: float, swerve: float) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Pixel offsets of the src and dst tiles along the curved swap path.

    Each cell already holds its post-swap color, so its tile starts over the
    other cell and slides home; the sine term bends the path perpendicular to
    the swap axis, peaking halfway.
    """
    t = swap.progress
    dc = swap.dst[0] - swap.src[0]
    dr = swap.dst[1] - swap.src[1]
    bend = math.sin(t * math.pi) * swerve
    dis_x = bend * dr
    dis_y = bend * dc
    off_x = dc * tile_size * (1.0 - t) + dis_x
    off_y = dr * tile_size * (1.0 - t) + dis_y
    return (off_x, off_y), (-off_x, -off_y)


def build_snapshot(world: World, config: BoardConfig) -> BoardSnapshot:
    board = get_board(world)
    snapshot = BoardSnapshot(cols=board.cols, rows=board.rows, tile_size=config.tile_size)
    for col, row in board.positions():
        state = board.cells[col][row]
        offset_y = -state.distance if isinstance(state, Falling) else 0.0
        snapshot.cells[(col, row)] = CellView(col, row, tile_color(state), 0.0, offset_y)
    for _, swap in world.get_component(SwapAnimation):
        src_off, dst_off = swap_offsets(swap, config.tile_size, config.swap_swerve)
        for pos, (off_x, off_y) in ((swap.src, src_off), (swap.dst, dst_off)):
            view = snapshot.cells[pos]
            snapshot.cells[pos] = CellView(view.col, view.row, view.color, off_x, off_y)
    return snapshot
