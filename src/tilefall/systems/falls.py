from __future__ import annotations

from typing import List

from tilefall.components.board import Board, Position
from tilefall.components.tile_state import Falling, Settled


def advance_falls(board: Board, dt: float, gravity: float) -> List[Position]:
    """Integrate every falling tile by one step; return the cells that settled.

    Columns are walked bottom row first because a tile is clamped against the
    already-updated tile directly below it: it may never sit lower, nor close in
    faster, than that tile.
    """
    if dt <= 0.0:
        return []
    settled: List[Position] = []
    drop = 0.5 * gravity * dt * dt
    for col in range(board.cols):
        cells = board.cells[col]
        for row in range(board.rows - 1, -1, -1):
            state = cells[row]
            if not isinstance(state, Falling):
                continue
            distance = state.distance - state.velocity * dt - drop
            velocity = state.velocity + gravity * dt
            if row + 1 < board.rows:
                below = cells[row + 1]
                if isinstance(below, Falling):
                    distance = max(distance, below.distance)
                    velocity = min(velocity, below.velocity)
            if distance <= 0.0:
                cells[row] = Settled(state.color)
                settled.append((col, row))
            else:
                cells[row] = Falling(state.color, distance, velocity)
    return settled
