"""Column compaction and refill after a match pass.

Each column is swept once from the bottom row to the top. Surviving tiles are
pulled down onto the floor pointer as falling tiles that keep whatever
distance and velocity they already had, so their on-screen position does not
jump. Rows left empty at the top are refilled with new falling tiles that all
share one starting distance.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from tilefall.components.board import Board
from tilefall.components.tile_state import JUST_MATCHED, Falling, JustMatched
from tilefall.utils.color_source import ColorSource

logger = logging.getLogger(__name__)


class BoardInvariantError(RuntimeError):
    """A column left the dropper in a state it must never reach."""

    def __init__(self, col: int, violations: List[str]):
        self.col = col
        self.violations = list(violations)
        super().__init__(f"column {col}: " + "; ".join(self.violations))


@dataclass(slots=True)
class DropResult:
    col: int
    moved: int = 0
    spawned: List[int] = field(default_factory=list)
    spawn_distance: float = 0.0
    violations: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.moved or self.spawned)


def drop_column(board: Board, col: int, color_source: ColorSource, tile_height: float) -> DropResult:
    """Compact one column over its JustMatched cells and refill from above.

    A column without JustMatched cells comes back unchanged.
    """
    cells = board.column(col)
    result = DropResult(col=col)
    floor = board.rows - 1
    for row in range(board.rows - 1, -1, -1):
        state = cells[row]
        if isinstance(state, JustMatched):
            continue
        if row == floor:
            floor -= 1
            continue
        gap = (floor - row) * tile_height
        if isinstance(state, Falling):
            cells[floor] = Falling(state.color, state.distance + gap, state.velocity)
        else:
            cells[floor] = Falling(state.color, gap, 0.0)
        # Tombstone the source so nothing reads it twice.
        cells[row] = JUST_MATCHED
        floor -= 1
        result.moved += 1

    if floor >= 0:
        distance = (floor + 1) * tile_height
        below_row = floor + 1
        if below_row < board.rows:
            below = cells[below_row]
            if isinstance(below, Falling):
                distance = max(distance, below.distance)
        for row in range(floor, -1, -1):
            cells[row] = Falling(color_source(), distance, 0.0)
        result.spawned = list(range(floor + 1))
        result.spawn_distance = distance

    board.set_column(col, cells)
    return result


def validate_column(board: Board, col: int) -> List[str]:
    """Describe every broken drop post-condition in a column (empty when sound)."""
    violations: List[str] = []
    cells = board.cells[col]
    for row, state in enumerate(cells):
        if isinstance(state, JustMatched):
            violations.append(f"row {row} still JustMatched")
    for row in range(board.rows - 1):
        upper = cells[row]
        lower = cells[row + 1]
        if isinstance(upper, Falling) and isinstance(lower, Falling) and upper.distance < lower.distance:
            violations.append(
                f"row {row} distance {upper.distance} below row {row + 1} distance {lower.distance}"
            )
    return violations


def repair_column(board: Board, col: int, color_source: ColorSource, tile_height: float) -> None:
    """Force a column back into a legal state.

    Leftover JustMatched cells become new falling tiles and every falling tile
    is lifted to at least the distance of the falling tile below it.
    """
    cells = board.cells[col]
    below: Falling | None = None
    for row in range(board.rows - 1, -1, -1):
        state = cells[row]
        if isinstance(state, JustMatched):
            floor_distance = below.distance if below is not None else 0.0
            state = Falling(color_source(), max(tile_height, floor_distance), 0.0)
        if isinstance(state, Falling) and below is not None and state.distance < below.distance:
            state = Falling(state.color, below.distance, min(state.velocity, below.velocity))
        cells[row] = state
        below = state if isinstance(state, Falling) else None


def drop_columns(
    board: Board,
    color_source: ColorSource,
    tile_height: float,
    *,
    strict: bool = True,
) -> List[DropResult]:
    """Run the dropper on every column and check each column afterwards."""
    results: List[DropResult] = []
    for col in range(board.cols):
        result = drop_column(board, col, color_source, tile_height)
        violations = validate_column(board, col)
        if violations:
            if strict:
                raise BoardInvariantError(col, violations)
            logger.error("Repairing column %d after drop: %s", col, "; ".join(violations))
            repair_column(board, col, color_source, tile_height)
            result.violations = violations
        results.append(result)
    return results
