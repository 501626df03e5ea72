from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from tilefall.components.board import Board, Position
from tilefall.components.tile_color import TileColor
from tilefall.components.tile_state import JUST_MATCHED, matchable_color

MIN_RUN = 3


def _runs_in_line(line: List[Tuple[Position, Optional[TileColor]]]) -> List[List[Position]]:
    runs: List[List[Position]] = []
    run: List[Position] = []
    last_color: Optional[TileColor] = None
    for pos, color in line:
        if color is not None and color == last_color:
            run.append(pos)
            continue
        if len(run) >= MIN_RUN:
            runs.append(run)
        run = [pos] if color is not None else []
        last_color = color
    # The last cell of the line closes the final run; lines never wrap.
    if len(run) >= MIN_RUN:
        runs.append(run)
    return runs


def find_runs(board: Board) -> List[List[Position]]:
    """Maximal horizontal and vertical runs of 3+ equal settled colors.

    Both passes read the same board state; a tile can belong to one horizontal
    and one vertical run.
    """
    runs: List[List[Position]] = []
    for row in range(board.rows):
        line = [((col, row), matchable_color(board.cells[col][row])) for col in range(board.cols)]
        runs.extend(_runs_in_line(line))
    for col in range(board.cols):
        line = [((col, row), matchable_color(board.cells[col][row])) for row in range(board.rows)]
        runs.extend(_runs_in_line(line))
    return runs


def resolve_matches(board: Board) -> List[Position]:
    """Mark every tile in a run as JustMatched; return the marked positions."""
    matched = sorted({pos for run in find_runs(board) for pos in run})
    for col, row in matched:
        board.cells[col][row] = JUST_MATCHED
    return matched


def is_adjacent(a: Position, b: Position) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def has_match_through(colors: Dict[Position, TileColor], pos: Position) -> bool:
    """Return True if a horizontal or vertical run of 3+ passes through pos."""
    col, row = pos
    color = colors.get(pos)
    if color is None:
        return False
    # Horizontal sweep
    h_len = 1
    c = col - 1
    while colors.get((c, row)) == color:
        h_len += 1
        c -= 1
    c = col + 1
    while colors.get((c, row)) == color:
        h_len += 1
        c += 1
    if h_len >= MIN_RUN:
        return True
    # Vertical sweep
    v_len = 1
    r = row - 1
    while colors.get((col, r)) == color:
        v_len += 1
        r -= 1
    r = row + 1
    while colors.get((col, r)) == color:
        v_len += 1
        r += 1
    return v_len >= MIN_RUN


def settled_color_map(board: Board) -> Dict[Position, TileColor]:
    mapping: Dict[Position, TileColor] = {}
    for col, row in board.positions():
        color = matchable_color(board.cells[col][row])
        if color is not None:
            mapping[(col, row)] = color
    return mapping


def creates_match(
    board: Board, a: Position, b: Position, *, colors: Dict[Position, TileColor] | None = None
) -> bool:
    """Return True if exchanging the settled colors at a and b would create a run."""
    tile_map = colors if colors is not None else settled_color_map(board)
    if a not in tile_map or b not in tile_map:
        return False
    swapped = tile_map.copy()
    swapped[a], swapped[b] = swapped[b], swapped[a]
    return has_match_through(swapped, a) or has_match_through(swapped, b)


def find_valid_swaps(board: Board) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent settled pairs whose exchange would create a match."""
    tile_map = settled_color_map(board)
    swaps: List[Tuple[Position, Position]] = []
    for col, row in board.positions():
        pos = (col, row)
        if pos not in tile_map:
            continue
        for other in ((col + 1, row), (col, row + 1)):
            if other in tile_map and creates_match(board, pos, other, colors=tile_map):
                swaps.append((pos, other))
    return swaps
