from __future__ import annotations

import random
from typing import List, Sequence

from esper import World

from tilefall.components.board import Board
from tilefall.components.palette import TilePalette
from tilefall.components.tile_color import TileColor
from tilefall.components.tile_state import Settled
from tilefall.systems.match import find_runs, find_valid_swaps


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def get_palette(world: World) -> TilePalette:
    for _, palette in world.get_component(TilePalette):
        return palette
    raise RuntimeError("TilePalette component not found")


def fill_pattern(board: Board, colors: Sequence[TileColor]) -> None:
    """Deterministic diagonal layout; match-free with the full seven-color palette."""
    for col, row in board.positions():
        board.cells[col][row] = Settled(colors[(col * 3 + row) % len(colors)])


def fill_random(
    board: Board,
    colors: Sequence[TileColor],
    rng: random.Random,
    *,
    max_attempts: int = 200,
) -> None:
    """Fill the board with random settled tiles forming no match and at least one valid swap."""
    choices = list(colors)
    if not choices:
        raise ValueError("fill_random needs at least one color")
    for _ in range(max_attempts):
        layout: List[List[TileColor]] = []
        valid_layout = True
        for col in range(board.cols):
            column: List[TileColor] = []
            for row in range(board.rows):
                available = list(choices)
                # Prevent vertical triple: if the two cells above match, exclude that color.
                if row >= 2 and column[row - 1] == column[row - 2]:
                    available = [c for c in available if c != column[row - 1]]
                # Prevent horizontal triple: same check against the two columns to the left.
                if col >= 2 and layout[col - 1][row] == layout[col - 2][row]:
                    available = [c for c in available if c != layout[col - 1][row]]
                if not available:
                    valid_layout = False
                    break
                column.append(rng.choice(available))
            if not valid_layout:
                break
            layout.append(column)
        if not valid_layout:
            continue
        for col, row in board.positions():
            board.cells[col][row] = Settled(layout[col][row])
        if find_runs(board):
            continue
        if board.cols * board.rows >= 3 and not find_valid_swaps(board):
            continue
        return
    raise RuntimeError("Unable to fill board without matches and with a valid swap")
