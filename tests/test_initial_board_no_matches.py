import random

import pytest

from tilefall.components.board import Board
from tilefall.components.tile_color import TILE_COLORS
from tilefall.components.tile_state import Settled
from tilefall.systems.board_ops import fill_pattern, fill_random
from tilefall.systems.match import find_runs, find_valid_swaps
from tests.helpers import build_core


def test_default_pattern_board_is_quiet():
    _, core = build_core(cols=10, rows=10)
    board = core.board.board
    assert all(isinstance(board.get(c, r), Settled) for c, r in board.positions())
    assert find_runs(board) == []
    assert not core.loop.recheck_pending


def test_pattern_fill_follows_diagonal_stripes():
    board = Board(cols=3, rows=2)
    fill_pattern(board, TILE_COLORS)
    assert board.get(0, 0).color == TILE_COLORS[0]
    assert board.get(0, 1).color == TILE_COLORS[1]
    assert board.get(1, 0).color == TILE_COLORS[3]
    assert board.get(2, 1).color == TILE_COLORS[0]


@pytest.mark.parametrize("seed", range(5))
def test_random_fill_has_no_runs_and_a_move(seed):
    board = Board(cols=8, rows=8)
    fill_random(board, TILE_COLORS[:4], random.Random(seed))
    assert find_runs(board) == []
    assert find_valid_swaps(board)


def test_random_fill_is_seeded():
    first, second = Board(cols=6, rows=6), Board(cols=6, rows=6)
    fill_random(first, TILE_COLORS[:4], random.Random(3))
    fill_random(second, TILE_COLORS[:4], random.Random(3))
    assert first.cells == second.cells


def test_random_fill_needs_colors():
    with pytest.raises(ValueError):
        fill_random(Board(cols=3, rows=3), [], random.Random(0))


def test_random_initial_fill_through_config():
    _, core = build_core(cols=6, rows=6, initial_fill="random")
    assert find_runs(core.board.board) == []
