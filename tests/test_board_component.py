import pytest

from tilefall.components.board import Board
from tilefall.components.tile_color import TileColor
from tilefall.components.tile_state import (
    JUST_MATCHED,
    Falling,
    JustMatched,
    Settled,
    Swapping,
    matchable_color,
    tile_color,
)
from tilefall.config import BoardConfig
from tilefall.events.bus import EventBus
from tilefall.systems.board import BoardSystem
from tilefall.world import create_world


def test_board_component_exists():
    bus = EventBus()
    config = BoardConfig(cols=7, rows=6)
    world = create_world(bus, config)
    BoardSystem(world, bus, config)
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    _, comp = boards[0]
    assert comp.rows == 6 and comp.cols == 7
    assert all(isinstance(comp.get(c, r), Settled) for c, r in comp.positions())


def test_get_set_round_trip():
    board = Board(cols=3, rows=2)
    board.set(2, 1, Settled(TileColor.CYAN))
    assert board.get(2, 1) == Settled(TileColor.CYAN)
    assert board.get(0, 0) is JUST_MATCHED


@pytest.mark.parametrize("col,row", [(3, 0), (0, 2), (-1, 0), (0, -1)])
def test_out_of_range_access_raises_index_error(col, row):
    board = Board(cols=3, rows=2)
    with pytest.raises(IndexError):
        board.get(col, row)
    with pytest.raises(IndexError):
        board.set(col, row, Settled(TileColor.RED))


def test_set_column_requires_full_height():
    board = Board(cols=2, rows=3)
    with pytest.raises(ValueError):
        board.set_column(0, [Settled(TileColor.RED)] * 2)
    with pytest.raises(IndexError):
        board.column(5)


def test_mismatched_cells_rejected():
    with pytest.raises(ValueError):
        Board(cols=2, rows=2, cells=[[JUST_MATCHED, JUST_MATCHED]])


def test_matchable_color_only_for_settled():
    assert matchable_color(Settled(TileColor.RED)) is TileColor.RED
    assert matchable_color(Swapping(TileColor.RED)) is None
    assert matchable_color(Falling(TileColor.RED, 10.0, 0.0)) is None
    assert matchable_color(JustMatched()) is None


def test_tile_color_hides_just_matched():
    assert tile_color(Falling(TileColor.BLUE, 3.0)) is TileColor.BLUE
    assert tile_color(Swapping(TileColor.GREEN)) is TileColor.GREEN
    assert tile_color(JUST_MATCHED) is None


def test_falling_count():
    board = Board(cols=2, rows=2)
    board.set(0, 0, Falling(TileColor.RED, 5.0))
    board.set(1, 1, Falling(TileColor.RED, 5.0))
    board.set(0, 1, Settled(TileColor.RED))
    assert board.falling_count() == 2
