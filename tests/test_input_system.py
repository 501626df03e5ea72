import pytest

from tilefall.config import BoardConfig
from tilefall.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_MOUSE_RELEASE_RAW,
    EVENT_TILE_PRESS,
    EVENT_TILE_RELEASE,
)
from tilefall.systems.input import InputSystem
from tests.helpers import build_core


@pytest.mark.parametrize(
    "x,y,expected",
    [
        (0, 0, (0, 0)),
        (31.9, 31.9, (0, 0)),
        (32, 0, (1, 0)),
        (40, 70, (1, 2)),
        (127.5, 127.5, (3, 3)),
        (128, 10, None),
        (10, 128, None),
        (-1, 10, None),
    ],
)
def test_cell_at_maps_pixels_to_cells(x, y, expected):
    system = InputSystem(EventBus(), BoardConfig(cols=4, rows=4))
    assert system.cell_at(x, y) == expected


def test_press_and_release_become_tile_edges():
    bus = EventBus()
    InputSystem(bus, BoardConfig(cols=4, rows=4))
    presses, releases = [], []
    bus.subscribe(EVENT_TILE_PRESS, lambda s, **k: presses.append((k['col'], k['row'])))
    bus.subscribe(EVENT_TILE_RELEASE, lambda s, **k: releases.append((k['col'], k['row'])))
    bus.emit(EVENT_MOUSE_PRESS_RAW, x=40, y=10, button=1)
    bus.emit(EVENT_MOUSE_RELEASE_RAW, x=70, y=10, button=1)
    bus.emit(EVENT_MOUSE_RELEASE_RAW, x=500, y=10, button=1)
    assert presses == [(1, 0)]
    assert releases == [(2, 0), (None, None)]


def test_other_buttons_ignored():
    bus = EventBus()
    InputSystem(bus, BoardConfig(cols=4, rows=4))
    seen = []
    bus.subscribe(EVENT_TILE_PRESS, lambda s, **k: seen.append(k))
    bus.subscribe(EVENT_TILE_RELEASE, lambda s, **k: seen.append(k))
    bus.emit(EVENT_MOUSE_PRESS_RAW, x=40, y=10, button=4)
    bus.emit(EVENT_MOUSE_RELEASE_RAW, x=40, y=10, button=4)
    assert seen == []


def test_press_off_board_emits_nothing():
    bus = EventBus()
    InputSystem(bus, BoardConfig(cols=4, rows=4))
    seen = []
    bus.subscribe(EVENT_TILE_PRESS, lambda s, **k: seen.append(k))
    bus.emit(EVENT_MOUSE_PRESS_RAW, x=200, y=10, button=1)
    assert seen == []


def test_drag_between_cells_queues_gesture():
    bus, core = build_core()
    bus.emit(EVENT_MOUSE_PRESS_RAW, x=40, y=10, button=1)
    bus.emit(EVENT_MOUSE_RELEASE_RAW, x=70, y=10, button=1)
    assert core.board.take_gestures() == [((1, 0), (2, 0))]
    assert core.board.take_gestures() == []
    assert core.board.drag_origin is None


def test_release_on_origin_cell_is_not_a_gesture():
    bus, core = build_core()
    bus.emit(EVENT_MOUSE_PRESS_RAW, x=40, y=10, button=1)
    bus.emit(EVENT_MOUSE_RELEASE_RAW, x=50, y=20, button=1)
    assert core.board.take_gestures() == []


def test_release_off_board_clears_drag():
    bus, core = build_core()
    bus.emit(EVENT_MOUSE_PRESS_RAW, x=40, y=10, button=1)
    assert core.board.drag_origin == (1, 0)
    bus.emit(EVENT_MOUSE_RELEASE_RAW, x=40, y=900, button=1)
    assert core.board.drag_origin is None
    assert core.board.take_gestures() == []
    # A later release without a new press does nothing.
    bus.emit(EVENT_MOUSE_RELEASE_RAW, x=70, y=10, button=1)
    assert core.board.take_gestures() == []


def test_only_first_press_sets_origin():
    bus, core = build_core()
    bus.emit(EVENT_TILE_PRESS, col=0, row=0)
    bus.emit(EVENT_TILE_PRESS, col=3, row=3)
    bus.emit(EVENT_TILE_RELEASE, col=0, row=1)
    assert core.board.take_gestures() == [((0, 0), (0, 1))]
