from __future__ import annotations

import random
from typing import Iterable, Sequence

from tilefall.components.board import Board
from tilefall.components.tile_color import TileColor
from tilefall.components.tile_state import Settled
from tilefall.config import BoardConfig
from tilefall.events.bus import EventBus, EVENT_TICK
from tilefall.world import CoreSystems, create_core

LETTERS = {
    'R': TileColor.RED,
    'O': TileColor.ORANGE,
    'Y': TileColor.YELLOW,
    'G': TileColor.GREEN,
    'C': TileColor.CYAN,
    'B': TileColor.BLUE,
    'M': TileColor.MAGENTA,
}


class SequenceColorSource:
    """Deterministic refill colors, cycling through a fixed list."""

    def __init__(self, colors: Iterable[TileColor]):
        self.colors = list(colors)
        self.calls = 0

    def __call__(self) -> TileColor:
        color = self.colors[self.calls % len(self.colors)]
        self.calls += 1
        return color


def colors_from(letters: str) -> list[TileColor]:
    return [LETTERS[ch] for ch in letters]


def set_layout(board: Board, rows: Sequence[str]) -> None:
    """Fill a board with settled tiles from letter rows, top row first."""
    assert len(rows) == board.rows
    for row, letters in enumerate(rows):
        assert len(letters) == board.cols
        for col, ch in enumerate(letters):
            board.set(col, row, Settled(LETTERS[ch]))


def build_core(
    cols: int = 4,
    rows: int = 4,
    *,
    layout: Sequence[str] | None = None,
    refill: str = "Y",
    **config_overrides,
) -> tuple[EventBus, CoreSystems]:
    bus = EventBus()
    config = BoardConfig(cols=cols, rows=rows, **config_overrides)
    core = create_core(
        bus,
        config,
        rng=random.Random(7),
        color_source=SequenceColorSource(colors_from(refill)),
    )
    if layout is not None:
        set_layout(core.board.board, layout)
        core.loop.recheck_pending = False
    return bus, core


def drive(bus: EventBus, ticks: int, dt: float = 0.02) -> None:
    for _ in range(ticks):
        bus.emit(EVENT_TICK, dt=dt)
