from __future__ import annotations

import random
from typing import Protocol, Sequence

from tilefall.components.tile_color import TileColor


class ColorSource(Protocol):
    """Supplies the color of each tile spawned during a refill."""

    def __call__(self) -> TileColor: ...


class RandomColorSource:
    def __init__(self, colors: Sequence[TileColor], rng: random.Random | None = None):
        if not colors:
            raise ValueError("RandomColorSource needs at least one color")
        self.colors = list(colors)
        self.rng = rng or random.Random()

    def __call__(self) -> TileColor:
        return self.rng.choice(self.colors)
