"""Per-cell tile lifecycle.

Each cell holds exactly one of the variants below. Variants are immutable;
systems replace a cell's state instead of mutating it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from tilefall.components.tile_color import TileColor


@dataclass(slots=True, frozen=True)
class Settled:
    """At rest; eligible for matching and for starting a swap."""
    color: TileColor


@dataclass(slots=True, frozen=True)
class Swapping:
    """Mid-swap. ``color`` is the color the cell owns once the swap commits."""
    color: TileColor


@dataclass(slots=True, frozen=True)
class JustMatched:
    """Cleared by the current resolution pass; never drawn."""


@dataclass(slots=True, frozen=True)
class Falling:
    """Dropping toward its cell.

    distance: pixels remaining above the settled position.
    velocity: current downward speed in pixels per second.
    """
    color: TileColor
    distance: float
    velocity: float = 0.0


TileState = Union[Settled, Swapping, JustMatched, Falling]

JUST_MATCHED = JustMatched()


def matchable_color(state: TileState) -> Optional[TileColor]:
    """Color used for run detection; only settled tiles take part."""
    if isinstance(state, Settled):
        return state.color
    return None


def tile_color(state: TileState) -> Optional[TileColor]:
    if isinstance(state, JustMatched):
        return None
    return state.color


def is_falling(state: TileState) -> bool:
    return isinstance(state, Falling)
