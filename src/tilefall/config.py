"""Board tunables.

Defaults come from ``tilefall.constants``; a JSON file of overrides can be
loaded with :func:`load_config`.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from tilefall.constants import (
    GRAVITY,
    GRID_COLS,
    GRID_ROWS,
    INITIAL_FILL,
    PALETTE_SIZE,
    SPAWN_COLOR_COUNT,
    SWAP_SWERVE,
    SWAP_TIME,
    TILE_SIZE,
)

INITIAL_FILL_MODES = ("pattern", "random")


@dataclass(slots=True, frozen=True)
class BoardConfig:
    cols: int = GRID_COLS
    rows: int = GRID_ROWS
    tile_size: float = TILE_SIZE
    swap_time: float = SWAP_TIME
    swap_swerve: float = SWAP_SWERVE
    gravity: float = GRAVITY
    palette_size: int = PALETTE_SIZE
    spawn_color_count: int = SPAWN_COLOR_COUNT
    # Swaps that create no match play back instead of committing.
    require_match: bool = False
    # Raise on a broken column instead of logging and repairing it.
    strict_invariants: bool = True
    initial_fill: str = INITIAL_FILL

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Board must be at least 1x1, got {self.cols}x{self.rows}")
        if self.tile_size <= 0:
            raise ValueError("tile_size must be positive")
        if self.swap_time <= 0:
            raise ValueError("swap_time must be positive")
        if self.gravity <= 0:
            raise ValueError("gravity must be positive")
        if not 1 <= self.palette_size <= 7:
            raise ValueError("palette_size must be between 1 and 7")
        if not 1 <= self.spawn_color_count <= self.palette_size:
            raise ValueError("spawn_color_count must be between 1 and palette_size")
        if self.initial_fill not in INITIAL_FILL_MODES:
            raise ValueError(f"initial_fill must be one of {INITIAL_FILL_MODES}")

    @property
    def width_px(self) -> float:
        return self.cols * self.tile_size

    @property
    def height_px(self) -> float:
        return self.rows * self.tile_size

    @classmethod
    def from_dict(cls, overrides: Mapping[str, Any]) -> "BoardConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(overrides))


def load_config(path: Path | str | None) -> BoardConfig:
    """Read a JSON object of overrides; a missing path yields the defaults."""

    if path is None:
        return BoardConfig()
    config_path = Path(path)
    if not config_path.exists():
        return BoardConfig()
    with config_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{config_path} must contain a JSON object")
    return BoardConfig.from_dict(payload)
