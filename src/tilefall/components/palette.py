from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from tilefall.components.tile_color import TileColor, TILE_COLORS

DEFAULT_DRAW_COLORS: Dict[TileColor, Tuple[int, int, int]] = {
    TileColor.RED: (230, 41, 55),
    TileColor.ORANGE: (255, 161, 0),
    TileColor.YELLOW: (253, 249, 0),
    TileColor.GREEN: (0, 228, 48),
    TileColor.CYAN: (102, 191, 255),
    TileColor.BLUE: (0, 121, 241),
    TileColor.MAGENTA: (255, 0, 255),
}


@dataclass(slots=True)
class TilePalette:
    """Colors in play and the subset new tiles may spawn with.

    Lives on a single entity in the world. ``colors`` is the full palette used for
    the initial fill; ``spawnable`` is the (possibly narrower) refill range.
    """
    colors: List[TileColor]
    spawnable: List[TileColor] = field(default_factory=list)
    draw_colors: Dict[TileColor, Tuple[int, int, int]] = field(
        default_factory=lambda: dict(DEFAULT_DRAW_COLORS)
    )

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("Palette needs at least one color")
        self.set_spawnable(self.spawnable or self.colors)

    @classmethod
    def sized(cls, palette_size: int, spawn_color_count: int) -> "TilePalette":
        colors = TILE_COLORS[:palette_size]
        return cls(colors=colors, spawnable=colors[:spawn_color_count])

    def background_for(self, color: TileColor) -> Tuple[int, int, int]:
        return self.draw_colors[color]

    def spawnable_colors(self) -> List[TileColor]:
        return list(self.spawnable)

    def set_spawnable(self, colors: Iterable[TileColor]) -> None:
        # Preserve order while dropping colors outside the palette.
        seen: set[TileColor] = set()
        filtered: List[TileColor] = []
        for color in colors:
            if color in self.colors and color not in seen:
                filtered.append(color)
                seen.add(color)
        self.spawnable = filtered or list(self.colors)
