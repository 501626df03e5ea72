from enum import Enum


class TileColor(Enum):
    RED = 0
    ORANGE = 1
    YELLOW = 2
    GREEN = 3
    CYAN = 4
    BLUE = 5
    MAGENTA = 6


# Declaration order is the palette order; spawn ranges slice from the front.
TILE_COLORS = list(TileColor)
