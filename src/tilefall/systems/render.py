from esper import World

from tilefall.config import BoardConfig
from tilefall.events.bus import EventBus
from tilefall.rendering.snapshot import BoardSnapshot, build_snapshot
from tilefall.systems.board_ops import get_palette

OUTLINE = (0, 0, 0)
BORDER = 1


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window, config: BoardConfig):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.config = config
        self._last_snapshot: BoardSnapshot | None = None
        self._last_draw_coords: dict[tuple[int, int], tuple[float, float]] = {}

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        snapshot = build_snapshot(self.world, self.config)
        self._last_snapshot = snapshot
        self._last_draw_coords = {}
        palette = get_palette(self.world)
        tile = snapshot.tile_size
        for view in snapshot.drawable():
            # Snapshot space is y-down from the board top; arcade is y-up.
            left = view.col * tile + view.offset_x
            top = self.window.height - (view.row * tile + view.offset_y)
            bottom = top - tile
            self._last_draw_coords[(view.col, view.row)] = (left, bottom)
            if headless:
                continue
            arcade.draw_lbwh_rectangle_filled(left, bottom, tile, tile, OUTLINE)
            arcade.draw_lbwh_rectangle_filled(
                left + BORDER,
                bottom + BORDER,
                tile - 2 * BORDER,
                tile - 2 * BORDER,
                palette.background_for(view.color),
            )
