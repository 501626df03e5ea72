import random
from typing import List, Optional, Tuple

from esper import World

from tilefall.components.board import Board, Position
from tilefall.config import BoardConfig
from tilefall.events.bus import EventBus, EVENT_TILE_PRESS, EVENT_TILE_RELEASE
from tilefall.systems.board_ops import fill_pattern, fill_random, get_palette


class BoardSystem:
    """Owns board creation and turns press/release edges into swap gestures.

    Gestures are queued and handed to the game loop at a fixed point in the
    tick through :meth:`take_gestures`.
    """

    def __init__(self, world: World, event_bus: EventBus, config: BoardConfig, rng: Optional[random.Random] = None):
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.rng = rng or getattr(world, "random", None) or random.Random()
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(cols=config.cols, rows=config.rows))
        self.drag_origin: Optional[Position] = None
        self._gestures: List[Tuple[Position, Position]] = []
        self.event_bus.subscribe(EVENT_TILE_PRESS, self.on_tile_press)
        self.event_bus.subscribe(EVENT_TILE_RELEASE, self.on_tile_release)
        self._init_board()

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def _init_board(self):
        palette = get_palette(self.world)
        if self.config.initial_fill == "random":
            fill_random(self.board, palette.colors, self.rng)
        else:
            fill_pattern(self.board, palette.colors)

    def on_tile_press(self, sender, **kwargs):
        col = kwargs.get('col')
        row = kwargs.get('row')
        if col is None or row is None:
            return
        # Only the first press of a drag counts.
        if self.drag_origin is None:
            self.drag_origin = (col, row)

    def on_tile_release(self, sender, **kwargs):
        origin = self.drag_origin
        self.drag_origin = None
        if origin is None:
            return
        col = kwargs.get('col')
        row = kwargs.get('row')
        # Released outside the board or on the starting tile: no gesture.
        if col is None or row is None or (col, row) == origin:
            return
        self._gestures.append((origin, (col, row)))

    def take_gestures(self) -> List[Tuple[Position, Position]]:
        gestures = self._gestures
        self._gestures = []
        return gestures
