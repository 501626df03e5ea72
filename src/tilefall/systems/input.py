from tilefall.config import BoardConfig
from tilefall.constants import MOUSE_BUTTON_LEFT
from tilefall.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_MOUSE_RELEASE_RAW,
    EVENT_TILE_PRESS,
    EVENT_TILE_RELEASE,
)


class InputSystem:
    """Maps primary-button press/release pixels to board cells.

    Raw coordinates are in pixels with the origin at the board's top-left
    corner and y growing downward.
    """

    def __init__(self, event_bus: EventBus, config: BoardConfig):
        self.event_bus = event_bus
        self.config = config
        self.event_bus.subscribe(EVENT_MOUSE_PRESS_RAW, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE_RAW, self.on_mouse_release)

    def cell_at(self, x: float, y: float):
        if x < 0 or y < 0:
            return None
        col = int(x // self.config.tile_size)
        row = int(y // self.config.tile_size)
        if 0 <= col < self.config.cols and 0 <= row < self.config.rows:
            return col, row
        return None

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None or kwargs.get('button', MOUSE_BUTTON_LEFT) != MOUSE_BUTTON_LEFT:
            return
        cell = self.cell_at(x, y)
        if cell is None:
            return
        self.event_bus.emit(EVENT_TILE_PRESS, col=cell[0], row=cell[1])

    def on_mouse_release(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None or kwargs.get('button', MOUSE_BUTTON_LEFT) != MOUSE_BUTTON_LEFT:
            return
        cell = self.cell_at(x, y)
        # A release off the board still ends the drag.
        if cell is None:
            self.event_bus.emit(EVENT_TILE_RELEASE, col=None, row=None)
            return
        self.event_bus.emit(EVENT_TILE_RELEASE, col=cell[0], row=cell[1])
