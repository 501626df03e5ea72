"""Entry point for the Tilefall match-three prototype.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import argparse
import logging
import random

import arcade

from tilefall.config import BoardConfig, load_config
from tilefall.constants import UPDATE_RATE, WINDOW_TITLE
from tilefall.events.bus import EventBus, EVENT_TICK, EVENT_MOUSE_PRESS_RAW, EVENT_MOUSE_RELEASE_RAW
from tilefall.systems.render import RenderSystem
from tilefall.world import create_core


class TilefallWindow(arcade.Window):
    def __init__(self, config: BoardConfig, rng: random.Random | None = None):
        super().__init__(int(config.width_px), int(config.height_px), WINDOW_TITLE)
        self.set_update_rate(UPDATE_RATE)
        self.config = config
        self.event_bus = EventBus()
        self.core = create_core(self.event_bus, config, rng=rng)
        self.render_system = RenderSystem(self.core.world, self.event_bus, self, config)
        arcade.set_background_color(arcade.color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        # Board space puts the origin at the top-left corner.
        self.event_bus.emit(EVENT_MOUSE_PRESS_RAW, x=x, y=self.height - y, button=button)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE_RAW, x=x, y=self.height - y, button=button)


def main():
    parser = argparse.ArgumentParser(description='Tilefall match-three prototype')
    parser.add_argument('--config', default=None, help='JSON file of board tunables')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for fills and refills')
    parser.add_argument('--log-level', default='WARNING', help='Logging level (DEBUG, INFO, ...)')
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')
    config = load_config(args.config)
    rng = random.Random(args.seed) if args.seed is not None else None
    TilefallWindow(config, rng)
    arcade.run()


if __name__ == "__main__":
    main()
