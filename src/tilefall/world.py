import random
from dataclasses import dataclass

from esper import World

from tilefall.config import BoardConfig
from tilefall.events.bus import EventBus
from tilefall.components.palette import TilePalette
from tilefall.systems.board import BoardSystem
from tilefall.systems.game_loop import GameLoopSystem
from tilefall.systems.input import InputSystem
from tilefall.systems.swap import SwapSystem
from tilefall.utils.color_source import ColorSource


def create_world(
    event_bus: EventBus,
    config: BoardConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    config = config or BoardConfig()
    world = World()
    setattr(world, "random", rng or random.Random())
    # Single palette entity shared by fill, refill and rendering.
    world.create_entity(TilePalette.sized(config.palette_size, config.spawn_color_count))
    return world


@dataclass(slots=True)
class CoreSystems:
    world: World
    board: BoardSystem
    swap: SwapSystem
    input: InputSystem
    loop: GameLoopSystem


def create_core(
    event_bus: EventBus,
    config: BoardConfig | None = None,
    *,
    rng: random.Random | None = None,
    color_source: ColorSource | None = None,
) -> CoreSystems:
    """Build the world and every simulation system wired to ``event_bus``."""

    config = config or BoardConfig()
    world = create_world(event_bus, config, rng=rng)
    board_system = BoardSystem(world, event_bus, config)
    swap_system = SwapSystem(world, event_bus, config)
    input_system = InputSystem(event_bus, config)
    loop = GameLoopSystem(world, event_bus, config, board_system, swap_system, color_source)
    return CoreSystems(
        world=world,
        board=board_system,
        swap=swap_system,
        input=input_system,
        loop=loop,
    )
