import random

from esper import World

from dotwalk.constants import GRID_SIZE
from dotwalk.components.animation_state import AnimationState
from dotwalk.components.board import Board
from dotwalk.components.character import Character
from dotwalk.components.path_state import PathState
from dotwalk.systems.grid_ops import initialize_grid


def create_world(
    *,
    size: int = GRID_SIZE,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding a freshly dealt board with the character at its center.

    ``rng`` is kept on ``world.random`` and reused by every later refill, so a
    seeded source makes the whole game deterministic.
    """
    if size <= 0 or size % 2 == 0:
        raise ValueError(f"Board size must be a positive odd number, got {size}")
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(Board(size=size))
    cx, cy = initialize_grid(world)

    # Singleton resources for the character, the pending path and the walk phase.
    world.create_entity(Character(x=cx, y=cy))
    world.create_entity(PathState(path=((cx, cy),)))
    world.create_entity(AnimationState())
    return world
