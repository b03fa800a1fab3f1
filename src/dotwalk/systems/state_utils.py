from esper import World

from dotwalk.components.animation_state import AnimationState
from dotwalk.components.character import Character
from dotwalk.components.path_state import PathState


def get_or_create_animation_state(world: World) -> AnimationState:
    """Return the shared AnimationState component, creating it if absent."""
    existing = list(world.get_component(AnimationState))
    if existing:
        return existing[0][1]
    world.create_entity(AnimationState())
    return list(world.get_component(AnimationState))[0][1]


def get_or_create_path_state(world: World) -> PathState:
    """Return the shared PathState, anchored on the character when created."""
    existing = list(world.get_component(PathState))
    if existing:
        return existing[0][1]
    character = get_character(world)
    world.create_entity(PathState(path=(character.position,)))
    return list(world.get_component(PathState))[0][1]


def get_character(world: World) -> Character:
    for _, character in world.get_component(Character):
        return character
    raise RuntimeError("Board not initialized")
