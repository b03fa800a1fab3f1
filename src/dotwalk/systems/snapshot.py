from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from dotwalk.components.animation_state import AnimationPhase
from dotwalk.components.cell import DotColor
from dotwalk.systems.grid_ops import cell_map, get_board
from dotwalk.systems.state_utils import (
    get_character,
    get_or_create_animation_state,
    get_or_create_path_state,
)

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class DotView:
    color: DotColor
    is_empty: bool


@dataclass(frozen=True, slots=True)
class AnimationView:
    phase: AnimationPhase
    step: int


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only copy of the whole game state handed to renderers.

    ``grid`` is indexed ``grid[y][x]``. ``walker`` is where the character is
    drawn: the current walk target while animating, the resting cell otherwise.
    """

    grid: Tuple[Tuple[DotView, ...], ...]
    path: Tuple[Position, ...]
    locked_color: Optional[DotColor]
    character: Position
    animation: AnimationView
    walker: Position

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def animating(self) -> bool:
        return self.animation.phase is AnimationPhase.ANIMATING

    @property
    def consumed(self) -> Tuple[Position, ...]:
        """Path cells the walker already stepped on; their dots are hidden."""
        if not self.animating:
            return ()
        return self.path[1:self.animation.step + 1]

    def cell(self, x: int, y: int) -> DotView:
        return self.grid[y][x]


def build_snapshot(world: World) -> GameSnapshot:
    board = get_board(world)
    cells = cell_map(world)
    grid = tuple(
        tuple(DotView(color=cells[(x, y)].color, is_empty=cells[(x, y)].is_empty) for x in range(board.size))
        for y in range(board.size)
    )
    path_state = get_or_create_path_state(world)
    animation = get_or_create_animation_state(world)
    character = get_character(world).position
    walker = character
    if animation.animating and path_state.path:
        walker = path_state.path[min(animation.step, len(path_state.path) - 1)]
    return GameSnapshot(
        grid=grid,
        path=tuple(path_state.path),
        locked_color=path_state.locked_color,
        character=character,
        animation=AnimationView(phase=animation.phase, step=animation.step),
        walker=walker,
    )
