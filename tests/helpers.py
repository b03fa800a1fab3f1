from __future__ import annotations

import random
from typing import Iterable, Sequence, Tuple

from esper import World

from dotwalk.components.cell import DotColor
from dotwalk.events.bus import EVENT_TICK, EventBus
from dotwalk.systems.grid_ops import cell_map


class FixedRandom(random.Random):
    """Random source whose palette picks always return the same color."""

    def __init__(self, color: DotColor = DotColor.BLUE):
        super().__init__(0)
        self.color = color

    def choice(self, seq):
        return self.color


def paint_board(world: World, color: DotColor, empty: Iterable[Tuple[int, int]] = ()) -> None:
    """Give every cell a dot of ``color`` except the positions listed in ``empty``."""
    holes = set(empty)
    for position, cell in cell_map(world).items():
        cell.color = color
        cell.is_empty = position in holes


def paint_column(world: World, x: int, colors: Sequence[DotColor | None]) -> None:
    """Set column ``x`` from the top row down; None marks an empty cell."""
    cells = cell_map(world)
    for y, color in enumerate(colors):
        cell = cells[(x, y)]
        if color is None:
            cell.is_empty = True
        else:
            cell.color = color
            cell.is_empty = False


def column_colors(world: World, x: int, size: int) -> list[DotColor | None]:
    cells = cell_map(world)
    return [None if cells[(x, y)].is_empty else cells[(x, y)].color for y in range(size)]


def drive_ticks(bus: EventBus, count: int = 1, dt: float = 0.4) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def receiver_counts(bus: EventBus) -> dict[str, int]:
    return {name: len(signal.receivers) for name, signal in bus._signals.items()}
