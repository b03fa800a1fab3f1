from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, Tuple

from esper import World

from dotwalk.components.board import Board
from dotwalk.components.board_position import BoardPosition
from dotwalk.components.cell import Cell, PALETTE

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not initialized")


def cell_map(world: World) -> Dict[Position, Cell]:
    """Return mapping of every board position to its Cell component."""
    return {
        (position.x, position.y): cell
        for _, (position, cell) in world.get_components(BoardPosition, Cell)
    }


def cell_at(world: World, x: int, y: int) -> Cell | None:
    for _, (position, cell) in world.get_components(BoardPosition, Cell):
        if position.x == x and position.y == y:
            return cell
    return None


def _resolve_rng(world: World, rng: random.Random | None) -> random.Random:
    candidate = rng if rng is not None else getattr(world, "random", None)
    if candidate is None:
        return random.Random()
    if not callable(getattr(candidate, "choice", None)):
        raise TypeError(f"Random source must provide choice(), got {type(candidate).__name__}")
    return candidate


def initialize_grid(world: World, rng: random.Random | None = None) -> Position:
    """Fill every cell with a random dot and clear the center for the character.

    Colors are drawn row-major from ``rng`` (falling back to ``world.random``)
    so a seeded source reproduces the same board. Existing cell entities are
    reused; missing ones are created. Returns the center position.
    """
    board = get_board(world)
    rng = _resolve_rng(world, rng)
    cells = cell_map(world)
    for y in range(board.size):
        for x in range(board.size):
            color = rng.choice(PALETTE)
            cell = cells.get((x, y))
            if cell is None:
                cell = Cell(color=color)
                world.create_entity(BoardPosition(x=x, y=y), cell)
                cells[(x, y)] = cell
            else:
                cell.color = color
                cell.is_empty = False
    center = (board.center, board.center)
    cells[center].is_empty = True
    logger.debug("Initialized %dx%d grid, character cell %s", board.size, board.size, center)
    return center


def commit_path(world: World, path: Sequence[Position]) -> List[Position]:
    """Clear the dots walked by ``path`` and return the cleared positions.

    The anchor is already empty (it is the old character cell). The last
    position becomes the character's new resting cell.
    """
    if len(path) <= 1:
        return []
    cells = cell_map(world)
    cleared: List[Position] = []
    for position in path[1:]:
        cell = cells.get(position)
        if cell is None:
            continue
        cell.is_empty = True
        cleared.append(position)
    last = cells.get(path[-1])
    if last is not None:
        last.is_empty = True
    return cleared


def cascade(
    world: World,
    rng: random.Random | None = None,
    *,
    keep_empty: Optional[Position] = None,
) -> List[Position]:
    """Let dots fall down each column and refill the holes left at the top.

    Columns are scanned bottom-up with a FIFO of empty rows (lowest first).
    A dot met while holes are pending drops into the lowest one and its old
    row joins the top end of the FIFO, so surviving dots keep their order and
    only the top rows end up refilled. ``keep_empty`` (the character cell) is
    skipped by the scan: it never receives a dot and dots above it fall past.
    Returns refilled positions, column by column, bottom-most first.
    """
    board = get_board(world)
    rng = _resolve_rng(world, rng)
    cells = cell_map(world)
    refilled: List[Position] = []
    for x in range(board.size):
        holes: Deque[int] = deque()
        for y in range(board.size - 1, -1, -1):
            if (x, y) == keep_empty:
                continue
            cell = cells[(x, y)]
            if cell.is_empty:
                holes.append(y)
            elif holes:
                target = cells[(x, holes.popleft())]
                target.color = cell.color
                target.is_empty = False
                cell.is_empty = True
                holes.append(y)
        for y in holes:
            cell = cells[(x, y)]
            cell.color = rng.choice(PALETTE)
            cell.is_empty = False
            refilled.append((x, y))
    if keep_empty is not None and keep_empty in cells:
        cells[keep_empty].is_empty = True
    return refilled


def column_dot_counts(world: World) -> List[int]:
    board = get_board(world)
    counts = [0] * board.size
    for (x, _), cell in cell_map(world).items():
        if not cell.is_empty:
            counts[x] += 1
    return counts


def empty_positions(world: World) -> List[Position]:
    return sorted(position for position, cell in cell_map(world).items() if cell.is_empty)
