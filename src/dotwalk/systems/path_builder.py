"""Pure rules turning raw cell selections into a valid walk path.

Every rejection is silent: callers get their own inputs back unchanged, which
suits drag input where near-misses happen constantly.
"""
from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

from dotwalk.components.cell import DotColor

Position = Tuple[int, int]
Path = Tuple[Position, ...]


class CellLike(Protocol):
    color: DotColor
    is_empty: bool


def is_adjacent(a: Position, b: Position) -> bool:
    """King adjacency: Chebyshev distance of exactly one, diagonals included."""
    ax, ay = a
    bx, by = b
    return max(abs(ax - bx), abs(ay - by)) == 1


def extend_path(
    path: Sequence[Position],
    locked_color: Optional[DotColor],
    anchor: Position,
    target: Position,
    target_cell: CellLike,
) -> Tuple[Path, Optional[DotColor]]:
    current = tuple(path)
    if target_cell.is_empty:
        return current, locked_color
    if len(current) > 1 and not is_adjacent(current[-1], target):
        return current, locked_color
    if len(current) <= 1:
        if not is_adjacent(anchor, target):
            return current, locked_color
        return (anchor, target), target_cell.color
    if target_cell.color != locked_color or target in current:
        return current, locked_color
    return current + (target,), locked_color


def cancel_path(anchor: Position) -> Tuple[Path, None]:
    return (anchor,), None
