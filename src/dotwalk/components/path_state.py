from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotwalk.components.cell import DotColor

Position = Tuple[int, int]


@dataclass(slots=True)
class PathState:
    """Pending path anchored on the character.

    path[0] is always the character position; locked_color is fixed by the
    first selection after the anchor and is None while only the anchor is held.
    """
    path: Tuple[Position, ...] = field(default_factory=tuple)
    locked_color: Optional[DotColor] = None
