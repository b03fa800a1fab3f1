from dataclasses import dataclass
from enum import Enum


class DotColor(Enum):
    """Fixed palette a dot can be drawn from."""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"


PALETTE = tuple(DotColor)


@dataclass(slots=True)
class Cell:
    """Per-cell dot state.

    is_empty: True if no dot occupies the cell (the character's square or a
    hole left by a commit that the cascade has not refilled yet). ``color`` is
    kept as-is while empty and is meaningless until the cell is filled again.
    """
    color: DotColor
    is_empty: bool = False
