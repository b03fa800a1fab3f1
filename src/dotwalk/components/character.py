from dataclasses import dataclass


@dataclass(slots=True)
class Character:
    """Resting position of the player token. Its cell is always empty."""
    x: int
    y: int

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)
