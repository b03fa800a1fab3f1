from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    size: int

    @property
    def center(self) -> int:
        return self.size // 2

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size
