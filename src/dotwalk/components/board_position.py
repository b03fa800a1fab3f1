from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    x: int  # column
    y: int  # row, grows downward
