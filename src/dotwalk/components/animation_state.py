"""Walk animation phase shared by the sequencer and the controller."""
from dataclasses import dataclass
from enum import Enum, auto


class AnimationPhase(Enum):
    IDLE = auto()
    ANIMATING = auto()


@dataclass(slots=True)
class AnimationState:
    """Singleton component; ``step`` indexes the walked path while animating."""
    phase: AnimationPhase = AnimationPhase.IDLE
    step: int = 0

    @property
    def animating(self) -> bool:
        return self.phase is AnimationPhase.ANIMATING
