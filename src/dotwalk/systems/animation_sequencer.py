from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Sequence, Tuple

from esper import World

from dotwalk.components.animation_state import AnimationPhase, AnimationState
from dotwalk.events.bus import EVENT_WALK_STARTED, EVENT_WALK_STEP, EventBus
from dotwalk.systems.state_utils import get_or_create_animation_state

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class WalkProgress(Enum):
    IGNORED = auto()
    STEPPED = auto()
    FINISHED = auto()


class AnimationSequencerSystem:
    """Plays a confirmed path back one cell per tick.

    ``start`` moves Idle -> Animating(0). Each ``advance`` moves the walker to
    the next path cell; the advance that reaches the last cell returns FINISHED
    and puts the sequencer back to Idle so the owner commits on that same tick.
    A walk therefore takes one tick per non-anchor cell. There is no way back
    to Idle other than finishing the walk.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    @property
    def state(self) -> AnimationState:
        return get_or_create_animation_state(self.world)

    @property
    def animating(self) -> bool:
        return self.state.animating

    def start(self, path: Sequence[Position]) -> bool:
        state = self.state
        if state.animating or len(path) <= 1:
            return False
        state.phase = AnimationPhase.ANIMATING
        state.step = 0
        logger.debug("Walk started over %d cells", len(path) - 1)
        self.event_bus.emit(EVENT_WALK_STARTED, path=tuple(path))
        return True

    def advance(self, path: Sequence[Position]) -> WalkProgress:
        state = self.state
        if not state.animating:
            return WalkProgress.IGNORED
        state.step += 1
        self.event_bus.emit(EVENT_WALK_STEP, step=state.step, position=path[state.step])
        if state.step < len(path) - 1:
            return WalkProgress.STEPPED
        state.phase = AnimationPhase.IDLE
        state.step = 0
        return WalkProgress.FINISHED
