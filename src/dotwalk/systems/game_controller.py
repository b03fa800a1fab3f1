from __future__ import annotations

import logging
import random
from typing import Any, Optional

from esper import World

from dotwalk.constants import WALK_STEP_DELAY_MS
from dotwalk.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_CELL_INTENT,
    EVENT_PATH_CANCEL,
    EVENT_PATH_CANCELLED,
    EVENT_PATH_COMMITTED,
    EVENT_PATH_CONFIRM,
    EVENT_PATH_EXTENDED,
    EVENT_STATE_CHANGED,
    EventBus,
)
from dotwalk.systems.animation_sequencer import AnimationSequencerSystem, WalkProgress
from dotwalk.systems.grid_ops import cascade, cell_at, commit_path, get_board
from dotwalk.systems.path_builder import cancel_path, extend_path
from dotwalk.systems.snapshot import GameSnapshot, build_snapshot
from dotwalk.systems.state_utils import get_character, get_or_create_path_state
from dotwalk.utils.scheduler import Scheduler, TickScheduler

logger = logging.getLogger(__name__)


class GameController:
    """Single owner of the game state; intents in, snapshots out.

    Intents that are not allowed right now (wrong phase, empty or distant
    cell, wrong color, repeated cell) leave the state untouched and emit
    nothing. Intents arriving during a walk are dropped, never queued.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        scheduler: Scheduler | None = None,
        step_delay_ms: float = WALK_STEP_DELAY_MS,
        rng: random.Random | None = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.board = get_board(world)
        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler if scheduler is not None else TickScheduler(event_bus)
        self.step_delay_ms = step_delay_ms
        self.rng = rng
        self.sequencer = AnimationSequencerSystem(world, event_bus)
        self._pending_tick: Optional[int] = None
        self._disposed = False
        path_state = get_or_create_path_state(world)
        if not path_state.path:
            path_state.path, path_state.locked_color = cancel_path(get_character(world).position)
        self.event_bus.subscribe(EVENT_CELL_INTENT, self._on_cell_intent_event)
        self.event_bus.subscribe(EVENT_PATH_CONFIRM, self._on_confirm_event)
        self.event_bus.subscribe(EVENT_PATH_CANCEL, self._on_cancel_event)

    @property
    def animating(self) -> bool:
        return self.sequencer.animating

    def on_cell_intent(self, x: int, y: int) -> None:
        if self._disposed or self.animating:
            return
        if not self.board.contains(x, y):
            return
        cell = cell_at(self.world, x, y)
        if cell is None:
            return
        path_state = get_or_create_path_state(self.world)
        anchor = get_character(self.world).position
        path, locked_color = extend_path(path_state.path, path_state.locked_color, anchor, (x, y), cell)
        if path == path_state.path:
            return
        path_state.path = path
        path_state.locked_color = locked_color
        logger.debug("Path extended to %s (%s)", (x, y), locked_color)
        self.event_bus.emit(EVENT_PATH_EXTENDED, path=path, locked_color=locked_color)
        self._publish()

    def confirm(self) -> None:
        if self._disposed:
            return
        path_state = get_or_create_path_state(self.world)
        if not self.sequencer.start(path_state.path):
            return
        self._schedule_tick()
        self._publish()

    def cancel(self) -> None:
        if self._disposed or self.animating:
            return
        path_state = get_or_create_path_state(self.world)
        anchor = get_character(self.world).position
        path_state.path, path_state.locked_color = cancel_path(anchor)
        self.event_bus.emit(EVENT_PATH_CANCELLED, anchor=anchor)
        self._publish()

    def tick(self) -> None:
        if self._pending_tick is not None:
            # Driven by hand: drop the scheduled call so the walk advances once.
            self.scheduler.cancel(self._pending_tick)
            self._pending_tick = None
        if self._disposed:
            return
        path = get_or_create_path_state(self.world).path
        progress = self.sequencer.advance(path)
        if progress is WalkProgress.IGNORED:
            return
        if progress is WalkProgress.FINISHED:
            self._commit(path)
        else:
            self._schedule_tick()
        self._publish()

    def snapshot(self) -> GameSnapshot:
        return build_snapshot(self.world)

    def dispose(self) -> None:
        """Stop the pending walk tick, detach from the bus and ignore later intents.

        A scheduler passed in by the caller is left running; only the pending
        walk tick is cancelled on it.
        """
        if self._pending_tick is not None:
            self.scheduler.cancel(self._pending_tick)
            self._pending_tick = None
        self.event_bus.unsubscribe(EVENT_CELL_INTENT, self._on_cell_intent_event)
        self.event_bus.unsubscribe(EVENT_PATH_CONFIRM, self._on_confirm_event)
        self.event_bus.unsubscribe(EVENT_PATH_CANCEL, self._on_cancel_event)
        if self._owns_scheduler:
            self.scheduler.close()
        self._disposed = True

    def _commit(self, path) -> None:
        cleared = commit_path(self.world, path)
        character = get_character(self.world)
        character.x, character.y = path[-1]
        refilled = cascade(self.world, self.rng, keep_empty=character.position)
        path_state = get_or_create_path_state(self.world)
        path_state.path, path_state.locked_color = cancel_path(character.position)
        logger.debug("Committed %d cells, character now at %s", len(cleared), character.position)
        self.event_bus.emit(EVENT_PATH_COMMITTED, path=tuple(path), character=character.position)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, refilled=refilled)

    def _schedule_tick(self) -> None:
        self._pending_tick = self.scheduler.schedule_after(self.step_delay_ms, self.tick)

    def _publish(self) -> None:
        self.event_bus.emit(EVENT_STATE_CHANGED, snapshot=self.snapshot())

    def _on_cell_intent_event(self, sender: Any, **payload: Any) -> None:
        x = payload.get("x")
        y = payload.get("y")
        if x is None or y is None:
            return
        try:
            xi = int(x)
            yi = int(y)
        except (TypeError, ValueError):
            return
        self.on_cell_intent(xi, yi)

    def _on_confirm_event(self, sender: Any, **payload: Any) -> None:
        self.confirm()

    def _on_cancel_event(self, sender: Any, **payload: Any) -> None:
        self.cancel()
