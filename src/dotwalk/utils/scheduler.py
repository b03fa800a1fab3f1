from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Protocol, Tuple

from dotwalk.events.bus import EVENT_TICK, EventBus

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    def schedule_after(self, ms: float, fn: Callable[[], Any]) -> int: ...

    def cancel(self, handle: int) -> bool: ...


@dataclass(slots=True)
class TickScheduler:
    """Delayed callbacks driven by frame ticks instead of wall-clock timers.

    Time only moves when ``advance`` is called, either directly or through
    ``EVENT_TICK`` (``dt`` in seconds) when an event bus is given. Callbacks
    due in the same advance run in due-time order, then scheduling order.
    """

    event_bus: EventBus | None = None

    _elapsed: float = field(init=False, default=0.0, repr=False)
    _queue: List[Tuple[float, int, Callable[[], Any]]] = field(init=False, repr=False)
    _cancelled: set[int] = field(init=False, repr=False)
    _sequence: int = field(init=False, default=0, repr=False)

    def __post_init__(self) -> None:
        self._queue = []
        self._cancelled = set()
        if self.event_bus is not None:
            self.event_bus.subscribe(EVENT_TICK, self._on_tick)

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def pending(self) -> int:
        return sum(1 for _, handle, _ in self._queue if handle not in self._cancelled)

    def schedule_after(self, ms: float, fn: Callable[[], Any]) -> int:
        self._sequence += 1
        due = self._elapsed + max(0.0, float(ms)) / 1000.0
        heapq.heappush(self._queue, (due, self._sequence, fn))
        return self._sequence

    def cancel(self, handle: int) -> bool:
        if any(queued == handle for _, queued, _ in self._queue) and handle not in self._cancelled:
            self._cancelled.add(handle)
            return True
        return False

    def cancel_all(self) -> None:
        self._queue.clear()
        self._cancelled.clear()

    def close(self) -> None:
        """Stop listening for frame ticks and drop every pending callback."""
        if self.event_bus is not None:
            self.event_bus.unsubscribe(EVENT_TICK, self._on_tick)
        self.cancel_all()

    def advance(self, seconds: float) -> int:
        """Move time forward and run every callback that became due."""
        target = self._elapsed + max(0.0, seconds)
        fired = 0
        # Clock sits on each callback's due time while it runs, so follow-ups
        # keep their spacing even when one long frame covers several of them.
        while self._queue and self._queue[0][0] <= target + 1e-9:
            due, handle, fn = heapq.heappop(self._queue)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            self._elapsed = max(self._elapsed, due)
            fn()
            fired += 1
        self._elapsed = target
        return fired

    def _on_tick(self, sender: Any, **payload: Any) -> None:
        dt = payload.get("dt", 1 / 60)
        try:
            seconds = float(dt)
        except (TypeError, ValueError):
            return
        self.advance(seconds)
