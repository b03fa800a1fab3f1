from typing import Any, Optional, Tuple

from dotwalk.constants import GRID_SIZE
from dotwalk.events.bus import (
    EventBus,
    EVENT_CELL_INTENT,
    EVENT_MOUSE_DRAG,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_PATH_CANCEL,
)
from dotwalk.ui.layout import cell_at_point

# Arcade button ids
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4


class DragInputSystem:
    """Turns continuous pointer movement into discrete cell intents.

    A left press starts a drag and selects the cell under the pointer; while
    dragging, every newly entered cell is forwarded once. Releasing the button
    or leaving the board ends the drag. Right click cancels the pending path.
    """

    def __init__(self, event_bus: EventBus, window, size: int = GRID_SIZE):
        self.event_bus = event_bus
        self.window = window
        self.size = size
        self.dragging = False
        self._last_cell: Optional[Tuple[int, int]] = None
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_DRAG, self.on_mouse_drag)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE, self.on_mouse_release)

    def on_mouse_press(self, sender: Any, **kwargs: Any) -> None:
        button = kwargs.get('button')
        if button == MOUSE_BUTTON_RIGHT:
            self._end_drag()
            self.event_bus.emit(EVENT_PATH_CANCEL)
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        cell = self._cell_from_payload(kwargs)
        if cell is None:
            return
        self.dragging = True
        self._forward(cell)

    def on_mouse_drag(self, sender: Any, **kwargs: Any) -> None:
        if not self.dragging:
            return
        cell = self._cell_from_payload(kwargs)
        if cell is None:
            self._end_drag()
            return
        if cell != self._last_cell:
            self._forward(cell)

    def on_mouse_release(self, sender: Any, **kwargs: Any) -> None:
        self._end_drag()

    def _forward(self, cell: Tuple[int, int]) -> None:
        self._last_cell = cell
        self.event_bus.emit(EVENT_CELL_INTENT, x=cell[0], y=cell[1])

    def _end_drag(self) -> None:
        self.dragging = False
        self._last_cell = None

    def _cell_from_payload(self, payload: dict) -> Optional[Tuple[int, int]]:
        x = payload.get('x')
        y = payload.get('y')
        if x is None or y is None:
            return None
        try:
            xf = float(x)
            yf = float(y)
        except (TypeError, ValueError):
            return None
        return cell_at_point(self.window.width, self.window.height, xf, yf, self.size)
