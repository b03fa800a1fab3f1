from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float (seconds)


# ============================================================================
# POINTER INPUT
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_MOUSE_DRAG = "mouse_drag"            # payload: x, y
EVENT_MOUSE_RELEASE = "mouse_release"      # payload: x, y, button


# ============================================================================
# INTENTS (UI adapter -> controller)
# ============================================================================
EVENT_CELL_INTENT = "cell_intent"          # payload: x=int, y=int
EVENT_PATH_CONFIRM = "path_confirm"        # payload: None
EVENT_PATH_CANCEL = "path_cancel"          # payload: None


# ============================================================================
# PATH & WALK
# ============================================================================
EVENT_PATH_EXTENDED = "path_extended"      # payload: path=tuple[(x,y)], locked_color=DotColor
EVENT_PATH_CANCELLED = "path_cancelled"    # payload: anchor=(x,y)
EVENT_WALK_STARTED = "walk_started"        # payload: path=tuple[(x,y)]
EVENT_WALK_STEP = "walk_step"              # payload: step=int, position=(x,y)
EVENT_PATH_COMMITTED = "path_committed"    # payload: path=tuple[(x,y)], character=(x,y)


# ============================================================================
# BOARD
# ============================================================================
EVENT_CASCADE_COMPLETE = "cascade_complete"  # payload: refilled=list[(x,y)]
EVENT_STATE_CHANGED = "state_changed"        # payload: snapshot=GameSnapshot
