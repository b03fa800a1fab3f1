"""Entry point for the Dotwalk match-path prototype.

Sets up the world, event bus, controller and Arcade window.
"""
import logging
import os

import arcade
from arcade import Window, run, set_background_color, color

from dotwalk.constants import GRID_SIZE, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from dotwalk.events.bus import (
    EVENT_MOUSE_DRAG,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_PATH_CANCEL,
    EVENT_PATH_CONFIRM,
    EVENT_TICK,
    EventBus,
)
from dotwalk.rendering.board_renderer import BoardRenderer
from dotwalk.systems.drag_input import DragInputSystem
from dotwalk.systems.game_controller import GameController
from dotwalk.world import create_world


class DotwalkWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(size=GRID_SIZE)
        # The controller's scheduler listens to EVENT_TICK, so walk steps follow frame time.
        self.controller = GameController(self.world, self.event_bus)
        self.drag_input_system = DragInputSystem(self.event_bus, self, size=GRID_SIZE)
        self.board_renderer = BoardRenderer()
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.board_renderer.render(arcade, self.controller.snapshot(), self.width, self.height)

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_DRAG, x=x, y=y)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in (arcade.key.ENTER, arcade.key.SPACE):
            self.event_bus.emit(EVENT_PATH_CONFIRM)
        elif symbol == arcade.key.ESCAPE:
            self.event_bus.emit(EVENT_PATH_CANCEL)

    def on_close(self):
        self.controller.dispose()
        super().on_close()


def main():
    level = os.getenv("DOTWALK_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format='%(levelname)s: %(message)s')
    DotwalkWindow()
    run()

if __name__ == "__main__":
    main()
