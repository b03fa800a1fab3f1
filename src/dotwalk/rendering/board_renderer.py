from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Tuple

from dotwalk.constants import CELL_BACKGROUND_RGB, CHARACTER_RGB, DOT_RGB, PATH_OUTLINE_RGB
from dotwalk.ui.layout import cell_center, compute_board_geometry

if TYPE_CHECKING:
    from dotwalk.systems.snapshot import GameSnapshot

Position = Tuple[int, int]


class BoardRenderer:
    """Draws a GameSnapshot: dots, the pending path and the character.

    With ``headless=True`` nothing is drawn but ``last_layout`` is still
    filled, which keeps the placement logic testable without a window.
    """

    def __init__(self, padding: int = 6):
        self._padding = padding
        self.last_layout: Dict[Position, dict] = {}
        self.last_walker: Tuple[float, float] | None = None

    def render(self, arcade, snapshot: GameSnapshot, window_width: int, window_height: int,
               headless: bool = False) -> None:
        size = snapshot.size
        tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
        radius = max(tile_size - self._padding, 4) / 2
        hidden = set(snapshot.consumed)
        path_order = {pos: index for index, pos in enumerate(snapshot.path)}
        self.last_layout = {}

        if not headless:
            total = size * tile_size
            arcade.draw_lbwh_rectangle_filled(start_x, start_y, total, total, CELL_BACKGROUND_RGB)

        for y in range(size):
            for x in range(size):
                cx, cy = cell_center(window_width, window_height, x, y, size)
                dot = snapshot.cell(x, y)
                visible = not dot.is_empty and (x, y) not in hidden
                self.last_layout[(x, y)] = {
                    "center": (cx, cy),
                    "radius": radius,
                    "visible": visible,
                    "path_index": path_order.get((x, y)),
                }
                if headless or not visible:
                    continue
                arcade.draw_circle_filled(cx, cy, radius, DOT_RGB[dot.color])

        points = [cell_center(window_width, window_height, x, y, size) for x, y in snapshot.path]
        self.last_walker = cell_center(window_width, window_height, *snapshot.walker, size)
        if headless:
            return
        if len(points) > 1:
            arcade.draw_line_strip(points, PATH_OUTLINE_RGB, 4)
        for cx, cy in points[1:]:
            arcade.draw_circle_outline(cx, cy, radius + 2, PATH_OUTLINE_RGB, 3)
        wx, wy = self.last_walker
        arcade.draw_circle_filled(wx, wy, radius * 0.7, CHARACTER_RGB)
