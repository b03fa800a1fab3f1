from typing import Optional, Tuple

from dotwalk.constants import BOTTOM_MARGIN, BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT, GRID_SIZE

def compute_board_geometry(window_width: int, window_height: int, size: int = GRID_SIZE):
    """Return (tile_size, start_x, start_y) for a square board centered horizontally.

    Shared by the renderer and the drag input so both agree on where cells are.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w, max_board_h) / size)
    if tile_size < 20:
        tile_size = 20
    total_width = size * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_at_point(window_width: int, window_height: int, x: float, y: float,
                  size: int = GRID_SIZE) -> Optional[Tuple[int, int]]:
    """Map a screen point to the (x, y) cell under it, or None outside the board.

    Screen y grows upward while board rows grow downward, so row 0 is drawn on top.
    """
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
    total = size * tile_size
    if x < start_x or x >= start_x + total:
        return None
    if y < start_y or y >= start_y + total:
        return None
    col = int((x - start_x) // tile_size)
    screen_row = int((y - start_y) // tile_size)
    return col, size - 1 - screen_row


def cell_center(window_width: int, window_height: int, x: int, y: int,
                size: int = GRID_SIZE) -> Tuple[float, float]:
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
    screen_row = size - 1 - y
    return start_x + (x + 0.5) * tile_size, start_y + (screen_row + 0.5) * tile_size
