from dotwalk.components.cell import DotColor

# Odd so the character can start on a center cell.
GRID_SIZE = 7
CENTER = GRID_SIZE // 2

# Fixed pause between two character steps while a confirmed path is walked.
WALK_STEP_DELAY_MS = 360

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Dotwalk"
TILE_SIZE = 64
BOTTOM_MARGIN = 20

# Board maximum footprint relative to window (percentage of window width/height).
# The layout code sizes the board so it does not exceed either percentage.
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.90

DOT_RGB = {
    DotColor.RED: (214, 69, 65),
    DotColor.BLUE: (66, 118, 214),
    DotColor.GREEN: (72, 178, 96),
}
CHARACTER_RGB = (245, 222, 120)
PATH_OUTLINE_RGB = (255, 255, 255)
CELL_BACKGROUND_RGB = (36, 36, 44)
