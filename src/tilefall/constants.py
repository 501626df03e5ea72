GRID_COLS = 10
GRID_ROWS = 10
TILE_SIZE = 32.0

# Seconds a swap takes to play out; tiles settle once elapsed time exceeds it.
SWAP_TIME = 0.15
# Peak perpendicular displacement (pixels) of the curved swap path.
SWAP_SWERVE = 8.0

# Downward acceleration of falling tiles in pixels per second squared.
GRAVITY = 2000.0

PALETTE_SIZE = 7
# New tiles spawned during refill draw only from the first N palette colors.
SPAWN_COLOR_COUNT = 2

# 'pattern' fills the board with a deterministic match-free layout,
# 'random' draws a match-free layout from the world RNG.
INITIAL_FILL = "pattern"

# Window chrome for the arcade host.
WINDOW_TITLE = "Tilefall"
UPDATE_RATE = 1 / 60
# arcade.MOUSE_BUTTON_LEFT
MOUSE_BUTTON_LEFT = 1
