# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They hold the
calibration of the ball density model, rendering properties, and the
defaults of the jitter variant that are not part of the run configuration.
"""

# --- Ball density model ---
# A reference viewport of REFERENCE_WIDTH x REFERENCE_HEIGHT holds
# REFERENCE_NUM_BALLS balls. MIN_EXTRA_BALLS keeps tiny viewports populated.
BALL_RADIUS = 5
REFERENCE_WIDTH = 892
REFERENCE_HEIGHT = 1500
REFERENCE_NUM_BALLS = 100
BALLS_PER_AREA = REFERENCE_NUM_BALLS / (REFERENCE_WIDTH * REFERENCE_HEIGHT)
MIN_EXTRA_BALLS = 5

# Each velocity component is drawn uniformly from [-MAX_BALL_SPEED, MAX_BALL_SPEED].
MAX_BALL_SPEED = 1.0

# Visualization settings
FULLSCREEN = False
DEFAULT_WINDOW_WIDTH = 892
DEFAULT_WINDOW_HEIGHT = 1000
FPS = 60
BACKGROUND_COLOR = (255, 255, 255)
BALL_COLOR = (0, 0, 0, 128)          # rgba(0, 0, 0, 0.5)
CELL_STROKE_COLOR = (0, 0, 0, 64)    # rgba(0, 0, 0, 0.25)
CELL_STROKE_WIDTH = 1

# --- Color palette ---
PALETTE_SIZE = 10
DEFAULT_COLOR_PALETTE = [
    '#FF5733', '#FFBD33', '#DBFF33', '#75FF33', '#33FF57',
    '#33FFDB', '#3380FF', '#8233FF', '#FF33F9', '#FF3361',
]
# Lightness range for regenerated palettes, kept away from black and white.
PALETTE_LIGHTNESS_MIN = 25
PALETTE_LIGHTNESS_MAX = 75

# --- Jitter variant ---
JITTER_NUM_POINTS = 50
JITTER_INTERVAL_MS = 100
JITTER_AMPLITUDE = 10.0
JITTER_POINT_RADIUS = 3
JITTER_POINT_COLOR = (255, 0, 0)
JITTER_STROKE_COLOR = (0, 0, 0)
