"""
Constants - Shared physical and rendering constants for the critter world.

Geometry is in canvas pixels with the y axis pointing down, angles in
radians, time in ticks (one tick per rendered frame).
"""

import numpy as np

TWO_PI = 2 * np.pi

# Below this parent-to-child distance a dragged bond has no direction
DIST_EPSILON = 1e-9

# === GAIT ===
PLANT_TOLERANCE = 1.0      # Foot-to-goal distance that lifts a planted foot
SETTLE_TOLERANCE = 1.0     # Squared forwardness change that ends a swing
REACH_FRACTION = 0.9       # Stance radius as a fraction of rest hip-to-foot

# === LIZARD BUILD ===
NECK_SEGMENTS = 6
TORSO_SEGMENTS = 6
TOES_PER_FOOT = 4
LEG_CHAIN_LENGTH = 3
LEG_SPEED_FACTOR = 6.0     # Foot travel per tick = size * factor
MIN_LEGS = 2
MAX_LEGS = 10              # Exclusive
BASE_SIZE = 12.0           # size = BASE_SIZE / sqrt(legs)

# === RENDERING ===
BG_COLOR = 'black'
LINE_COLOR = 'white'
LINE_WIDTH = 2.0
HEAD_RADIUS = 4.0
TRAIL_FADE = 0.1           # Alpha of the black fill laid over each frame
TRAIL_FRAMES = 40          # Frames kept before a trail is dropped
TRAIL_CUTOFF = 0.02        # Intensity below which a faded frame is dropped
ARC_RESOLUTION = 12        # Line pieces per drawn arc
FPS = 60

# === WINDOW ===
DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 800
