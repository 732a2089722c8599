#!/usr/bin/env python3
"""
Shared constants for the Orrery (scene units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""
import math

# Orbit timing
EARTH_YEAR = 2 * math.pi  # rad per year of simulated time
ORBITAL_PERIOD_SCALE = 0.01  # folded into each body's base angular speed
SELF_ROTATION_RATE = 0.5  # rad per second of frame delta
ORBITAL_PLANE_HEIGHT = 0.0  # y coordinate every orbit is embedded at

# Speed control (global multiplier on orbiting bodies)
MIN_SPEED_MULTIPLIER = 0.001
MAX_SPEED_MULTIPLIER = 0.3
DEFAULT_SPEED_MULTIPLIER = 0.01
SPEED_STEP = 0.001

# Satellites: radius = parent_size * BASE_FACTOR + index * RADIUS_STEP
SATELLITE_RADIUS_FACTOR = 2.0
SATELLITE_RADIUS_STEP = 0.5
SATELLITE_BASE_SPEED = 0.5
SATELLITE_SPEED_STEP = 0.1
SATELLITE_SIZE = 0.01

# Viewpoint
HOME_VIEW_POSITION = (0.0, 20.0, 25.0)
HOME_VIEW_TARGET = (0.0, 0.0, 0.0)
INITIAL_VIEW_POSITION = (0.0, 0.0, 15.0)
FOCUS_OFFSET_FACTOR = 5.0  # camera sits size * factor above and behind the body
FIELD_OF_VIEW_DEG = 75.0
NEAR_PLANE = 0.1

# Presentation anchors (multiples of body size)
LABEL_HEIGHT_FACTOR = 1.5
OVERLAY_SIDE_FACTOR = 3.0

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (4, 6, 14)
STAR_COLOR = (180, 180, 200)
STAR_COUNT = 400
ORBIT_PATH_COLOR = (40, 45, 60)
SATELLITE_COLOR = (128, 128, 128)
LABEL_COLOR = (230, 230, 230)
OVERLAY_BG_COLOR = (20, 24, 36)
SELECTION_COLOR = (255, 255, 0)
DEFAULT_BODY_COLOR = (200, 200, 255)
TARGET_FPS = 60

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
