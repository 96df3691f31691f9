#!/usr/bin/env python3
"""
Shared constants for the Star Graph sandbox (screen units: one unit is one pixel
at zoom 1, masses are arbitrary positive numbers).

Keeping tunables in one place keeps the engines, the controller and the viewer
in agreement and makes tuning easier.
"""

# Identity of the central body in the default system
SUN_ID = "1"

# Leapfrog (kick-drift-kick) engine
LEAPFROG_G = 2000.0
DEFAULT_SOFTENING = 8.0  # keeps |a| <= G*m/eps^2 as separation -> 0
LEAPFROG_DT = 1 / 60.0  # seconds of simulation time per tick at speed 1
MERGE_DISTANCE = 6.0

# Euler engine
EULER_G = 0.5
EULER_DT = 0.016
EULER_DAMPING = 0.99  # per-step multiplicative velocity decay
EULER_MIN_DIST = 50.0  # hard floor on separation for the force law

# Angular orbit stepper
BASE_ORBIT_PERIOD = 5.0  # seconds for the innermost body at speed 1

# Initial layout / spawning on concentric orbits
LAYOUT_BASE_RADIUS = 140.0
LAYOUT_RADIUS_STEP = 110.0
SPAWN_MASS_RANGE = (30.0, 80.0)

# Path solver
DEFAULT_EXCLUSION_RADIUS = 40.0
DEFAULT_EXCLUSION_PENALTY = 1e6

# Time scaling
MIN_SPEED = 0.0
MAX_SPEED = 20.0

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (11, 13, 23)
LINK_COLOR = (107, 114, 128)
ROUTE_COLOR = (255, 215, 0)
ORBIT_COLOR = (60, 64, 80)
SELECTION_COLOR = (255, 255, 0)
TEXT_COLOR = (220, 228, 240)

# Camera zoom bounds (world units per pixel)
DEFAULT_UNITS_PER_PIXEL = 1.0
MIN_UNITS_PER_PIXEL = 0.05
MAX_UNITS_PER_PIXEL = 50.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
