"""
Configuration constants.

Centralizes all magic numbers and tuning values used by settlement generation.
Organized by functional area for easy maintenance.
"""

import math

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED = "riverbend"

# =============================================================================
# MAP DEFAULTS
# =============================================================================

DEFAULT_MAP_WIDTH = 800
DEFAULT_MAP_HEIGHT = 600
DEFAULT_ROAD_DENSITY = 0.5
DEFAULT_WATER_FEATURE_PROBABILITY = 0.3

# =============================================================================
# WATER FEATURES
# =============================================================================

# A single roll below RIVER_THRESHOLD creates a river, a roll above
# LAKE_THRESHOLD creates a lake. Rolls between the two create both.
RIVER_THRESHOLD = 0.7
LAKE_THRESHOLD = 0.4

RIVER_MIN_CONTROL_POINTS = 3
RIVER_MAX_CONTROL_POINTS = 7
# Peak perpendicular bend as a fraction of min(width, height)
RIVER_CURVE_FRACTION = 0.2
# Half of the rendered river stroke, in cells
RIVER_HALF_WIDTH = 5

LAKE_MIN_POINTS = 12
LAKE_MAX_POINTS = 19
LAKE_MIN_RADIUS_FRACTION = 1 / 16
LAKE_MAX_RADIUS_FRACTION = 1 / 8
LAKE_RADIUS_JITTER = 0.3
# Lake centers are kept inside the middle 60% of the map
LAKE_CENTER_MARGIN = 0.2

# =============================================================================
# ROADS
# =============================================================================

MAX_MAIN_ROADS = 3
BUILDINGS_PER_MAIN_ROAD = 40
SECONDARY_ROAD_DIVISOR = 12

# Main road jitter, as a fraction of the map dimension
MAIN_ROAD_OFFSET_FRACTION = 0.2
MAIN_ROAD_SKEW_FRACTION = 0.1

# Secondary road length range, as fractions of the map width
SECONDARY_ROAD_MIN_LENGTH_FRACTION = 1 / 10
SECONDARY_ROAD_EXTRA_LENGTH_FRACTION = 1 / 5

# Chance that a secondary road branches roughly perpendicular to its source
PERPENDICULAR_BRANCH_CHANCE = 0.75
PERPENDICULAR_BRANCH_SPREAD = math.pi / 8

WATER_AVOIDANCE_RETRIES = 20

# =============================================================================
# DISTRICTS
# =============================================================================

DISTRICT_MIN_RADIUS = 30
DISTRICT_MAX_RADIUS = 150
DISTRICT_BASE_RADIUS = 30
DISTRICT_RADIUS_PER_BUILDING = 4
DISTRICT_RADIUS_JITTER = 0.15

# =============================================================================
# OCCUPANCY GRID
# =============================================================================

ROAD_BUFFER = 5
ROAD_EXTRA_CLEARANCE = 0

# Path rasterization samples every PATH_STEP cells, never fewer than
# MIN_PATH_STEPS samples per segment.
PATH_STEP = 1.0
MIN_PATH_STEPS = 4

# =============================================================================
# BUILDING PLACEMENT
# =============================================================================

# Important buildings: expanding search around intersections/district centers
ANCHOR_SEARCH_MIN_RADIUS = 10
ANCHOR_SEARCH_MAX_RADIUS = 30
ANCHOR_SEARCH_RADIUS_STEP = 5
ANCHOR_SEARCH_ANGLE_STEP = math.pi / 8
NEAR_POINT_MAX_RADIUS = 50

# Commercial buildings: frontage along roads
MAIN_ROAD_SHARE = 3  # longest 1/MAIN_ROAD_SHARE of roads are main roads
FRONTAGE_T_VALUES = tuple(i / 10 for i in range(1, 10))
FRONTAGE_DISTANCES = (10, 15, 20, 25, 30)
SECONDARY_FRONTAGE_T_VALUES = (0.2, 0.4, 0.6, 0.8)
SECONDARY_FRONTAGE_DISTANCES = (10, 15, 20)

# Residential buildings: jittered rings inside districts
RESIDENTIAL_SPACING = 20
RESIDENTIAL_RADIUS_JITTER = 5
RESIDENTIAL_ANGLE_JITTER = 0.1
RESIDENTIAL_OVERFLOW_RADIUS = 50
RESIDENTIAL_SEARCH_MARGIN = 20

# Farms: random samples in the outer quarter bands
FARM_PLACEMENT_ATTEMPTS = 50

# Global fallback
FALLBACK_ROAD_T_VALUES = (0.1, 0.3, 0.5, 0.7, 0.9)
FALLBACK_ROAD_DISTANCES = (10, 20, 30)
FALLBACK_ROAD_ANGLE_STEP = math.pi / 4
FALLBACK_RANDOM_ATTEMPTS = 200

# Buffer used for categories missing from the category table
DEFAULT_BUILDING_BUFFER = 8

# =============================================================================
# ECONOMY
# =============================================================================

MIN_PRICE_MODIFIER = 0.5
MAX_PRICE_MODIFIER = 2.0
EXPORT_PRICE_FACTOR = 0.8
IMPORT_PRICE_FACTOR = 1.2
MAIN_EXPORT_COUNT = 3
MAIN_IMPORT_COUNT = 3

# =============================================================================
# PREVIEW RENDERING
# =============================================================================

PREVIEW_BACKGROUND_COLOR = (240, 230, 210)
PREVIEW_WATER_COLOR = (74, 137, 220)
PREVIEW_ROAD_COLOR = (166, 124, 82)
PREVIEW_ROAD_WIDTH = 4
PREVIEW_OUTLINE_COLOR = (0, 0, 0)
