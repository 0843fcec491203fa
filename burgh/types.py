from __future__ import annotations

# =============================================================================
# GRID COORDINATES (Always integers)
# =============================================================================

# A single cell index on the occupancy grid.
GridCoord = int

# Example: (12, 40) = cell 12,40 on the settlement grid
GridPos = tuple[GridCoord, GridCoord]

# =============================================================================
# MAP COORDINATES (Real-valued)
# =============================================================================

# Roads, rivers and lakes are defined with real-valued coordinates in
# [0, width] x [0, height]. They are rasterized onto grid cells by flooring.
MapCoord = float

# =============================================================================
# GENERATION-RELATED TYPES
# =============================================================================

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "riverbend".
RandomSeed = int | str | None

# Identifier of a building category in the category table (e.g., "tavern").
CategoryId = str
