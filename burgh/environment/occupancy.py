"""Occupancy grid shared by the road and placement stages.

The grid classifies every cell of the settlement as empty, road, water or
building. It is a scratch structure: the layout pipeline builds a fresh one
for every generation, seeds it with water and roads, and the placement
engine writes buildings into it as they are positioned.

Marking precedence:
- Water is marked first and is authoritative. Nothing overwrites it.
- Roads are marked second and skip water cells, so a road that crosses a
  river reads as a bridge in the geometry but never as dry land on the grid.
- Buildings are marked last. A building claims its own cell and converts
  only empty cells in its buffer.

Like the tile arrays elsewhere in the codebase, the grid is indexed
``cells[x, y]`` with shape ``(width, height)``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import IntEnum

import numpy as np

from burgh import config
from burgh.environment.layout import Road, SettlementLayout, WaterFeature
from burgh.types import GridCoord
from burgh.util.geometry import (
    Point,
    disc_offsets,
    points_in_polygon,
    polygon_bounds,
    sample_path,
)


class CellType(IntEnum):
    EMPTY = 0
    ROAD = 1
    WATER = 2
    BUILDING = 3


class OccupancyGrid:
    """Per-cell Empty/Road/Water/Building classification of the map."""

    def __init__(self, width: GridCoord, height: GridCoord) -> None:
        self.width = width
        self.height = height
        self.cells = np.full(
            (width, height), fill_value=CellType.EMPTY, dtype=np.uint8, order="F"
        )

    @classmethod
    def from_layout(
        cls,
        layout: SettlementLayout,
        road_buffer: int = config.ROAD_BUFFER,
        extra_clearance: int = config.ROAD_EXTRA_CLEARANCE,
    ) -> OccupancyGrid:
        """Build a grid seeded with the layout's water, then its roads.

        Args:
            layout: The settlement layout to rasterize.
            road_buffer: Radius in cells marked around each road.
            extra_clearance: Additional radius added to the road buffer.

        Returns:
            A new grid ready for building placement.
        """
        grid = cls(layout.width, layout.height)
        grid.mark_water_features(layout.water_features)
        grid.mark_roads(layout.roads, road_buffer + extra_clearance)
        return grid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_valid_position(self, x: GridCoord, y: GridCoord) -> bool:
        """Bounds check only. Does not look at the cell's contents."""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_free(self, x: GridCoord, y: GridCoord) -> bool:
        """True if (x, y) is in bounds and empty."""
        return self.is_valid_position(x, y) and self.cells[x, y] == CellType.EMPTY

    def cell_at(self, x: GridCoord, y: GridCoord) -> CellType:
        return CellType(int(self.cells[x, y]))

    def count(self, cell_type: CellType) -> int:
        return int(np.count_nonzero(self.cells == cell_type))

    @property
    def water_mask(self) -> np.ndarray:
        """Boolean array of water cells, same shape as ``cells``."""
        return self.cells == CellType.WATER

    # ------------------------------------------------------------------
    # Water
    # ------------------------------------------------------------------

    def mark_water_features(self, features: Iterable[WaterFeature]) -> None:
        for feature in features:
            if feature.is_lake:
                self.mark_lake(feature.points)
            else:
                self.mark_river(feature.points)

    def mark_lake(self, polygon: Sequence[Point]) -> None:
        """Fill every cell whose center lies inside the lake polygon."""
        if len(polygon) < 3:
            return

        min_x, min_y, max_x, max_y = polygon_bounds(polygon)
        x1 = max(0, int(np.floor(min_x)))
        y1 = max(0, int(np.floor(min_y)))
        x2 = min(self.width, int(np.ceil(max_x)) + 1)
        y2 = min(self.height, int(np.ceil(max_y)) + 1)
        if x1 >= x2 or y1 >= y2:
            return

        xs, ys = np.meshgrid(
            np.arange(x1, x2) + 0.5, np.arange(y1, y2) + 0.5, indexing="ij"
        )
        inside = points_in_polygon(xs, ys, polygon)
        self.cells[x1:x2, y1:y2][inside] = CellType.WATER

    def mark_river(
        self, points: Sequence[Point], half_width: int = config.RIVER_HALF_WIDTH
    ) -> None:
        """Mark a buffered polyline as water."""
        self._stamp_path(points, half_width, CellType.WATER)

    # ------------------------------------------------------------------
    # Roads and buildings
    # ------------------------------------------------------------------

    def mark_roads(self, roads: Iterable[Road], buffer: int) -> None:
        for road in roads:
            self.mark_road(road, buffer)

    def mark_road(self, road: Road, buffer: int = config.ROAD_BUFFER) -> None:
        """Mark a buffered road segment, leaving water cells untouched."""
        self._stamp_path((road.start, road.end), buffer, CellType.ROAD)

    def mark_building(self, x: GridCoord, y: GridCoord, buffer: int) -> None:
        """Claim (x, y) for a building and reserve a disc of ``buffer`` cells.

        The building's own cell becomes BUILDING unless it is water. Within
        the buffer only empty cells are converted, so roads and water keep
        their classification.
        """
        if not self.is_valid_position(x, y):
            return
        if self.cells[x, y] != CellType.WATER:
            self.cells[x, y] = CellType.BUILDING

        if buffer <= 0:
            return
        xs, ys = self._disc_cells(np.array([[x, y]]), buffer)
        empty = self.cells[xs, ys] == CellType.EMPTY
        self.cells[xs[empty], ys[empty]] = CellType.BUILDING

    # ------------------------------------------------------------------
    # Rasterization helpers
    # ------------------------------------------------------------------

    def _stamp_path(
        self, points: Sequence[Point], radius: int, cell_type: CellType
    ) -> None:
        samples = sample_path(points)
        if len(samples) == 0:
            return
        centers = np.unique(np.floor(samples).astype(np.int64), axis=0)
        xs, ys = self._disc_cells(centers, radius)

        if cell_type == CellType.WATER:
            self.cells[xs, ys] = CellType.WATER
            return

        writable = self.cells[xs, ys] != CellType.WATER
        self.cells[xs[writable], ys[writable]] = cell_type

    def _disc_cells(
        self, centers: np.ndarray, radius: int
    ) -> tuple[np.ndarray, np.ndarray]:
        """In-bounds cell indices within ``radius`` of any center."""
        offsets = disc_offsets(max(0, radius))
        cells = (centers[:, None, :] + offsets[None, :, :]).reshape(-1, 2)
        in_bounds = (
            (cells[:, 0] >= 0)
            & (cells[:, 0] < self.width)
            & (cells[:, 1] >= 0)
            & (cells[:, 1] < self.height)
        )
        cells = cells[in_bounds]
        return cells[:, 0], cells[:, 1]


def build_water_mask(
    width: GridCoord, height: GridCoord, water_features: Iterable[WaterFeature]
) -> np.ndarray:
    """Rasterize water features into a boolean (width, height) mask.

    This is the same rasterization the occupancy grid uses, exposed so the
    road generator can avoid water before the full grid exists.
    """
    grid = OccupancyGrid(width, height)
    grid.mark_water_features(water_features)
    return grid.water_mask
