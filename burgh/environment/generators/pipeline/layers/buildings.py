"""Building placement layer for settlement generation.

This layer assigns every building a grid cell. Buildings are grouped by the
placement role of their category and placed in a fixed order:
- Important buildings near road intersections and district centers
- Commercial buildings fronting the longest roads
- Residences in jittered rings inside districts
- Farms in the outer bands of the map

Any building a strategy cannot place goes to a shared fallback that tries
near roads, then random free cells, and finally accepts an overlapping
position. Only that last tier skips the occupancy check; it is logged and
counted in the PlacementReport.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence

from burgh import config
from burgh.environment.buildings import (
    DEFAULT_BUILDING_CATEGORIES,
    Building,
    BuildingCategory,
    BuildingRole,
    category_for,
)
from burgh.environment.generators.pipeline.context import (
    LayoutContext,
    PlacementReport,
    PlacementTier,
)
from burgh.environment.generators.pipeline.layer import GenerationLayer
from burgh.environment.layout import District, Road, SettlementLayout
from burgh.environment.occupancy import OccupancyGrid
from burgh.types import CategoryId, GridCoord
from burgh.util.geometry import Point, unit_normal
from burgh.util.rng import RNG

from .streets import find_intersections

logger = logging.getLogger(__name__)


class BuildingPlacementLayer(GenerationLayer):
    """Places the context's buildings onto the occupancy grid.

    Positions are written into the Building records; nothing else about a
    building changes. The placement report replaces ``ctx.report``.
    """

    def __init__(
        self, categories: Mapping[CategoryId, BuildingCategory] | None = None
    ) -> None:
        """Initialize the building placement layer.

        Args:
            categories: Category table override. If None, uses the context's.
        """
        self.categories = categories

    def apply(self, ctx: LayoutContext) -> None:
        """Position every building in the context.

        Args:
            ctx: The layout context to modify.
        """
        if ctx.grid is None:
            ctx.grid = OccupancyGrid.from_layout(ctx.layout)
        categories = self.categories if self.categories is not None else ctx.categories
        ctx.report = self.place(
            ctx.buildings,
            ctx.layout,
            ctx.districts,
            ctx.rng("layout.placement"),
            grid=ctx.grid,
            categories=categories,
        )

    def place(
        self,
        buildings: Sequence[Building],
        layout: SettlementLayout,
        districts: Sequence[District],
        rng: RNG,
        grid: OccupancyGrid | None = None,
        categories: Mapping[CategoryId, BuildingCategory] = DEFAULT_BUILDING_CATEGORIES,
    ) -> PlacementReport:
        """Assign a position to every building.

        Args:
            buildings: Buildings to place. Their ``position`` is overwritten.
            layout: Roads and water; read only.
            districts: Districts to cluster residences in. May be empty.
            rng: Random source.
            grid: Occupancy grid to place into. If None, one is built from
                the layout.
            categories: Category table used to pick each building's strategy.

        Returns:
            The tier each building was placed with.
        """
        report = PlacementReport()
        if not buildings:
            return report

        if grid is None:
            grid = OccupancyGrid.from_layout(layout)

        placer = BuildingPlacer(layout, districts, grid, rng, categories, report)
        placer.place_all(buildings)

        logger.debug(
            f"Placed {report.placed_count} buildings "
            f"({report.fallback_count} via fallback, {report.overlap_count} overlapping)"
        )
        return report


class BuildingPlacer:
    """Per-generation placement state: the grid, anchors and RNG in use."""

    def __init__(
        self,
        layout: SettlementLayout,
        districts: Sequence[District],
        grid: OccupancyGrid,
        rng: RNG,
        categories: Mapping[CategoryId, BuildingCategory],
        report: PlacementReport,
    ) -> None:
        self.layout = layout
        self.districts = list(districts)
        self.grid = grid
        self.rng = rng
        self.categories = categories
        self.report = report
        self.intersections = find_intersections(layout.roads)

        self._fallback_roads = list(layout.roads)
        self.rng.shuffle(self._fallback_roads)

    def category(self, building: Building) -> BuildingCategory:
        return category_for(building.category_id, self.categories)

    def place_all(self, buildings: Iterable[Building]) -> None:
        """Place buildings role by role, then sweep up anything left."""
        buildings = list(buildings)
        by_role: dict[BuildingRole, list[Building]] = {role: [] for role in BuildingRole}
        for building in buildings:
            by_role[self.category(building).role].append(building)

        important = by_role[BuildingRole.IMPORTANT]
        self.place_important(important)
        self.place_commercial(by_role[BuildingRole.COMMERCIAL])
        self.place_residential(by_role[BuildingRole.RESIDENTIAL], important)
        self.place_farms(by_role[BuildingRole.FARM])

        for building in buildings:
            if not building.is_placed:
                self.find_available_spot(building)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def place_important(self, buildings: Sequence[Building]) -> None:
        """Place civic buildings around intersections and district centers.

        Each anchor is used for at most one building. Once they run out,
        remaining buildings search a wider area around the last anchor used.
        """
        anchors = [*self.intersections, *(d.center for d in self.districts)]
        self.rng.shuffle(anchors)

        last_anchor: Point | None = None
        for building in buildings:
            if anchors:
                anchor = anchors.pop()
                last_anchor = anchor
                if self._ring_search(
                    building,
                    anchor,
                    config.ANCHOR_SEARCH_MIN_RADIUS,
                    config.ANCHOR_SEARCH_MAX_RADIUS,
                    PlacementTier.ANCHOR,
                ):
                    continue
                self.find_spot_near_point(building, anchor, config.NEAR_POINT_MAX_RADIUS)
            elif last_anchor is not None:
                self.find_spot_near_point(
                    building, last_anchor, config.NEAR_POINT_MAX_RADIUS
                )
            else:
                self.find_available_spot(building)

    def place_commercial(self, buildings: Sequence[Building]) -> None:
        """Place shops facing the longest roads, then any other road."""
        if not buildings:
            return

        roads = sorted(self.layout.roads, key=lambda road: road.length, reverse=True)
        split = max(1, len(roads) // config.MAIN_ROAD_SHARE) if roads else 0
        main_roads = roads[:split]
        other_roads = roads[split:]
        self.rng.shuffle(main_roads)
        self.rng.shuffle(other_roads)

        for building in buildings:
            if self._place_along(
                building,
                main_roads,
                config.FRONTAGE_T_VALUES,
                config.FRONTAGE_DISTANCES,
            ):
                continue
            if self._place_along(
                building,
                other_roads,
                config.SECONDARY_FRONTAGE_T_VALUES,
                config.SECONDARY_FRONTAGE_DISTANCES,
            ):
                continue
            self.find_available_spot(building)

    def place_residential(
        self, buildings: Sequence[Building], important: Sequence[Building]
    ) -> None:
        """Split residences into equal batches, one cluster per district.

        Without districts the whole batch clusters around the first placed
        important building.
        """
        if not buildings:
            return

        if self.districts:
            batch_size = math.ceil(len(buildings) / len(self.districts))
            for index, district in enumerate(self.districts):
                batch = buildings[index * batch_size : (index + 1) * batch_size]
                if not batch:
                    break
                self._place_cluster(batch, district.center, district.radius)
            return

        anchors = [b.position for b in important if b.position is not None]
        if anchors:
            x, y = anchors[0]
            self._place_cluster(buildings, Point(x, y), config.RESIDENTIAL_OVERFLOW_RADIUS)
            return

        for building in buildings:
            self.find_available_spot(building)

    def place_farms(self, buildings: Sequence[Building]) -> None:
        """Place farms in the four outer quarter bands of the map."""
        for building in buildings:
            for _ in range(config.FARM_PLACEMENT_ATTEMPTS):
                x, y = self._outskirts_cell()
                if self._try_place(building, x, y, PlacementTier.OUTSKIRTS):
                    break
            else:
                self.find_available_spot(building)

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    def find_spot_near_point(
        self, building: Building, center: Point, max_radius: float
    ) -> None:
        """Expanding ring search around ``center``, then the global fallback."""
        if not self._ring_search(
            building,
            center,
            config.ANCHOR_SEARCH_MIN_RADIUS,
            max_radius,
            PlacementTier.NEAR_POINT,
        ):
            self.find_available_spot(building)

    def find_available_spot(self, building: Building) -> None:
        """Global fallback: near a road, then anywhere free, then anywhere."""
        angles = _angles(config.FALLBACK_ROAD_ANGLE_STEP)
        for road in self._fallback_roads:
            for t in config.FALLBACK_ROAD_T_VALUES:
                base = road.point_at(t)
                for distance in config.FALLBACK_ROAD_DISTANCES:
                    for angle in angles:
                        x, y = base.offset(angle, distance).to_grid()
                        if self._try_place(building, x, y, PlacementTier.NEAR_ROAD):
                            return

        width = self.layout.width
        height = self.layout.height
        for _ in range(config.FALLBACK_RANDOM_ATTEMPTS):
            x = self.rng.randrange(width)
            y = self.rng.randrange(height)
            if self._try_place(building, x, y, PlacementTier.RANDOM):
                return

        x = self.rng.randrange(width)
        y = self.rng.randrange(height)
        logger.warning(
            f"No free cell for building {building.id!r} ({building.category_id}); "
            f"placing at ({x}, {y}) without an occupancy check"
        )
        self._commit(building, x, y, PlacementTier.OVERLAP)

    def _ring_search(
        self,
        building: Building,
        center: Point,
        min_radius: float,
        max_radius: float,
        tier: PlacementTier,
    ) -> bool:
        angles = _angles(config.ANCHOR_SEARCH_ANGLE_STEP)
        radius = min_radius
        while radius <= max_radius:
            for angle in angles:
                x, y = center.offset(angle, radius).to_grid()
                if self._try_place(building, x, y, tier):
                    return True
            radius += config.ANCHOR_SEARCH_RADIUS_STEP
        return False

    def _place_along(
        self,
        building: Building,
        roads: Sequence[Road],
        t_values: Sequence[float],
        distances: Sequence[float],
    ) -> bool:
        """Try cells on either side of each road, perpendicular to it."""
        for road in roads:
            normal = unit_normal(road.start, road.end)
            if normal is None:
                continue
            nx, ny = normal
            for t in t_values:
                base = road.point_at(t)
                for side in (-1, 1):
                    for distance in distances:
                        x = math.floor(base.x + nx * distance * side)
                        y = math.floor(base.y + ny * distance * side)
                        if self._try_place(building, x, y, PlacementTier.FRONTAGE):
                            return True
        return False

    def _place_cluster(
        self, buildings: Sequence[Building], center: Point, radius: float
    ) -> None:
        """Fill jittered rings around ``center``, first fit per building."""
        spacing = config.RESIDENTIAL_SPACING
        radius_jitter = config.RESIDENTIAL_RADIUS_JITTER
        angle_jitter = config.RESIDENTIAL_ANGLE_JITTER

        positions: list[tuple[GridCoord, GridCoord]] = []
        ring = spacing
        while ring <= radius:
            count = math.floor(2 * math.pi * ring / spacing)
            for i in range(count):
                angle = (i / count) * 2 * math.pi + self.rng.uniform(
                    -angle_jitter, angle_jitter
                )
                distance = ring + self.rng.uniform(-radius_jitter, radius_jitter)
                x, y = center.offset(angle, distance).to_grid()
                if self.grid.is_valid_position(x, y):
                    positions.append((x, y))
            ring += spacing
        self.rng.shuffle(positions)

        for building in buildings:
            for index, (x, y) in enumerate(positions):
                if self._try_place(building, x, y, PlacementTier.DISTRICT):
                    del positions[index]
                    break
            else:
                self.find_spot_near_point(
                    building, center, radius + config.RESIDENTIAL_SEARCH_MARGIN
                )

    def _outskirts_cell(self) -> tuple[GridCoord, GridCoord]:
        width = self.layout.width
        height = self.layout.height
        band_w = max(1, width // 4)
        band_h = max(1, height // 4)

        side = self.rng.randrange(4)
        if side == 0:  # top
            return self.rng.randrange(width), self.rng.randrange(band_h)
        if side == 1:  # right
            # The far bands are one cell narrower so they stay strictly
            # outside the central half
            return width - 1 - self.rng.randrange(max(1, band_w - 1)), self.rng.randrange(
                height
            )
        if side == 2:  # bottom
            return self.rng.randrange(width), height - 1 - self.rng.randrange(
                max(1, band_h - 1)
            )
        return self.rng.randrange(band_w), self.rng.randrange(height)  # left

    # ------------------------------------------------------------------
    # Grid updates
    # ------------------------------------------------------------------

    def _try_place(
        self, building: Building, x: GridCoord, y: GridCoord, tier: PlacementTier
    ) -> bool:
        if not self.grid.is_free(x, y):
            return False
        self._commit(building, x, y, tier)
        return True

    def _commit(
        self, building: Building, x: GridCoord, y: GridCoord, tier: PlacementTier
    ) -> None:
        building.position = (x, y)
        self.grid.mark_building(x, y, self.category(building).buffer)
        self.report.record(building, tier)


def _angles(step: float) -> list[float]:
    """Angles from 0 up to (not including) a full turn."""
    count = round(2 * math.pi / step)
    return [i * step for i in range(count)]
