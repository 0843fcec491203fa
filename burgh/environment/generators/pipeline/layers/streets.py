"""Road network layer for settlement generation.

This layer creates the road infrastructure that organizes building placement:
- Main roads cross the whole map edge to edge (horizontal, vertical, then
  diagonal), with jitter so they are never perfectly straight
- Secondary roads branch off a growing pool of branch points, so later
  roads chain off earlier ones and the network stays connected
- Fixed positions are resampled away from water before they are committed
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

import numpy as np

from burgh import config
from burgh.environment.generators.pipeline.context import LayoutContext, SettlementKind
from burgh.environment.generators.pipeline.layer import GenerationLayer
from burgh.environment.layout import Road, WaterFeature
from burgh.environment.occupancy import build_water_mask
from burgh.errors import ConfigurationError
from burgh.util.geometry import Point, clamp, segment_intersection
from burgh.util.rng import RNG

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Main road count per settlement kind
MAIN_ROADS_BY_KIND: dict[SettlementKind, int] = {
    SettlementKind.VILLAGE: 1,
    SettlementKind.TOWN: 2,
    SettlementKind.CITY: 3,
}

# Branch points closer than this to a road's own start are not new junctions
_MIN_JUNCTION_SEPARATION = 1.0


@dataclass(frozen=True)
class BranchPoint:
    """A point a secondary road may start from.

    Attributes:
        point: Location of the branch point.
        heading: Direction (radians) of the road the point lies on.
    """

    point: Point
    heading: float


def main_road_count_for(building_count: int) -> int:
    """Size-scaled main road count: 1 for small settlements, up to 3."""
    return max(
        1, min(config.MAX_MAIN_ROADS, building_count // config.BUILDINGS_PER_MAIN_ROAD)
    )


def _check_main_road_count(main_road_count: int | None) -> None:
    if main_road_count is not None and main_road_count < 1:
        raise ConfigurationError(
            f"main_road_count must be at least 1, got {main_road_count}"
        )


def find_intersections(roads: Sequence[Road]) -> list[Point]:
    """All pairwise road intersections, in road order."""
    intersections: list[Point] = []
    for i, road_a in enumerate(roads):
        for road_b in roads[i + 1 :]:
            point = segment_intersection(
                road_a.start, road_a.end, road_b.start, road_b.end
            )
            if point is not None:
                intersections.append(point)
    return intersections


class RoadNetworkLayer(GenerationLayer):
    """Creates a connected, organic road network that avoids water.

    The number of main roads comes from the settlement kind when the layer is
    applied to a context, or from the building count when ``generate`` is
    called directly. Secondary roads scale with the building count and the
    road density.
    """

    def __init__(
        self,
        density: float | None = None,
        main_road_count: int | None = None,
        secondary_road_divisor: float = config.SECONDARY_ROAD_DIVISOR,
        water_retries: int = config.WATER_AVOIDANCE_RETRIES,
    ) -> None:
        """Initialize the road network layer.

        Args:
            density: Road density in [0, 1]. If None, uses the map settings.
            main_road_count: Fixed main road count. If None, derived from the
                settlement kind.
            secondary_road_divisor: Secondary roads are
                ``building_count * density / secondary_road_divisor``.
            water_retries: Resampling budget for positions that land on water.

        Raises:
            ConfigurationError: If ``main_road_count`` is below 1.
        """
        _check_main_road_count(main_road_count)
        self.density = density
        self.main_road_count = main_road_count
        self.secondary_road_divisor = secondary_road_divisor
        self.water_retries = water_retries

    def apply(self, ctx: LayoutContext) -> None:
        """Generate the road network.

        Args:
            ctx: The layout context to modify.
        """
        density = self.density if self.density is not None else ctx.settings.road_density
        main_roads = self.main_road_count
        if main_roads is None:
            main_roads = MAIN_ROADS_BY_KIND[ctx.settlement_kind]

        ctx.roads = self.generate(
            ctx.width,
            ctx.height,
            ctx.building_count,
            density,
            ctx.water_features,
            ctx.rng("layout.roads"),
            water_mask=ctx.water_mask,
            main_road_count=main_roads,
        )
        logger.debug(
            f"Generated {len(ctx.roads)} roads for "
            f"{ctx.building_count} buildings ({ctx.settlement_kind.value})"
        )

    def generate(
        self,
        width: int,
        height: int,
        building_count: int,
        density: float,
        water_features: Sequence[WaterFeature],
        rng: RNG,
        water_mask: np.ndarray | None = None,
        main_road_count: int | None = None,
    ) -> list[Road]:
        """Generate the road segments for a settlement.

        Args:
            width: Map width.
            height: Map height.
            building_count: Number of buildings the network must serve.
            density: Road density in [0, 1].
            water_features: Water to steer away from.
            rng: Random source.
            water_mask: Precomputed water mask. Built from ``water_features``
                if not given.
            main_road_count: Fixed main road count. If None, scales with
                ``building_count``.

        Returns:
            The road segments. Empty when ``building_count`` is 0.

        Raises:
            ConfigurationError: If ``main_road_count`` is below 1.
        """
        _check_main_road_count(main_road_count)
        if building_count <= 0:
            return []

        if water_mask is None:
            water_mask = build_water_mask(width, height, water_features)
        if main_road_count is None:
            main_road_count = main_road_count_for(building_count)

        builder = _NetworkBuilder(width, height, water_mask, rng, self.water_retries)
        for index in range(main_road_count):
            builder.add_main_road(index)
        builder.seed_branch_points()

        secondary_count = int(building_count * density / self.secondary_road_divisor)
        for _ in range(secondary_count):
            builder.add_secondary_road()

        return builder.roads


class _NetworkBuilder:
    """Incrementally grows one road network."""

    def __init__(
        self,
        width: int,
        height: int,
        water_mask: np.ndarray,
        rng: RNG,
        water_retries: int,
    ) -> None:
        self.width = width
        self.height = height
        self.water_mask = water_mask
        self.rng = rng
        self.water_retries = water_retries
        self.roads: list[Road] = []
        self.branch_points: list[BranchPoint] = []

    # ------------------------------------------------------------------
    # Water avoidance
    # ------------------------------------------------------------------

    def on_water(self, point: Point) -> bool:
        x = int(clamp(math.floor(point.x), 0, self.width - 1))
        y = int(clamp(math.floor(point.y), 0, self.height - 1))
        return bool(self.water_mask[x, y])

    def avoid_water(
        self, sample: Callable[[], T], checkpoints: Callable[[T], list[Point]]
    ) -> T:
        """Draw samples until none of their checkpoints lie on water.

        Gives up after the retry budget and keeps the last sample. Water still
        wins on the occupancy grid in that case.
        """
        candidate = sample()
        for _ in range(self.water_retries):
            if not any(self.on_water(p) for p in checkpoints(candidate)):
                break
            candidate = sample()
        return candidate

    # ------------------------------------------------------------------
    # Main roads
    # ------------------------------------------------------------------

    def add_main_road(self, index: int) -> None:
        if index == 0:
            sample = self._horizontal_road
        elif index == 1:
            sample = self._vertical_road
        else:
            sample = self._diagonal_road
        road = self.avoid_water(sample, lambda r: [r.start, r.end, r.midpoint])
        self.roads.append(road)

    def _horizontal_road(self) -> Road:
        h = self.height
        offset = config.MAIN_ROAD_OFFSET_FRACTION * h
        skew = config.MAIN_ROAD_SKEW_FRACTION * h
        y = h / 2 + self.rng.uniform(-offset, offset)
        end_y = clamp(y + self.rng.uniform(-skew, skew), 0, h)
        return Road(Point(0, y), Point(self.width, end_y))

    def _vertical_road(self) -> Road:
        w = self.width
        offset = config.MAIN_ROAD_OFFSET_FRACTION * w
        skew = config.MAIN_ROAD_SKEW_FRACTION * w
        x = w / 2 + self.rng.uniform(-offset, offset)
        end_x = clamp(x + self.rng.uniform(-skew, skew), 0, w)
        return Road(Point(x, 0), Point(end_x, self.height))

    def _diagonal_road(self) -> Road:
        w = self.width
        h = self.height
        skew = config.MAIN_ROAD_OFFSET_FRACTION * h
        start_y = self.rng.uniform(0, skew)
        end_y = h - self.rng.uniform(0, skew)
        if self.rng.random() < 0.5:
            # North-west to south-east
            return Road(Point(0, start_y), Point(w, end_y))
        # North-east to south-west
        return Road(Point(w, start_y), Point(0, end_y))

    # ------------------------------------------------------------------
    # Secondary roads
    # ------------------------------------------------------------------

    def seed_branch_points(self) -> None:
        """Start the branch pool with intersections and samples on main roads."""
        for i, road_a in enumerate(self.roads):
            for road_b in self.roads[i + 1 :]:
                point = segment_intersection(
                    road_a.start, road_a.end, road_b.start, road_b.end
                )
                if point is not None:
                    self.branch_points.append(BranchPoint(point, _heading(road_a)))
        for road in self.roads:
            self._add_road_sample(road)

    def add_secondary_road(self) -> None:
        source = self.rng.choice(self.branch_points)

        def sample() -> Point:
            angle = self._branch_angle(source.heading)
            length = self.width * (
                config.SECONDARY_ROAD_MIN_LENGTH_FRACTION
                + self.rng.random() * config.SECONDARY_ROAD_EXTRA_LENGTH_FRACTION
            )
            end = source.point.offset(angle, length)
            return Point(clamp(end.x, 0, self.width), clamp(end.y, 0, self.height))

        end = self.avoid_water(sample, lambda p: [p])
        if end == source.point:
            # Clamped down to nothing against a map corner
            return

        road = Road(source.point, end)
        self._add_junctions(road)
        self.roads.append(road)
        self.branch_points.append(BranchPoint(end, _heading(road)))
        self._add_road_sample(road)

    def _branch_angle(self, heading: float) -> float:
        if self.rng.random() < config.PERPENDICULAR_BRANCH_CHANCE:
            side = self.rng.choice((-1, 1))
            spread = config.PERPENDICULAR_BRANCH_SPREAD
            return heading + side * math.pi / 2 + self.rng.uniform(-spread, spread)
        return self.rng.uniform(0, 2 * math.pi)

    def _add_junctions(self, road: Road) -> None:
        """Record where a new road crosses existing ones."""
        for other in self.roads:
            point = segment_intersection(road.start, road.end, other.start, other.end)
            if point is None:
                continue
            if point.distance_to(road.start) < _MIN_JUNCTION_SEPARATION:
                continue
            self.branch_points.append(BranchPoint(point, _heading(other)))

    def _add_road_sample(self, road: Road) -> None:
        t = self.rng.uniform(0.05, 0.95)
        self.branch_points.append(BranchPoint(road.point_at(t), _heading(road)))


def _heading(road: Road) -> float:
    return math.atan2(road.end.y - road.start.y, road.end.x - road.start.x)
