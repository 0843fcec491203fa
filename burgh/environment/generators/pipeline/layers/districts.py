"""District partitioning layer.

Districts are circular zones that give residential placement a place to
cluster and give important buildings extra anchors. Centers prefer the
places where the road network is busiest: intersections first, then road
endpoints and midpoints, and only then random points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from burgh import config
from burgh.environment.generators.pipeline.context import LayoutContext, SettlementKind
from burgh.environment.generators.pipeline.layer import GenerationLayer
from burgh.environment.layout import District, SettlementLayout
from burgh.util.geometry import Point, clamp
from burgh.util.rng import RNG

from .streets import find_intersections

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistrictProfile:
    """How many districts a settlement kind gets.

    The count is ``max(minimum, building_count // buildings_per_district)``.
    """

    minimum: int
    buildings_per_district: int

    def district_count(self, building_count: int) -> int:
        return max(self.minimum, building_count // self.buildings_per_district)


DISTRICT_PROFILES: dict[SettlementKind, DistrictProfile] = {
    SettlementKind.VILLAGE: DistrictProfile(minimum=1, buildings_per_district=10),
    SettlementKind.TOWN: DistrictProfile(minimum=2, buildings_per_district=15),
    SettlementKind.CITY: DistrictProfile(minimum=3, buildings_per_district=25),
}


class DistrictLayer(GenerationLayer):
    """Partitions the settlement into possibly overlapping circular districts."""

    def apply(self, ctx: LayoutContext) -> None:
        """Generate districts from the roads already in the context.

        Args:
            ctx: The layout context to modify.
        """
        ctx.districts = self.partition(
            ctx.building_count,
            ctx.layout,
            ctx.settlement_kind,
            ctx.rng("layout.districts"),
        )
        logger.debug(f"Partitioned settlement into {len(ctx.districts)} districts")

    def partition(
        self,
        building_count: int,
        layout: SettlementLayout,
        settlement_kind: SettlementKind,
        rng: RNG,
    ) -> list[District]:
        """Choose district centers and radii.

        Args:
            building_count: Number of buildings in the settlement.
            layout: Roads and water of the settlement.
            settlement_kind: Determines the target district count.
            rng: Random source.

        Returns:
            Exactly the target number of districts, centers inside the map.
        """
        count = DISTRICT_PROFILES[settlement_kind].district_count(building_count)

        centers = candidate_centers(layout)[:count]
        while len(centers) < count:
            centers.append(Point(rng.random() * layout.width, rng.random() * layout.height))

        base_radius = (
            config.DISTRICT_BASE_RADIUS
            + config.DISTRICT_RADIUS_PER_BUILDING * (building_count / count)
        )
        jitter = config.DISTRICT_RADIUS_JITTER

        districts = []
        for center in centers:
            radius = clamp(
                base_radius * rng.uniform(1 - jitter, 1 + jitter),
                config.DISTRICT_MIN_RADIUS,
                config.DISTRICT_MAX_RADIUS,
            )
            clamped = Point(
                clamp(center.x, 0, layout.width), clamp(center.y, 0, layout.height)
            )
            districts.append(District(clamped, radius))
        return districts


def candidate_centers(layout: SettlementLayout) -> list[Point]:
    """Road-derived district centers in priority order, without duplicates.

    Intersections come first, then every road endpoint, then every road
    midpoint. Points that coincide to within a thousandth of a cell are
    treated as one.
    """
    roads = layout.roads
    ordered = [
        *find_intersections(roads),
        *(p for road in roads for p in (road.start, road.end)),
        *(road.midpoint for road in roads),
    ]

    seen: set[tuple[float, float]] = set()
    centers: list[Point] = []
    for point in ordered:
        key = (round(point.x, 3), round(point.y, 3))
        if key in seen:
            continue
        seen.add(key)
        centers.append(point)
    return centers
