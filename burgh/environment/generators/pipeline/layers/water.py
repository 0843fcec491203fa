"""Water feature layer for settlement generation.

This layer decides whether the settlement has water and creates it:
- Rivers enter on one map edge and leave on the opposite edge, bowing
  smoothly between the two
- Lakes are irregular closed polygons around a center in the map interior
- The rasterized water mask is stored for the road layer to avoid
"""

from __future__ import annotations

import logging
import math

from burgh import config
from burgh.environment.generators.pipeline.context import LayoutContext
from burgh.environment.generators.pipeline.layer import GenerationLayer
from burgh.environment.layout import WaterFeature, WaterKind
from burgh.environment.occupancy import build_water_mask
from burgh.util.geometry import Point, clamp, lerp, unit_normal
from burgh.util.rng import RNG

logger = logging.getLogger(__name__)

# Map edges, in clockwise order so that (side + 2) % 4 is the opposite edge
TOP, RIGHT, BOTTOM, LEFT = range(4)


class WaterFeatureLayer(GenerationLayer):
    """Creates rivers and lakes.

    With probability ``water_feature_probability`` at least one feature is
    created. A second roll picks a river, a lake, or both.
    """

    def __init__(
        self,
        probability: float | None = None,
        river_threshold: float = config.RIVER_THRESHOLD,
        lake_threshold: float = config.LAKE_THRESHOLD,
    ) -> None:
        """Initialize the water feature layer.

        Args:
            probability: Chance of any water. If None, uses the map settings.
            river_threshold: Feature rolls below this create a river.
            lake_threshold: Feature rolls above this create a lake.
        """
        self.probability = probability
        self.river_threshold = river_threshold
        self.lake_threshold = lake_threshold

    def apply(self, ctx: LayoutContext) -> None:
        """Generate water features and the water mask.

        Args:
            ctx: The layout context to modify.
        """
        probability = (
            self.probability
            if self.probability is not None
            else ctx.settings.water_feature_probability
        )
        ctx.water_features = self.generate(
            ctx.width, ctx.height, probability, ctx.rng("layout.water")
        )
        ctx.water_mask = build_water_mask(ctx.width, ctx.height, ctx.water_features)
        logger.debug(
            f"Generated {len(ctx.water_features)} water features "
            f"({int(ctx.water_mask.sum())} water cells)"
        )

    def generate(
        self, width: int, height: int, probability: float, rng: RNG
    ) -> list[WaterFeature]:
        """Generate zero or more water features.

        Args:
            width: Map width.
            height: Map height.
            probability: Chance of creating any water at all.
            rng: Random source.

        Returns:
            The created features; rivers come before lakes.
        """
        features: list[WaterFeature] = []
        if rng.random() >= probability:
            return features

        roll = rng.random()
        if roll < self.river_threshold:
            features.append(self.generate_river(width, height, rng))
        if roll > self.lake_threshold:
            features.append(self.generate_lake(width, height, rng))
        return features

    def generate_river(self, width: int, height: int, rng: RNG) -> WaterFeature:
        """Create a river flowing from one edge to the opposite edge.

        Interior control points are interpolated between the two endpoints and
        pushed sideways by ``sin(ratio * pi) * curve_factor``. The offset is
        zero at both ends, so the river still meets its edges exactly, and
        peaks midway.
        """
        side = rng.randrange(4)
        start = _edge_point(side, width, height, rng)
        end = _edge_point((side + 2) % 4, width, height, rng)

        control_count = rng.randint(
            config.RIVER_MIN_CONTROL_POINTS, config.RIVER_MAX_CONTROL_POINTS
        )
        curve_factor = (
            rng.uniform(-1.0, 1.0) * config.RIVER_CURVE_FRACTION * min(width, height)
        )
        normal = unit_normal(start, end) or (0.0, 0.0)

        points = [start]
        for i in range(1, control_count + 1):
            ratio = i / (control_count + 1)
            base = lerp(start, end, ratio)
            # Small per-point wobble keeps the bank from looking like a pure arc
            bend = math.sin(ratio * math.pi) * curve_factor * rng.uniform(0.85, 1.15)
            points.append(
                Point(
                    clamp(base.x + normal[0] * bend, 0, width),
                    clamp(base.y + normal[1] * bend, 0, height),
                )
            )
        points.append(end)

        return WaterFeature(WaterKind.RIVER, tuple(points))

    def generate_lake(self, width: int, height: int, rng: RNG) -> WaterFeature:
        """Create an irregular lake polygon in the map interior."""
        margin = config.LAKE_CENTER_MARGIN
        center = Point(
            width * (margin + rng.random() * (1 - 2 * margin)),
            height * (margin + rng.random() * (1 - 2 * margin)),
        )

        shorter = min(width, height)
        base_radius = rng.uniform(
            shorter * config.LAKE_MIN_RADIUS_FRACTION,
            shorter * config.LAKE_MAX_RADIUS_FRACTION,
        )
        point_count = rng.randint(config.LAKE_MIN_POINTS, config.LAKE_MAX_POINTS)
        jitter = config.LAKE_RADIUS_JITTER

        points = []
        for i in range(point_count):
            angle = (i / point_count) * math.pi * 2
            radius = base_radius * rng.uniform(1 - jitter, 1 + jitter)
            points.append(center.offset(angle, radius))

        return WaterFeature(WaterKind.LAKE, tuple(points))


def _edge_point(side: int, width: int, height: int, rng: RNG) -> Point:
    """Random point on the given map edge."""
    if side == TOP:
        return Point(rng.random() * width, 0)
    if side == RIGHT:
        return Point(width, rng.random() * height)
    if side == BOTTOM:
        return Point(rng.random() * width, height)
    return Point(0, rng.random() * height)
