"""Immutable layout data: map settings, roads, water features and districts.

Everything in this module is produced once per generation and read-only
afterwards. The placement engine only ever reads these objects while it
fills in building positions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from burgh import config
from burgh.errors import ConfigurationError
from burgh.util.geometry import Point, lerp, segment_length


@dataclass(frozen=True)
class MapSettings:
    """User-facing map generation settings.

    Attributes:
        width: Map width in grid cells.
        height: Map height in grid cells.
        road_density: Scales the number of secondary roads, in [0, 1].
        water_feature_probability: Chance of any water feature, in [0, 1].
    """

    width: int = config.DEFAULT_MAP_WIDTH
    height: int = config.DEFAULT_MAP_HEIGHT
    road_density: float = config.DEFAULT_ROAD_DENSITY
    water_feature_probability: float = config.DEFAULT_WATER_FEATURE_PROBABILITY

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Map size must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 <= self.road_density <= 1.0:
            raise ConfigurationError(
                f"road_density must be within [0, 1], got {self.road_density}"
            )
        if not 0.0 <= self.water_feature_probability <= 1.0:
            raise ConfigurationError(
                "water_feature_probability must be within [0, 1], "
                f"got {self.water_feature_probability}"
            )


@dataclass(frozen=True)
class Road:
    """A straight road segment.

    Roads are directed (start -> end) but treated as undirected when testing
    for intersections.
    """

    start: Point
    end: Point

    @property
    def length(self) -> float:
        return segment_length(self.start, self.end)

    @property
    def midpoint(self) -> Point:
        return lerp(self.start, self.end, 0.5)

    def point_at(self, t: float) -> Point:
        """Point at parameter t in [0, 1] along the road."""
        return lerp(self.start, self.end, t)


class WaterKind(Enum):
    RIVER = "river"
    LAKE = "lake"


@dataclass(frozen=True)
class WaterFeature:
    """A river (open polyline) or lake (closed polygon)."""

    kind: WaterKind
    points: tuple[Point, ...]

    @property
    def is_river(self) -> bool:
        return self.kind is WaterKind.RIVER

    @property
    def is_lake(self) -> bool:
        return self.kind is WaterKind.LAKE


@dataclass(frozen=True)
class District:
    """A circular zone that biases residential and civic placement."""

    center: Point
    radius: float

    def contains(self, point: Point) -> bool:
        return self.center.distance_to(point) <= self.radius


@dataclass(frozen=True)
class SettlementLayout:
    """The street and water layout of one settlement."""

    width: int
    height: int
    roads: tuple[Road, ...] = field(default_factory=tuple)
    water_features: tuple[WaterFeature, ...] = field(default_factory=tuple)
