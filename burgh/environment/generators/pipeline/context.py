"""Generation context for the settlement layout pipeline.

The LayoutContext is a mutable container that holds all state during layout
generation. Each layer in the pipeline receives the same context and fills
in its part: water, roads, districts, the occupancy grid, and finally the
building positions.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from burgh.environment.buildings import (
    DEFAULT_BUILDING_CATEGORIES,
    Building,
    BuildingCategory,
)
from burgh.environment.layout import (
    District,
    MapSettings,
    Road,
    SettlementLayout,
    WaterFeature,
)
from burgh.environment.occupancy import OccupancyGrid
from burgh.errors import ConfigurationError
from burgh.types import CategoryId, RandomSeed
from burgh.util.rng import RNGProvider, RNGStream


class SettlementKind(Enum):
    VILLAGE = "village"
    TOWN = "town"
    CITY = "city"

    @classmethod
    def parse(cls, value: SettlementKind | str) -> SettlementKind:
        """Resolve a kind from its name, failing fast on unknown input."""
        if isinstance(value, SettlementKind):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            known = ", ".join(kind.value for kind in cls)
            raise ConfigurationError(
                f"Unknown settlement kind {value!r} (expected one of: {known})"
            ) from None


class PlacementTier(Enum):
    """How a building obtained its position."""

    ANCHOR = "anchor"  # near an intersection or district center
    FRONTAGE = "frontage"  # along a road
    DISTRICT = "district"  # in a residential ring
    OUTSKIRTS = "outskirts"  # in an outer edge band
    NEAR_POINT = "near_point"  # expanding search around a chosen point
    NEAR_ROAD = "near_road"  # global fallback, close to a road
    RANDOM = "random"  # global fallback, random free cell
    OVERLAP = "overlap"  # last resort, occupancy not checked

    @property
    def is_fallback(self) -> bool:
        """True for tiers of the global fallback."""
        return self in (
            PlacementTier.NEAR_ROAD,
            PlacementTier.RANDOM,
            PlacementTier.OVERLAP,
        )


@dataclass
class PlacementReport:
    """Diagnostics collected while placing buildings.

    Attributes:
        tiers: Placement tier used for each building, by building id.
    """

    tiers: dict[str, PlacementTier] = field(default_factory=dict)

    def record(self, building: Building, tier: PlacementTier) -> None:
        self.tiers[building.id] = tier

    @property
    def placed_count(self) -> int:
        return len(self.tiers)

    @property
    def overlap_count(self) -> int:
        """Number of buildings that needed the last-resort tier."""
        return sum(1 for tier in self.tiers.values() if tier is PlacementTier.OVERLAP)

    @property
    def fallback_count(self) -> int:
        return sum(1 for tier in self.tiers.values() if tier.is_fallback)

    def tier_counts(self) -> Counter[PlacementTier]:
        return Counter(self.tiers.values())

    def tier_of(self, building: Building) -> PlacementTier | None:
        return self.tiers.get(building.id)


@dataclass
class LayoutResult:
    """Everything a layout generation produces.

    Attributes:
        layout: Roads and water features.
        districts: Districts used to bias placement.
        buildings: The input buildings, now with positions.
        report: Placement diagnostics.
        grid: The final occupancy grid, for inspection and rendering.
    """

    layout: SettlementLayout
    districts: list[District]
    buildings: list[Building]
    report: PlacementReport
    grid: OccupancyGrid


@dataclass
class LayoutContext:
    """Mutable state container passed through the layout pipeline.

    Attributes:
        settings: Map size, road density and water probability.
        settlement_kind: Village, town or city.
        buildings: Buildings to place; their positions are filled in.
        categories: Building category table used by placement.
        rngs: Provider of isolated random streams, one per stage.
        water_features: Rivers and lakes (WaterFeatureLayer).
        water_mask: Rasterized water, shape (width, height) (WaterFeatureLayer).
        roads: Road segments (RoadNetworkLayer).
        districts: Circular districts (DistrictLayer).
        grid: Occupancy grid seeded with water and roads (OccupancyLayer).
        report: Placement diagnostics (BuildingPlacementLayer).
    """

    settings: MapSettings
    settlement_kind: SettlementKind
    buildings: list[Building] = field(default_factory=list)
    categories: Mapping[CategoryId, BuildingCategory] = field(
        default_factory=lambda: DEFAULT_BUILDING_CATEGORIES
    )
    rngs: RNGProvider = field(default_factory=RNGProvider)
    water_features: list[WaterFeature] = field(default_factory=list)
    water_mask: np.ndarray | None = None
    roads: list[Road] = field(default_factory=list)
    districts: list[District] = field(default_factory=list)
    grid: OccupancyGrid | None = None
    report: PlacementReport = field(default_factory=PlacementReport)

    @classmethod
    def create(
        cls,
        settings: MapSettings,
        settlement_kind: SettlementKind | str,
        buildings: list[Building] | None = None,
        seed: RandomSeed = None,
        rngs: RNGProvider | None = None,
        categories: Mapping[CategoryId, BuildingCategory] | None = None,
    ) -> LayoutContext:
        """Create a context ready for layer processing.

        Args:
            settings: Map settings.
            settlement_kind: Settlement kind or its name.
            buildings: Buildings to place. May be empty.
            seed: Master seed, used when ``rngs`` is not given.
            rngs: Injected random provider. Takes precedence over ``seed``.
            categories: Building category table override.

        Returns:
            A new LayoutContext.

        Raises:
            ConfigurationError: If the settlement kind is unknown.
        """
        return cls(
            settings=settings,
            settlement_kind=SettlementKind.parse(settlement_kind),
            buildings=buildings if buildings is not None else [],
            categories=(
                categories if categories is not None else DEFAULT_BUILDING_CATEGORIES
            ),
            rngs=rngs if rngs is not None else RNGProvider(seed),
        )

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    @property
    def building_count(self) -> int:
        return len(self.buildings)

    def rng(self, domain: str) -> RNGStream:
        """Random stream for one stage, e.g. ``ctx.rng("layout.roads")``."""
        return self.rngs.get(domain)

    @property
    def layout(self) -> SettlementLayout:
        """Snapshot of the roads and water generated so far."""
        return SettlementLayout(
            width=self.width,
            height=self.height,
            roads=tuple(self.roads),
            water_features=tuple(self.water_features),
        )

    def to_layout_result(self) -> LayoutResult:
        """Convert this context into the pipeline's output."""
        grid = self.grid
        if grid is None:
            grid = OccupancyGrid.from_layout(self.layout)
        return LayoutResult(
            layout=self.layout,
            districts=list(self.districts),
            buildings=self.buildings,
            report=self.report,
            grid=grid,
        )
