"""Factory functions for creating pre-configured layout pipelines.

These functions provide convenient ways to create the standard settlement
layout pipeline without needing to manually assemble layers.
"""

from __future__ import annotations

from collections.abc import Mapping

from burgh import config
from burgh.environment.buildings import Building, BuildingCategory
from burgh.environment.layout import MapSettings
from burgh.types import CategoryId, RandomSeed
from burgh.util.rng import RNGProvider

from .context import LayoutResult, SettlementKind
from .layers import (
    BuildingPlacementLayer,
    DistrictLayer,
    OccupancyLayer,
    RoadNetworkLayer,
    WaterFeatureLayer,
)
from .pipeline import LayoutPipeline


def create_layout_pipeline(
    settlement_kind: SettlementKind | str,
    settings: MapSettings | None = None,
    seed: RandomSeed = None,
    rngs: RNGProvider | None = None,
    categories: Mapping[CategoryId, BuildingCategory] | None = None,
    road_buffer: int = config.ROAD_BUFFER,
    extra_clearance: int = config.ROAD_EXTRA_CLEARANCE,
) -> LayoutPipeline:
    """Create a settlement layout pipeline with default configuration.

    The layout pipeline generates:
    1. Rivers and lakes (WaterFeatureLayer)
    2. Main and secondary roads that avoid water (RoadNetworkLayer)
    3. Districts anchored on the road network (DistrictLayer)
    4. The occupancy grid, water first, then roads (OccupancyLayer)
    5. Building positions by category role (BuildingPlacementLayer)

    Args:
        settlement_kind: Village, town or city, or its name.
        settings: Map settings. If None, uses the defaults.
        seed: Optional random seed for deterministic generation.
        rngs: Injected random provider. Takes precedence over ``seed``.
        categories: Building category table override.
        road_buffer: Radius in cells kept clear around each road.
        extra_clearance: Additional clearance added to the road buffer.

    Returns:
        A configured LayoutPipeline.

    Raises:
        ConfigurationError: If the settlement kind is unknown.
    """
    kind = SettlementKind.parse(settlement_kind)

    layers = [
        # 1. Water comes first so every later stage can avoid it
        WaterFeatureLayer(),
        # 2. Roads, resampled away from water
        RoadNetworkLayer(),
        # 3. Districts at intersections, endpoints and midpoints
        DistrictLayer(),
        # 4. Rasterize water and roads
        OccupancyLayer(road_buffer=road_buffer, extra_clearance=extra_clearance),
        # 5. Place buildings
        BuildingPlacementLayer(),
    ]

    return LayoutPipeline(
        layers=layers,
        settings=settings if settings is not None else MapSettings(),
        settlement_kind=kind,
        seed=seed,
        rngs=rngs,
        categories=categories,
    )


def generate_layout(
    buildings: list[Building],
    settlement_kind: SettlementKind | str,
    settings: MapSettings | None = None,
    seed: RandomSeed = None,
    rngs: RNGProvider | None = None,
    categories: Mapping[CategoryId, BuildingCategory] | None = None,
) -> LayoutResult:
    """Lay out a settlement and position its buildings.

    Runs water, roads, districts, occupancy and placement in sequence. The
    buildings' ``position`` fields are filled in; nothing else about them
    changes.

    Args:
        buildings: Buildings to place. May be empty.
        settlement_kind: Village, town or city, or its name.
        settings: Map settings. If None, uses the defaults.
        seed: Optional random seed for deterministic generation.
        rngs: Injected random provider. Takes precedence over ``seed``.
        categories: Building category table override.

    Returns:
        The layout, districts, placed buildings and placement report.

    Raises:
        ConfigurationError: If the settlement kind is unknown.
    """
    pipeline = create_layout_pipeline(
        settlement_kind, settings, seed=seed, rngs=rngs, categories=categories
    )
    return pipeline.generate(buildings)
