"""Pipeline-based settlement layout generation.

This package provides a layered architecture for settlement layouts. Each
layer transforms a shared LayoutContext, and the pipeline outputs a
LayoutResult with the roads, water, districts and placed buildings.

Example usage:
    from burgh.environment.generators.pipeline import generate_layout

    result = generate_layout(buildings, "town", seed=12345)

The pipeline can also be assembled manually for custom configurations:
    from burgh.environment.generators.pipeline import (
        LayoutPipeline,
        RoadNetworkLayer,
        OccupancyLayer,
        BuildingPlacementLayer,
    )

    pipeline = LayoutPipeline(
        layers=[
            RoadNetworkLayer(main_road_count=1),
            OccupancyLayer(),
            BuildingPlacementLayer(),
        ],
        settings=MapSettings(width=200, height=200),
        settlement_kind=SettlementKind.VILLAGE,
    )
"""

from .context import (
    LayoutContext,
    LayoutResult,
    PlacementReport,
    PlacementTier,
    SettlementKind,
)
from .factory import create_layout_pipeline, generate_layout
from .layer import GenerationLayer
from .layers import (
    BuildingPlacementLayer,
    BuildingPlacer,
    DistrictLayer,
    OccupancyLayer,
    RoadNetworkLayer,
    WaterFeatureLayer,
)
from .pipeline import LayoutPipeline

__all__ = [
    "BuildingPlacementLayer",
    "BuildingPlacer",
    "DistrictLayer",
    "GenerationLayer",
    "LayoutContext",
    "LayoutPipeline",
    "LayoutResult",
    "OccupancyLayer",
    "PlacementReport",
    "PlacementTier",
    "RoadNetworkLayer",
    "SettlementKind",
    "WaterFeatureLayer",
    "create_layout_pipeline",
    "generate_layout",
]
