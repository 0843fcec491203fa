"""Settlement layout generation for Burgh.

Layout generation uses the layered pipeline architecture: each stage of the
layout (water, roads, districts, occupancy, building placement) is a
GenerationLayer applied in order to a shared LayoutContext.
"""

from .pipeline import (
    BuildingPlacementLayer,
    DistrictLayer,
    GenerationLayer,
    LayoutContext,
    LayoutPipeline,
    LayoutResult,
    OccupancyLayer,
    PlacementReport,
    PlacementTier,
    RoadNetworkLayer,
    SettlementKind,
    WaterFeatureLayer,
    create_layout_pipeline,
    generate_layout,
)

__all__ = [
    "BuildingPlacementLayer",
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
