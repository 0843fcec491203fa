"""Generation layers for the settlement layout pipeline.

Each layer transforms the LayoutContext in a specific way:
- Water layer: Rivers, lakes and the rasterized water mask
- Street layer: Main and secondary road network
- District layer: Circular districts anchored on the road network
- Occupancy layer: Grid seeded with water, then roads
- Building layer: Category-driven building placement
"""

from .buildings import BuildingPlacementLayer, BuildingPlacer
from .districts import DistrictLayer
from .occupancy import OccupancyLayer
from .streets import RoadNetworkLayer
from .water import WaterFeatureLayer

__all__ = [
    "BuildingPlacementLayer",
    "BuildingPlacer",
    "DistrictLayer",
    "OccupancyLayer",
    "RoadNetworkLayer",
    "WaterFeatureLayer",
]
