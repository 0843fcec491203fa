"""Occupancy layer: rasterizes water and roads before placement."""

from __future__ import annotations

import logging

from burgh import config
from burgh.environment.generators.pipeline.context import LayoutContext
from burgh.environment.generators.pipeline.layer import GenerationLayer
from burgh.environment.occupancy import CellType, OccupancyGrid

logger = logging.getLogger(__name__)


class OccupancyLayer(GenerationLayer):
    """Builds a fresh occupancy grid seeded with water, then roads."""

    def __init__(
        self,
        road_buffer: int = config.ROAD_BUFFER,
        extra_clearance: int = config.ROAD_EXTRA_CLEARANCE,
    ) -> None:
        """Initialize the occupancy layer.

        Args:
            road_buffer: Radius in cells kept clear around each road.
            extra_clearance: Additional clearance added to the road buffer.
        """
        self.road_buffer = road_buffer
        self.extra_clearance = extra_clearance

    def apply(self, ctx: LayoutContext) -> None:
        ctx.grid = OccupancyGrid.from_layout(
            ctx.layout, self.road_buffer, self.extra_clearance
        )
        logger.debug(
            f"Occupancy grid {ctx.width}x{ctx.height}: "
            f"{ctx.grid.count(CellType.WATER)} water, "
            f"{ctx.grid.count(CellType.ROAD)} road cells"
        )
