"""Pipeline that orchestrates layer-based settlement layout generation.

The LayoutPipeline runs a sequence of GenerationLayers, each transforming
a shared LayoutContext. Each layer focuses on one aspect of the layout:
water, roads, districts, occupancy or building positions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from burgh.environment.buildings import Building, BuildingCategory
from burgh.environment.layout import MapSettings
from burgh.types import CategoryId, RandomSeed
from burgh.util.rng import RNGProvider

from .context import LayoutContext, LayoutResult, SettlementKind

if TYPE_CHECKING:
    from .layer import GenerationLayer


class LayoutPipeline:
    """Layout generator that runs layers sequentially on a shared context.

    Every call to ``generate`` creates a fresh LayoutContext, so a pipeline
    can be reused and never shares grids or intermediate state between runs.

    Example:
        pipeline = LayoutPipeline(
            layers=[
                WaterFeatureLayer(),
                RoadNetworkLayer(),
                DistrictLayer(),
                OccupancyLayer(),
                BuildingPlacementLayer(),
            ],
            settings=MapSettings(width=400, height=300),
            settlement_kind=SettlementKind.TOWN,
            seed=12345,
        )
        result = pipeline.generate(buildings)

    Attributes:
        layers: List of GenerationLayer instances to apply.
        settings: Map settings shared by every run.
        settlement_kind: Kind of settlement being laid out.
        seed: Optional random seed for reproducible generation.
        rngs: Optional injected random provider; overrides ``seed``.
    """

    def __init__(
        self,
        layers: list[GenerationLayer],
        settings: MapSettings,
        settlement_kind: SettlementKind,
        seed: RandomSeed = None,
        rngs: RNGProvider | None = None,
        categories: Mapping[CategoryId, BuildingCategory] | None = None,
    ) -> None:
        """Initialize the layout pipeline.

        Args:
            layers: List of GenerationLayer instances to apply in order.
            settings: Map size, road density and water probability.
            settlement_kind: Kind of settlement being laid out.
            seed: Optional random seed for deterministic generation.
            rngs: Injected random provider. Takes precedence over ``seed``.
            categories: Building category table override.
        """
        self.layers = layers
        self.settings = settings
        self.settlement_kind = settlement_kind
        self.seed = seed
        self.rngs = rngs
        self.categories = categories

    def generate(self, buildings: list[Building] | None = None) -> LayoutResult:
        """Generate a layout by running all layers in sequence.

        Args:
            buildings: Buildings to place. Their positions are filled in.

        Returns:
            The layout, districts, placed buildings and placement report.
        """
        ctx = LayoutContext.create(
            self.settings,
            self.settlement_kind,
            buildings=buildings,
            seed=self.seed,
            rngs=self.rngs,
            categories=self.categories,
        )

        for layer in self.layers:
            layer.apply(ctx)

        return ctx.to_layout_result()
