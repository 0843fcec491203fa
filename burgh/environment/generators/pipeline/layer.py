"""Abstract base class for generation layers.

Each layer in the pipeline implements the GenerationLayer interface and
fills in one part of the LayoutContext: water, roads, districts, the
occupancy grid or building positions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import LayoutContext


class GenerationLayer(ABC):
    """Abstract base class for layout generation layers.

    Layers are applied sequentially by the LayoutPipeline. Each layer
    receives a LayoutContext and modifies it in place.

    Subclasses must implement the apply() method to perform their specific
    generation logic.
    """

    @abstractmethod
    def apply(self, ctx: LayoutContext) -> None:
        """Apply this layer's generation logic to the context.

        This method should modify the context in place. It may:
        - Add water features (ctx.water_features, ctx.water_mask)
        - Add roads (ctx.roads) or districts (ctx.districts)
        - Build or write to the occupancy grid (ctx.grid)
        - Position buildings (ctx.buildings, ctx.report)
        - Use ctx.rng(domain) for random decisions

        Args:
            ctx: The layout context to modify.
        """
        raise NotImplementedError
