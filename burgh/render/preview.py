"""Raster map preview of a settlement, drawn with Pillow.

Layers are drawn back to front: background, lakes, rivers, roads, then one
square marker per placed building, colored and sized by its category.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image as PILImage
from PIL import ImageDraw

from burgh import config
from burgh.environment.buildings import (
    DEFAULT_BUILDING_CATEGORIES,
    Building,
    BuildingCategory,
    category_for,
)
from burgh.environment.layout import SettlementLayout
from burgh.types import CategoryId
from burgh.util.geometry import Point

if TYPE_CHECKING:
    from burgh.environment.generators.pipeline import LayoutResult
    from burgh.settlement.generator import Settlement


def render_preview(
    source: Settlement | LayoutResult,
    scale: float = 1.0,
    categories: Mapping[CategoryId, BuildingCategory] = DEFAULT_BUILDING_CATEGORIES,
) -> PILImage.Image:
    """Draw a settlement or layout result as an RGB image.

    Args:
        source: Anything with ``layout`` and ``buildings`` attributes.
        scale: Pixels per grid cell.
        categories: Category table providing marker colors and sizes.

    Returns:
        An image of size ``(width * scale, height * scale)``.
    """
    layout: SettlementLayout = source.layout
    size = (max(1, round(layout.width * scale)), max(1, round(layout.height * scale)))
    image = PILImage.new("RGB", size, config.PREVIEW_BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    for feature in layout.water_features:
        points = _scaled(feature.points, scale)
        if feature.is_lake:
            if len(points) >= 3:
                draw.polygon(points, fill=config.PREVIEW_WATER_COLOR)
        elif len(points) >= 2:
            draw.line(
                points,
                fill=config.PREVIEW_WATER_COLOR,
                width=max(1, round(2 * config.RIVER_HALF_WIDTH * scale)),
                joint="curve",
            )

    road_width = max(1, round(config.PREVIEW_ROAD_WIDTH * scale))
    for road in layout.roads:
        draw.line(
            _scaled((road.start, road.end), scale),
            fill=config.PREVIEW_ROAD_COLOR,
            width=road_width,
        )

    for building in source.buildings:
        _draw_building(draw, building, scale, categories)

    return image


def save_preview(
    source: Settlement | LayoutResult,
    path: str | Path,
    scale: float = 1.0,
    categories: Mapping[CategoryId, BuildingCategory] = DEFAULT_BUILDING_CATEGORIES,
) -> Path:
    """Render a preview and write it to ``path``; the format follows the suffix."""
    path = Path(path)
    render_preview(source, scale, categories).save(path)
    return path


def _draw_building(
    draw: ImageDraw.ImageDraw,
    building: Building,
    scale: float,
    categories: Mapping[CategoryId, BuildingCategory],
) -> None:
    if building.position is None:
        return
    category = category_for(building.category_id, categories)
    half = max(1.0, category.marker_size * scale / 2)
    # Center the marker on the middle of the building's cell
    cx = (building.position[0] + 0.5) * scale
    cy = (building.position[1] + 0.5) * scale
    draw.rectangle(
        (cx - half, cy - half, cx + half, cy + half),
        fill=category.color,
        outline=config.PREVIEW_OUTLINE_COLOR,
    )


def _scaled(points: Sequence[Point], scale: float) -> list[tuple[float, float]]:
    return [(p.x * scale, p.y * scale) for p in points]
