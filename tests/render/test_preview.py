"""Tests for the Pillow map preview."""

from __future__ import annotations

from pathlib import Path

from PIL import Image as PILImage

from burgh import config
from burgh.environment.buildings import DEFAULT_BUILDING_CATEGORIES, Building
from burgh.environment.generators.pipeline import LayoutResult, PlacementReport
from burgh.environment.layout import Road, SettlementLayout, WaterFeature, WaterKind
from burgh.environment.occupancy import OccupancyGrid
from burgh.render.preview import render_preview, save_preview
from burgh.util.geometry import Point

LAKE = WaterFeature(
    WaterKind.LAKE, (Point(60, 50), Point(80, 50), Point(80, 70), Point(60, 70))
)


def sample_result() -> LayoutResult:
    layout = SettlementLayout(
        100,
        80,
        roads=(Road(Point(0, 40), Point(100, 40)),),
        water_features=(LAKE,),
    )
    buildings = [
        Building(id="tavern_0", category_id="tavern", position=(20, 10)),
        Building(id="farm_0", category_id="farm"),
    ]
    return LayoutResult(
        layout=layout,
        districts=[],
        buildings=buildings,
        report=PlacementReport(),
        grid=OccupancyGrid(100, 80),
    )


class TestRenderPreview:
    def test_image_size_follows_scale(self) -> None:
        result = sample_result()
        assert render_preview(result).size == (100, 80)
        assert render_preview(result, scale=2.0).size == (200, 160)

    def test_layers_are_drawn(self) -> None:
        image = render_preview(sample_result())

        assert image.mode == "RGB"
        assert image.getpixel((90, 75)) == config.PREVIEW_BACKGROUND_COLOR
        assert image.getpixel((70, 60)) == config.PREVIEW_WATER_COLOR
        assert image.getpixel((50, 40)) == config.PREVIEW_ROAD_COLOR
        assert image.getpixel((20, 10)) == DEFAULT_BUILDING_CATEGORIES["tavern"].color

    def test_unplaced_buildings_are_skipped(self) -> None:
        result = sample_result()
        result.buildings[0].position = None

        image = render_preview(result)

        assert image.getpixel((20, 10)) == config.PREVIEW_BACKGROUND_COLOR

    def test_save_preview(self, tmp_path: Path) -> None:
        path = save_preview(sample_result(), tmp_path / "map.png")

        assert path.exists()
        with PILImage.open(path) as image:
            assert image.size == (100, 80)
