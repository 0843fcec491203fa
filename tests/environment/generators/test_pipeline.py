"""Tests for the layout pipeline infrastructure.

Covers:
- LayoutContext creation and snapshots
- LayoutPipeline with custom layer lists
- generate_layout end to end: determinism and placement invariants
"""

from __future__ import annotations

import numpy as np
import pytest

from burgh.environment.buildings import Building, BuildingCategory, BuildingRole
from burgh.environment.generators.pipeline import (
    BuildingPlacementLayer,
    GenerationLayer,
    LayoutContext,
    LayoutPipeline,
    OccupancyLayer,
    PlacementTier,
    RoadNetworkLayer,
    SettlementKind,
    create_layout_pipeline,
    generate_layout,
)
from burgh.environment.layout import MapSettings, Road, SettlementLayout
from burgh.environment.occupancy import CellType, OccupancyGrid, build_water_mask
from burgh.errors import ConfigurationError
from burgh.util.geometry import Point
from burgh.util.rng import RNGProvider


def town_buildings() -> list[Building]:
    counts = {
        "townHall": 1,
        "temple": 1,
        "tavern": 2,
        "market": 1,
        "blacksmith": 3,
        "bakery": 2,
        "generalStore": 2,
        "residence": 40,
        "farm": 6,
    }
    return [
        Building(id=f"{category}_{i}", category_id=category)
        for category, count in counts.items()
        for i in range(count)
    ]


WATERY_TOWN = MapSettings(width=400, height=300, water_feature_probability=1.0)


# =============================================================================
# LayoutContext
# =============================================================================


class TestLayoutContext:
    """Tests for LayoutContext."""

    def test_create_parses_kind(self) -> None:
        ctx = LayoutContext.create(MapSettings(), "City")
        assert ctx.settlement_kind is SettlementKind.CITY
        assert ctx.buildings == []
        assert ctx.grid is None

    def test_create_rejects_unknown_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="metropolis"):
            LayoutContext.create(MapSettings(), "metropolis")

    def test_injected_rngs_take_precedence(self) -> None:
        provider = RNGProvider("shared")
        ctx = LayoutContext.create(MapSettings(), "town", seed=1, rngs=provider)
        assert ctx.rngs is provider

    def test_layout_snapshot_reflects_roads(self) -> None:
        ctx = LayoutContext.create(MapSettings(width=50, height=40), "village")
        assert ctx.layout == SettlementLayout(50, 40)

        road = Road(Point(0, 20), Point(50, 20))
        ctx.roads.append(road)

        assert ctx.layout.roads == (road,)

    def test_to_layout_result_builds_grid_when_missing(self) -> None:
        ctx = LayoutContext.create(MapSettings(width=30, height=20), "village")

        result = ctx.to_layout_result()

        assert result.grid.cells.shape == (30, 20)
        assert np.all(result.grid.cells == CellType.EMPTY)


# =============================================================================
# Settings validation
# =============================================================================


class TestMapSettings:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": -5},
            {"road_density": 1.5},
            {"road_density": -0.1},
            {"water_feature_probability": 2.0},
        ],
    )
    def test_invalid_settings_raise(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            MapSettings(**kwargs)

    def test_defaults_are_valid(self) -> None:
        settings = MapSettings()
        assert settings.width > 0 and settings.height > 0


# =============================================================================
# LayoutPipeline
# =============================================================================


class TestLayoutPipeline:
    """Tests for LayoutPipeline."""

    def test_layers_run_in_order(self) -> None:
        calls: list[str] = []

        class Recorder(GenerationLayer):
            def __init__(self, name: str) -> None:
                self.name = name

            def apply(self, ctx: LayoutContext) -> None:
                calls.append(self.name)

        pipeline = LayoutPipeline(
            layers=[Recorder("first"), Recorder("second"), Recorder("third")],
            settings=MapSettings(width=20, height=20),
            settlement_kind=SettlementKind.VILLAGE,
        )
        pipeline.generate()

        assert calls == ["first", "second", "third"]

    def test_custom_layers_without_water_or_districts(self) -> None:
        """Residences with no districts and no civic buildings go near the road."""
        pipeline = LayoutPipeline(
            layers=[
                RoadNetworkLayer(main_road_count=1),
                OccupancyLayer(),
                BuildingPlacementLayer(),
            ],
            settings=MapSettings(width=200, height=200, road_density=0.0),
            settlement_kind=SettlementKind.VILLAGE,
            seed=1,
        )
        buildings = [Building(id=f"house_{i}", category_id="residence") for i in range(3)]

        result = pipeline.generate(buildings)

        assert len(result.layout.roads) == 1
        assert result.layout.water_features == ()
        assert result.districts == []
        for building in buildings:
            assert result.report.tier_of(building) is PlacementTier.NEAR_ROAD

    def test_pipeline_is_reusable(self) -> None:
        """Each run starts from a fresh context and a fresh grid."""
        pipeline = create_layout_pipeline("town", WATERY_TOWN, seed=5)

        first = pipeline.generate(town_buildings())
        second = pipeline.generate(town_buildings())

        assert first.grid is not second.grid
        assert [b.position for b in first.buildings] == [
            b.position for b in second.buildings
        ]


# =============================================================================
# generate_layout
# =============================================================================


class TestGenerateLayout:
    """End-to-end tests for generate_layout."""

    def test_unknown_kind_fails_fast(self) -> None:
        buildings = town_buildings()
        with pytest.raises(ConfigurationError):
            generate_layout(buildings, "hamlet", seed=1)
        assert all(b.position is None for b in buildings)

    def test_empty_settlement(self) -> None:
        result = generate_layout([], "village", seed=1)

        assert result.buildings == []
        assert result.layout.roads == ()
        assert result.report.placed_count == 0

    def test_same_seed_same_layout(self) -> None:
        first = generate_layout(town_buildings(), "town", WATERY_TOWN, seed=123)
        second = generate_layout(town_buildings(), "town", WATERY_TOWN, seed=123)

        assert first.layout == second.layout
        assert first.districts == second.districts
        assert [b.position for b in first.buildings] == [
            b.position for b in second.buildings
        ]
        assert first.report.tiers == second.report.tiers
        assert np.array_equal(first.grid.cells, second.grid.cells)

    def test_injected_provider_matches_seed(self) -> None:
        by_seed = generate_layout(town_buildings(), "town", WATERY_TOWN, seed=99)
        by_provider = generate_layout(
            town_buildings(), "town", WATERY_TOWN, rngs=RNGProvider(99)
        )

        assert by_seed.layout == by_provider.layout
        assert [b.position for b in by_seed.buildings] == [
            b.position for b in by_provider.buildings
        ]

    def test_different_seeds_differ(self) -> None:
        first = generate_layout(town_buildings(), "town", WATERY_TOWN, seed=1)
        second = generate_layout(town_buildings(), "town", WATERY_TOWN, seed=2)
        assert first.layout.roads != second.layout.roads

    def test_every_building_is_placed_in_bounds(self) -> None:
        for seed in range(5):
            result = generate_layout(town_buildings(), "town", WATERY_TOWN, seed=seed)

            assert result.report.placed_count == len(result.buildings)
            for building in result.buildings:
                assert building.is_placed
                x, y = building.position
                assert 0 <= x < WATERY_TOWN.width
                assert 0 <= y < WATERY_TOWN.height

    def test_checked_placements_avoid_roads_water_and_each_other(self) -> None:
        for seed in range(5):
            result = generate_layout(town_buildings(), "town", WATERY_TOWN, seed=seed)
            layout = result.layout
            water = build_water_mask(layout.width, layout.height, layout.water_features)
            terrain = OccupancyGrid.from_layout(layout)

            checked = [
                b
                for b in result.buildings
                if result.report.tier_of(b) is not PlacementTier.OVERLAP
            ]
            positions = [b.position for b in checked]
            assert len(positions) == len(set(positions))
            for x, y in positions:
                assert not water[x, y]
                assert terrain.cell_at(x, y) == CellType.EMPTY
                assert result.grid.cell_at(x, y) == CellType.BUILDING

    def test_custom_category_table(self) -> None:
        """A category mapped to the farm role is placed on the outskirts."""
        categories = {"orchard": BuildingCategory("orchard", BuildingRole.FARM, 5)}
        buildings = [Building(id="orchard_0", category_id="orchard")]

        result = generate_layout(
            buildings,
            "village",
            MapSettings(width=200, height=200, water_feature_probability=0.0),
            seed=4,
            categories=categories,
        )

        assert result.report.tier_of(buildings[0]) is PlacementTier.OUTSKIRTS
