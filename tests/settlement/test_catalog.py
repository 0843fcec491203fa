"""Consistency tests for the settlement, building and ware tables."""

from __future__ import annotations

import pytest

from burgh.environment.buildings import DEFAULT_BUILDING_CATEGORIES
from burgh.errors import ConfigurationError
from burgh.settlement.catalog import (
    DEFAULT_BUILDING_TYPES,
    DEFAULT_SETTLEMENT_TYPES,
    WARES_DATABASE,
    get_building_type,
    get_settlement_type,
)


class TestTables:
    def test_distributions_reference_known_building_types(self) -> None:
        for settlement_type in DEFAULT_SETTLEMENT_TYPES.values():
            for type_id in settlement_type.building_distribution:
                assert type_id in DEFAULT_BUILDING_TYPES, type_id

    def test_every_building_type_has_a_placement_category(self) -> None:
        for type_id in DEFAULT_BUILDING_TYPES:
            assert type_id in DEFAULT_BUILDING_CATEGORIES, type_id

    def test_possible_wares_exist(self) -> None:
        for building_type in DEFAULT_BUILDING_TYPES.values():
            for chance in building_type.possible_wares:
                assert chance.ware_id in WARES_DATABASE, chance.ware_id
                assert 0 < chance.probability <= 1

    def test_size_ranges_grow_with_kind(self) -> None:
        village, town, city = (
            DEFAULT_SETTLEMENT_TYPES[kind] for kind in ("village", "town", "city")
        )
        for settlement_type in (village, town, city):
            assert settlement_type.min_population < settlement_type.max_population
            assert settlement_type.min_buildings < settlement_type.max_buildings
        assert village.max_buildings <= town.min_buildings
        assert town.max_buildings <= city.min_buildings


class TestLookups:
    def test_settlement_type_lookup_ignores_case(self) -> None:
        assert get_settlement_type("Town").id == "town"

    def test_unknown_settlement_type(self) -> None:
        with pytest.raises(ConfigurationError, match="hamlet"):
            get_settlement_type("hamlet")

    def test_building_type_lookup(self) -> None:
        assert get_building_type("tavern").name == "Tavern"

    def test_unknown_building_type(self) -> None:
        with pytest.raises(ConfigurationError, match="castle"):
            get_building_type("castle")
