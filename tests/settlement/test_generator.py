"""Tests for whole-settlement generation and JSON persistence."""

from __future__ import annotations

import json
import re
from datetime import datetime

import pytest

from burgh.environment.layout import MapSettings
from burgh.errors import ConfigurationError
from burgh.settlement.catalog import DEFAULT_SETTLEMENT_TYPES, SettlementType
from burgh.settlement.generator import (
    Settlement,
    SettlementGenerator,
    export_settlement_json,
    import_settlement_json,
)
from burgh.settlement.economy import round_price

SMALL_MAP = MapSettings(width=300, height=200, water_feature_probability=1.0)


@pytest.fixture
def village() -> Settlement:
    return SettlementGenerator(settings=SMALL_MAP, seed=7).generate("village")


class TestSettlementGenerator:
    """Tests for SettlementGenerator."""

    def test_village_size_ranges(self, village: Settlement) -> None:
        village_type = DEFAULT_SETTLEMENT_TYPES["village"]

        assert village.kind == "village"
        assert village_type.min_population <= village.population < village_type.max_population
        assert village_type.min_buildings <= len(village.buildings) < village_type.max_buildings

    def test_ids_names_and_timestamp(self, village: Settlement) -> None:
        assert re.fullmatch(r"village_[0-9a-f]{8}", village.id)
        assert village.name
        assert datetime.fromisoformat(village.generated_date).tzinfo is not None

    def test_buildings_are_placed_and_in_distribution(self, village: Settlement) -> None:
        distribution = DEFAULT_SETTLEMENT_TYPES["village"].building_distribution
        for building in village.buildings:
            assert building.category_id in distribution
            assert building.is_placed
            x, y = building.position
            assert 0 <= x < SMALL_MAP.width
            assert 0 <= y < SMALL_MAP.height

    def test_layout_result_is_attached(self, village: Settlement) -> None:
        assert village.layout_result is not None
        assert village.layout_result.layout == village.layout
        assert village.layout_result.report.placed_count == len(village.buildings)

    def test_prices_follow_economy(self, village: Settlement) -> None:
        for building in village.buildings:
            for ware in building.wares:
                modifier = village.economy.price_modifiers[ware.id]
                assert ware.current_price == round_price(ware.base_price * modifier)

    def test_explicit_name(self) -> None:
        settlement = SettlementGenerator(settings=SMALL_MAP, seed=1).generate(
            "village", name="Brackenford"
        )
        assert settlement.name == "Brackenford"

    def test_same_seed_same_settlement(self) -> None:
        first = SettlementGenerator(settings=SMALL_MAP, seed=11).generate("town")
        second = SettlementGenerator(settings=SMALL_MAP, seed=11).generate("town")

        first_data = first.to_dict()
        second_data = second.to_dict()
        first_data.pop("generated_date")
        second_data.pop("generated_date")
        assert first_data == second_data

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigurationError):
            SettlementGenerator(seed=1).generate("hamlet")

    def test_distribution_with_unknown_building_type(self) -> None:
        settlement_types = {
            "village": SettlementType(
                "village", "Village", 10, 20, 5, 10, {"residence": 5, "castle": 1}
            )
        }
        generator = SettlementGenerator(seed=1, settlement_types=settlement_types)

        with pytest.raises(ConfigurationError, match="castle"):
            generator.generate("village")


class TestSettlementJson:
    """Tests for JSON export and import."""

    def test_round_trip(self, village: Settlement) -> None:
        restored = import_settlement_json(export_settlement_json(village))

        assert restored == village
        assert restored.layout_result is None

    def test_export_is_plain_json(self, village: Settlement) -> None:
        data = json.loads(export_settlement_json(village, indent=None))

        assert data["kind"] == "village"
        assert len(data["buildings"]) == len(village.buildings)
        assert "layout_result" not in data

    @pytest.mark.parametrize("text", ["{not json", "[]", '"village"'])
    def test_invalid_json(self, text: str) -> None:
        with pytest.raises(ConfigurationError):
            import_settlement_json(text)

    def test_missing_fields(self) -> None:
        with pytest.raises(ConfigurationError, match="Malformed"):
            import_settlement_json('{"id": "village_0", "name": "Nowhere"}')
