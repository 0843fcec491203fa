"""Tests for the settlement economy."""

from __future__ import annotations

import pytest

from burgh.environment.buildings import Building, Ware
from burgh.settlement.catalog import EconomyFactor
from burgh.settlement.economy import (
    Economy,
    apply_economy,
    calculate_prosperity,
    generate_economy,
    round_price,
)


def ware(ware_id: str, base_price: int = 10) -> Ware:
    return Ware(ware_id, ware_id.title(), base_price, base_price, 1, "Common")


def tavern(index: int, *ware_ids: str) -> Building:
    return Building(
        id=f"tavern_{index}",
        category_id="tavern",
        wares=[ware(ware_id) for ware_id in ware_ids],
    )


# ale in three taverns, wine in two, meal in one
TAVERNS = [tavern(0, "ale", "wine", "meal"), tavern(1, "ale", "wine"), tavern(2, "ale")]


class TestProsperity:
    def test_no_known_buildings(self) -> None:
        assert calculate_prosperity([]) == 1.0
        assert calculate_prosperity([Building("x", "windmill")]) == 1.0

    def test_mean_of_known_weights(self) -> None:
        buildings = [
            Building("a", "residence"),
            Building("b", "tavern"),
            Building("c", "windmill"),
        ]
        assert calculate_prosperity(buildings) == pytest.approx(0.75)


class TestGenerateEconomy:
    """Tests for generate_economy."""

    def test_exports_and_imports(self) -> None:
        economy = generate_economy(TAVERNS, factors=())

        assert economy.prosperity == pytest.approx(1.0)
        assert economy.main_exports == ["ale", "wine", "meal"]
        assert economy.main_imports == ["meal"]

    def test_price_modifiers(self) -> None:
        """Base 0.8 + 0.2 * prosperity, scaled for exports and imports."""
        economy = generate_economy(TAVERNS, factors=())

        assert economy.price_modifiers["ale"] == pytest.approx(0.8)
        assert economy.price_modifiers["wine"] == pytest.approx(0.8)
        assert economy.price_modifiers["meal"] == pytest.approx(0.8 * 1.2)

    def test_only_stocked_wares_get_modifiers(self) -> None:
        economy = generate_economy(TAVERNS)
        assert set(economy.price_modifiers) == {"ale", "wine", "meal"}

    def test_factors_are_additive_and_clamped(self) -> None:
        boom = EconomyFactor("boom", "Boom", "", {"ale": 5.0})
        bust = EconomyFactor("bust", "Bust", "", {"wine": -5.0})
        nudge = EconomyFactor("nudge", "Nudge", "", {"meal": 0.04})

        economy = generate_economy(TAVERNS, factors=[boom, bust, nudge])

        assert economy.price_modifiers["ale"] == 2.0
        assert economy.price_modifiers["wine"] == 0.5
        assert economy.price_modifiers["meal"] == pytest.approx(0.96 + 0.04)

    def test_empty_settlement(self) -> None:
        economy = generate_economy([])
        assert economy == Economy()


class TestApplyEconomy:
    def test_reprices_from_base_price(self) -> None:
        building = Building("shop", "blacksmith", wares=[ware("sword", 50)])
        economy = Economy(price_modifiers={"sword": 0.96})

        apply_economy([building], economy)

        assert building.wares[0].current_price == 48
        assert building.wares[0].base_price == 50

    def test_half_coin_prices_round_up(self) -> None:
        """5 * 0.9 is 4.5, which becomes 5 rather than the even 4."""
        building = Building("bakery", "bakery", wares=[ware("bread", 5)])

        apply_economy([building], Economy(price_modifiers={"bread": 0.9}))

        assert building.wares[0].current_price == 5
        assert round_price(2.5) == 3
        assert round_price(2.4999) == 2

    def test_wares_without_modifier_unchanged(self) -> None:
        building = Building("shop", "blacksmith", wares=[ware("tools", 25)])

        apply_economy([building], Economy())

        assert building.wares[0].current_price == 25

    def test_dict_round_trip(self) -> None:
        economy = generate_economy(TAVERNS)
        assert Economy.from_dict(economy.to_dict()) == economy
