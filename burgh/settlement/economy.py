"""Settlement economy: prosperity, trade balance and ware prices.

The economy is a post-process over finished buildings. It reads which goods
the buildings stock, works out what the settlement exports and imports, and
derives a price modifier per ware.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from burgh import config
from burgh.environment.buildings import Building
from burgh.types import CategoryId

from .catalog import DEFAULT_ECONOMY_FACTORS, EconomyFactor

logger = logging.getLogger(__name__)

# How much each building type contributes to prosperity; other types are ignored
PROSPERITY_BY_TYPE: dict[CategoryId, float] = {
    "residence": 0.5,
    "tavern": 1.0,
    "blacksmith": 1.5,
    "generalStore": 1.2,
    "temple": 1.3,
    "market": 2.0,
    "jeweler": 2.5,
    "farm": 0.8,
    "bakery": 1.1,
    "butcher": 1.2,
    "tailor": 1.3,
    "library": 1.8,
    "alchemist": 1.7,
}


@dataclass
class Economy:
    """Aggregate economic state of a settlement.

    Attributes:
        prosperity: Mean prosperity weight of the settlement's buildings.
        main_exports: Most widely stocked wares.
        main_imports: Wares stocked by fewer than two buildings.
        price_modifiers: Multiplier applied to each ware's base price.
    """

    prosperity: float = 1.0
    main_exports: list[str] = field(default_factory=list)
    main_imports: list[str] = field(default_factory=list)
    price_modifiers: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "prosperity": self.prosperity,
            "main_exports": list(self.main_exports),
            "main_imports": list(self.main_imports),
            "price_modifiers": dict(self.price_modifiers),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Economy:
        return cls(
            prosperity=float(data["prosperity"]),
            main_exports=list(data["main_exports"]),
            main_imports=list(data["main_imports"]),
            price_modifiers={k: float(v) for k, v in data["price_modifiers"].items()},
        )


def round_price(value: float) -> int:
    """Round to the nearest whole coin, halves up (4.5 gives 5)."""
    return math.floor(value + 0.5)


def calculate_prosperity(buildings: Iterable[Building]) -> float:
    """Mean prosperity weight over buildings of known types, 1.0 if none."""
    weights = [
        PROSPERITY_BY_TYPE[b.category_id]
        for b in buildings
        if b.category_id in PROSPERITY_BY_TYPE
    ]
    if not weights:
        return 1.0
    return sum(weights) / len(weights)


def generate_economy(
    buildings: Sequence[Building],
    factors: Iterable[EconomyFactor] = DEFAULT_ECONOMY_FACTORS,
) -> Economy:
    """Derive the economy of a settlement from its buildings.

    Args:
        buildings: All buildings of the settlement, with their wares.
        factors: Economy factors whose modifiers are added to each ware.

    Returns:
        The settlement's economy. Only wares some building stocks get a
        price modifier.
    """
    factors = list(factors)
    prosperity = calculate_prosperity(buildings)

    # Counter keeps first-seen order for ties
    ware_counts = Counter(ware.id for b in buildings for ware in b.wares)
    main_exports = [
        ware_id for ware_id, _ in ware_counts.most_common(config.MAIN_EXPORT_COUNT)
    ]
    main_imports = [ware_id for ware_id, count in ware_counts.items() if count < 2][
        : config.MAIN_IMPORT_COUNT
    ]

    price_modifiers: dict[str, float] = {}
    for ware_id in ware_counts:
        modifier = 0.8 + prosperity * 0.2
        if ware_id in main_exports:
            modifier *= config.EXPORT_PRICE_FACTOR
        if ware_id in main_imports:
            modifier *= config.IMPORT_PRICE_FACTOR
        for factor in factors:
            modifier += factor.wares_modifiers.get(ware_id, 0.0)
        price_modifiers[ware_id] = max(
            config.MIN_PRICE_MODIFIER, min(modifier, config.MAX_PRICE_MODIFIER)
        )

    logger.debug(
        f"Economy: prosperity {prosperity:.2f}, exports {main_exports}, "
        f"imports {main_imports}"
    )
    return Economy(prosperity, main_exports, main_imports, price_modifiers)


def apply_economy(buildings: Iterable[Building], economy: Economy) -> None:
    """Reprice every stocked ware from its base price and the ware's modifier."""
    for building in buildings:
        for ware in building.wares:
            modifier = economy.price_modifiers.get(ware.id)
            if modifier is not None:
                ware.current_price = round_price(ware.base_price * modifier)
