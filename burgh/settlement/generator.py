"""Whole-settlement assembly and JSON persistence.

SettlementGenerator ties the pieces together: it sizes the settlement from
its type, generates building content, lays the settlement out, and prices
its goods. Settlements round-trip through plain dicts, and through JSON
with ``export_settlement_json`` / ``import_settlement_json``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from burgh.environment.buildings import Building, BuildingCategory, Ware
from burgh.environment.generators.pipeline import (
    LayoutResult,
    SettlementKind,
    generate_layout,
)
from burgh.environment.layout import (
    District,
    MapSettings,
    Road,
    SettlementLayout,
    WaterFeature,
    WaterKind,
)
from burgh.errors import ConfigurationError
from burgh.types import CategoryId, RandomSeed
from burgh.util.geometry import Point
from burgh.util.rng import RNG, RNGProvider

from .catalog import (
    DEFAULT_BUILDING_TYPES,
    DEFAULT_ECONOMY_FACTORS,
    DEFAULT_SETTLEMENT_TYPES,
    BuildingType,
    EconomyFactor,
    SettlementType,
    get_building_type,
    get_settlement_type,
)
from .content import BuildingContentGenerator, choose_building_type
from .economy import Economy, apply_economy, generate_economy
from .names import NameGenerator

logger = logging.getLogger(__name__)


@dataclass
class Settlement:
    """A generated settlement.

    Attributes:
        id: Identifier of this settlement.
        name: Settlement name.
        kind: Settlement kind ("village", "town" or "city").
        population: Number of inhabitants.
        buildings: Placed buildings with their content.
        layout: Roads and water features.
        districts: Districts the layout was organized into.
        economy: Prosperity, trade balance and price modifiers.
        generated_date: ISO 8601 timestamp of generation.
        layout_result: Full layout output, including the occupancy grid and
            placement report. Only present on freshly generated settlements;
            it is not serialized.
    """

    id: str
    name: str
    kind: str
    population: int
    buildings: list[Building]
    layout: SettlementLayout
    districts: list[District] = field(default_factory=list)
    economy: Economy = field(default_factory=Economy)
    generated_date: str = ""
    layout_result: LayoutResult | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind,
            "population": self.population,
            "buildings": [_building_to_dict(b) for b in self.buildings],
            "layout": _layout_to_dict(self.layout),
            "districts": [
                {"center": _point_to_dict(d.center), "radius": d.radius}
                for d in self.districts
            ],
            "economy": self.economy.to_dict(),
            "generated_date": self.generated_date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settlement:
        """Rebuild a settlement from ``to_dict`` output.

        Raises:
            ConfigurationError: If required fields are missing or malformed.
        """
        try:
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                kind=str(data["kind"]),
                population=int(data["population"]),
                buildings=[_building_from_dict(b) for b in data["buildings"]],
                layout=_layout_from_dict(data["layout"]),
                districts=[
                    District(_point_from_dict(d["center"]), float(d["radius"]))
                    for d in data.get("districts", [])
                ],
                economy=Economy.from_dict(data["economy"]),
                generated_date=str(data.get("generated_date", "")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Malformed settlement data: {e!r}") from e


class SettlementGenerator:
    """Generates complete settlements: content, layout and economy.

    Each generator owns an RNGProvider, so a generator created with a fixed
    seed produces the same sequence of settlements every time.
    """

    def __init__(
        self,
        settings: MapSettings | None = None,
        seed: RandomSeed = None,
        settlement_types: Mapping[str, SettlementType] = DEFAULT_SETTLEMENT_TYPES,
        building_types: Mapping[CategoryId, BuildingType] = DEFAULT_BUILDING_TYPES,
        economy_factors: tuple[EconomyFactor, ...] = DEFAULT_ECONOMY_FACTORS,
        categories: Mapping[CategoryId, BuildingCategory] | None = None,
    ) -> None:
        """Initialize the settlement generator.

        Args:
            settings: Map settings used for every layout. If None, defaults.
            seed: Master seed. None gives non-deterministic output.
            settlement_types: Settlement type table.
            building_types: Building type table.
            economy_factors: Economy factors applied to prices.
            categories: Building category table override for placement.
        """
        self.settings = settings if settings is not None else MapSettings()
        self.settlement_types = settlement_types
        self.building_types = building_types
        self.economy_factors = economy_factors
        self.categories = categories

        self.rngs = RNGProvider(seed)
        self.content = BuildingContentGenerator(rng=self.rngs.get("settlement.content"))
        self.names = NameGenerator(rng=self.rngs.get("settlement.names"))

    def generate(self, kind: str, name: str | None = None) -> Settlement:
        """Generate a settlement of the given kind.

        Args:
            kind: "village", "town" or "city".
            name: Settlement name. If None, a themed name is generated.

        Returns:
            The generated settlement with placed buildings and priced wares.

        Raises:
            ConfigurationError: If the kind is unknown, or its building
                distribution names a building type that does not exist.
        """
        settlement_kind = SettlementKind.parse(kind)
        settlement_type = get_settlement_type(settlement_kind.value, self.settlement_types)
        for type_id in settlement_type.building_distribution:
            get_building_type(type_id, self.building_types)

        sizing = self.rngs.get("settlement.sizing")
        population = _roll(
            sizing, settlement_type.min_population, settlement_type.max_population
        )
        building_count = _roll(
            sizing, settlement_type.min_buildings, settlement_type.max_buildings
        )
        settlement_id = f"{settlement_kind.value}_{sizing.getrandbits(32):08x}"

        buildings = []
        for _ in range(building_count):
            type_id = choose_building_type(
                settlement_type.building_distribution, rng=self.content.rng
            )
            buildings.append(
                self.content.generate_building(self.building_types[type_id])
            )

        result = generate_layout(
            buildings,
            settlement_kind,
            settings=self.settings,
            rngs=self.rngs,
            categories=self.categories,
        )

        economy = generate_economy(buildings, self.economy_factors)
        apply_economy(buildings, economy)

        if name is None:
            name = self.names.generate_themed_name(settlement_kind.value)

        logger.debug(
            f"Generated {settlement_kind.value} {name!r}: population {population}, "
            f"{len(buildings)} buildings, {len(result.layout.roads)} roads"
        )
        return Settlement(
            id=settlement_id,
            name=name,
            kind=settlement_kind.value,
            population=population,
            buildings=buildings,
            layout=result.layout,
            districts=result.districts,
            economy=economy,
            generated_date=datetime.now(UTC).isoformat(),
            layout_result=result,
        )


def export_settlement_json(settlement: Settlement, indent: int | None = 2) -> str:
    return json.dumps(settlement.to_dict(), indent=indent)


def import_settlement_json(text: str) -> Settlement:
    """Parse a settlement from JSON produced by ``export_settlement_json``.

    Raises:
        ConfigurationError: If the text is not valid JSON or not a settlement.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid settlement JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError("Settlement JSON must be an object")
    return Settlement.from_dict(data)


def _roll(rng: RNG, low: int, high: int) -> int:
    """Uniform integer in [low, high), or ``low`` when the range is empty."""
    if high <= low:
        return low
    return rng.randrange(low, high)


# =============================================================================
# Serialization helpers
# =============================================================================


def _point_to_dict(point: Point) -> dict[str, float]:
    return {"x": point.x, "y": point.y}


def _point_from_dict(data: Mapping[str, Any]) -> Point:
    return Point(float(data["x"]), float(data["y"]))


def _layout_to_dict(layout: SettlementLayout) -> dict[str, Any]:
    return {
        "width": layout.width,
        "height": layout.height,
        "roads": [
            {"start": _point_to_dict(r.start), "end": _point_to_dict(r.end)}
            for r in layout.roads
        ],
        "water_features": [
            {
                "kind": feature.kind.value,
                "points": [_point_to_dict(p) for p in feature.points],
            }
            for feature in layout.water_features
        ],
    }


def _layout_from_dict(data: Mapping[str, Any]) -> SettlementLayout:
    return SettlementLayout(
        width=int(data["width"]),
        height=int(data["height"]),
        roads=tuple(
            Road(_point_from_dict(r["start"]), _point_from_dict(r["end"]))
            for r in data["roads"]
        ),
        water_features=tuple(
            WaterFeature(
                WaterKind(feature["kind"]),
                tuple(_point_from_dict(p) for p in feature["points"]),
            )
            for feature in data["water_features"]
        ),
    )


def _building_to_dict(building: Building) -> dict[str, Any]:
    return {
        "id": building.id,
        "category_id": building.category_id,
        "name": building.name,
        "owner": building.owner,
        "wares": [
            {
                "id": w.id,
                "name": w.name,
                "base_price": w.base_price,
                "current_price": w.current_price,
                "quantity": w.quantity,
                "quality": w.quality,
                "description": w.description,
            }
            for w in building.wares
        ],
        "position": list(building.position) if building.position is not None else None,
    }


def _building_from_dict(data: Mapping[str, Any]) -> Building:
    position = data.get("position")
    return Building(
        id=str(data["id"]),
        category_id=str(data["category_id"]),
        name=str(data.get("name", "")),
        owner=str(data.get("owner", "")),
        wares=[
            Ware(
                id=str(w["id"]),
                name=str(w["name"]),
                base_price=int(w["base_price"]),
                current_price=int(w["current_price"]),
                quantity=int(w["quantity"]),
                quality=str(w["quality"]),
                description=str(w.get("description", "")),
            )
            for w in data.get("wares", [])
        ],
        position=(int(position[0]), int(position[1])) if position is not None else None,
    )
