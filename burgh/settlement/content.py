"""Building content: names, owners and stocked wares.

Content generation runs before layout. It produces Building records with
their position unset; the layout pipeline fills positions in afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping

from burgh.environment.buildings import Building, Ware
from burgh.errors import ConfigurationError
from burgh.types import CategoryId
from burgh.util import rng
from burgh.util.rng import RNG

from .catalog import WARES_DATABASE, BuildingType, WareType
from .economy import round_price

_rng = rng.get("settlement.content")

# Quality tiers from worst to best; the index drives the price multiplier
QUALITIES = ("Poor", "Common", "Good", "Excellent", "Masterwork")


def choose_building_type(
    distribution: Mapping[CategoryId, float], rng: RNG = _rng
) -> CategoryId:
    """Pick a building type id with probability proportional to its weight.

    Raises:
        ConfigurationError: If the distribution is empty or has no weight.
    """
    type_ids = list(distribution)
    weights = [distribution[type_id] for type_id in type_ids]
    if not type_ids or sum(weights) <= 0:
        raise ConfigurationError("Building distribution has no positive weights")
    return rng.choices(type_ids, weights=weights)[0]


class BuildingContentGenerator:
    """Creates unplaced Building records from building type templates."""

    def __init__(
        self,
        wares: Mapping[str, WareType] = WARES_DATABASE,
        rng: RNG = _rng,
    ) -> None:
        """Initialize the content generator.

        Args:
            wares: Ware database used to price stocked goods.
            rng: Random source. Defaults to the shared content stream.
        """
        self.wares = wares
        self.rng = rng
        self._next_building_id = 0

    def generate_building(self, building_type: BuildingType) -> Building:
        """Create a building of the given type.

        The id is sequential per generator, name and owner are picked from
        the type's lists, and every possible ware is stocked with its own
        probability.
        """
        building_id = f"building_{self._next_building_id}"
        self._next_building_id += 1

        wares: list[Ware] = []
        for chance in building_type.possible_wares:
            if self.rng.random() < chance.probability:
                ware = self.generate_ware(chance.ware_id)
                if ware is not None:
                    wares.append(ware)

        return Building(
            id=building_id,
            category_id=building_type.id,
            name=self._pick(building_type.possible_names, building_type.name),
            owner=self._pick(building_type.possible_owners, ""),
            wares=wares,
        )

    def generate_ware(self, ware_id: str) -> Ware | None:
        """Roll quantity and quality for one ware.

        Returns:
            The ware, or None if ``ware_id`` is not in the ware database.
        """
        template = self.wares.get(ware_id)
        if template is None:
            return None

        quantity = self.rng.randint(1, 10)
        quality_index = self.rng.randrange(len(QUALITIES))
        quality_modifier = 0.8 + quality_index * 0.2

        return Ware(
            id=ware_id,
            name=template.name,
            base_price=template.base_price,
            current_price=round_price(template.base_price * quality_modifier),
            quantity=quantity,
            quality=QUALITIES[quality_index],
            description=template.description,
        )

    def _pick(self, options: tuple[str, ...], default: str) -> str:
        return self.rng.choice(options) if options else default
