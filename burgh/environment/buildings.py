"""Building records and the declarative building category table.

Placement behaviour is driven entirely by the category table: each category
names a placement role and the buffer radius it reserves around itself.
Adding a new kind of building means adding a row here, not a new branch in
the placement engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from burgh import config
from burgh.types import CategoryId, GridPos

# Colors are RGB tuples (0-255)
Color: TypeAlias = tuple[int, int, int]


class BuildingRole(Enum):
    """Placement strategy a building category uses."""

    IMPORTANT = "important"  # civic/commercial anchors at intersections
    COMMERCIAL = "commercial"  # shops along main roads
    RESIDENTIAL = "residential"  # housing clustered in districts
    FARM = "farm"  # agriculture on the outskirts


@dataclass(frozen=True)
class BuildingCategory:
    """Placement and display configuration for one building category.

    Attributes:
        id: Category identifier, matching ``Building.category_id``.
        role: Which placement strategy the category uses.
        buffer: Radius in cells reserved around a placed building.
        color: Marker color used by the map preview.
        marker_size: Marker edge length in cells used by the map preview.
    """

    id: CategoryId
    role: BuildingRole
    buffer: int
    color: Color = (119, 119, 119)
    marker_size: int = 14


def _category(
    id: CategoryId,
    role: BuildingRole,
    buffer: int,
    color: Color,
    marker_size: int,
) -> tuple[CategoryId, BuildingCategory]:
    return id, BuildingCategory(id, role, buffer, color, marker_size)


DEFAULT_BUILDING_CATEGORIES: Mapping[CategoryId, BuildingCategory] = dict(
    [
        # Important anchors
        _category("townHall", BuildingRole.IMPORTANT, 10, (163, 145, 113), 22),
        _category("cityHall", BuildingRole.IMPORTANT, 10, (163, 145, 113), 22),
        _category("temple", BuildingRole.IMPORTANT, 10, (204, 197, 185), 20),
        _category("market", BuildingRole.IMPORTANT, 10, (154, 139, 79), 20),
        _category("tavern", BuildingRole.IMPORTANT, 10, (189, 159, 122), 18),
        # Shops
        _category("blacksmith", BuildingRole.COMMERCIAL, 10, (122, 57, 35), 18),
        _category("generalStore", BuildingRole.COMMERCIAL, 10, (126, 158, 96), 18),
        _category("bakery", BuildingRole.COMMERCIAL, 10, (214, 176, 136), 14),
        _category("butcher", BuildingRole.COMMERCIAL, 10, (193, 122, 111), 14),
        _category("tailor", BuildingRole.COMMERCIAL, 10, (126, 181, 200), 14),
        _category("jeweler", BuildingRole.COMMERCIAL, 10, (212, 175, 55), 14),
        _category("alchemist", BuildingRole.COMMERCIAL, 10, (155, 126, 181), 14),
        _category("library", BuildingRole.COMMERCIAL, 10, (182, 142, 114), 14),
        # Housing and agriculture
        _category("residence", BuildingRole.RESIDENTIAL, 8, (230, 200, 143), 14),
        _category("farm", BuildingRole.FARM, 15, (171, 200, 118), 16),
    ]
)


def category_for(
    category_id: CategoryId,
    categories: Mapping[CategoryId, BuildingCategory] = DEFAULT_BUILDING_CATEGORIES,
) -> BuildingCategory:
    """Look up a category, treating unknown ids as residential-like."""
    category = categories.get(category_id)
    if category is None:
        return BuildingCategory(
            id=category_id,
            role=BuildingRole.RESIDENTIAL,
            buffer=config.DEFAULT_BUILDING_BUFFER,
        )
    return category


@dataclass
class Ware:
    """A good offered for sale in a building."""

    id: str
    name: str
    base_price: int
    current_price: int
    quantity: int
    quality: str
    description: str = ""


@dataclass
class Building:
    """A building in the settlement.

    Buildings are created by the content generator with ``position`` unset.
    The placement engine assigns the position exactly once and never touches
    any other field.

    Attributes:
        id: Unique identifier within the settlement.
        category_id: Key into the building category table.
        name: Display name (e.g., "The Prancing Pony").
        owner: Owner description.
        wares: Goods sold here.
        position: Grid cell of the building, or None until placed.
    """

    id: str
    category_id: CategoryId
    name: str = ""
    owner: str = ""
    wares: list[Ware] = field(default_factory=list)
    position: GridPos | None = None

    @property
    def is_placed(self) -> bool:
        return self.position is not None
