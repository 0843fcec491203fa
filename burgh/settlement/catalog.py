"""Declarative settlement, building, ware and economy tables.

The tables here describe what a settlement of each kind contains. Adding a
new building type means adding a BuildingType row (and, for placement, a
BuildingCategory row in ``burgh.environment.buildings``), not new code.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from burgh.errors import ConfigurationError
from burgh.types import CategoryId


@dataclass(frozen=True)
class SettlementType:
    """Size ranges and building mix for one settlement kind.

    Attributes:
        id: Settlement kind ("village", "town", "city").
        name: Display name.
        min_population: Inclusive lower bound of the population roll.
        max_population: Exclusive upper bound of the population roll.
        min_buildings: Inclusive lower bound of the building count roll.
        max_buildings: Exclusive upper bound of the building count roll.
        building_distribution: Relative weight of each building type.
    """

    id: str
    name: str
    min_population: int
    max_population: int
    min_buildings: int
    max_buildings: int
    building_distribution: Mapping[CategoryId, float]


@dataclass(frozen=True)
class WareChance:
    """A ware a building type may stock, and how likely it is to."""

    ware_id: str
    probability: float


@dataclass(frozen=True)
class BuildingType:
    """Content template for one kind of building."""

    id: CategoryId
    name: str
    description: str
    possible_names: tuple[str, ...]
    possible_owners: tuple[str, ...]
    possible_wares: tuple[WareChance, ...] = ()


@dataclass(frozen=True)
class WareType:
    id: str
    name: str
    base_price: int
    description: str


@dataclass(frozen=True)
class EconomyFactor:
    """Additive price modifiers applied on top of prosperity.

    Attributes:
        id: Factor identifier.
        name: Display name.
        description: What the factor represents.
        wares_modifiers: Amount added to the price modifier of each ware.
    """

    id: str
    name: str
    description: str
    wares_modifiers: Mapping[str, float] = field(default_factory=dict)


# =============================================================================
# SETTLEMENT TYPES
# =============================================================================

DEFAULT_SETTLEMENT_TYPES: Mapping[str, SettlementType] = {
    "village": SettlementType(
        id="village",
        name="Village",
        min_population=50,
        max_population=500,
        min_buildings=5,
        max_buildings=20,
        building_distribution={
            "residence": 60,
            "tavern": 10,
            "blacksmith": 10,
            "generalStore": 10,
            "farm": 10,
        },
    ),
    "town": SettlementType(
        id="town",
        name="Town",
        min_population=500,
        max_population=5000,
        min_buildings=20,
        max_buildings=100,
        building_distribution={
            "residence": 50,
            "tavern": 10,
            "blacksmith": 5,
            "generalStore": 5,
            "tailor": 5,
            "temple": 5,
            "townHall": 5,
            "farm": 5,
            "bakery": 5,
            "butcher": 5,
        },
    ),
    "city": SettlementType(
        id="city",
        name="City",
        min_population=5000,
        max_population=50000,
        min_buildings=100,
        max_buildings=500,
        building_distribution={
            "residence": 40,
            "tavern": 5,
            "blacksmith": 5,
            "generalStore": 5,
            "tailor": 5,
            "temple": 5,
            "cityHall": 5,
            "market": 5,
            "bakery": 5,
            "butcher": 5,
            "jeweler": 5,
            "library": 5,
            "alchemist": 5,
        },
    ),
}

# =============================================================================
# BUILDING TYPES
# =============================================================================


def _wares(*pairs: tuple[str, float]) -> tuple[WareChance, ...]:
    return tuple(WareChance(ware_id, probability) for ware_id, probability in pairs)


_BUILDING_TYPES = [
    BuildingType(
        id="residence",
        name="Residence",
        description="A residential building where people live",
        possible_names=("Small House", "Cottage", "Apartment", "Villa", "Manor"),
        possible_owners=(
            "Local Family",
            "Retired Adventurer",
            "Merchant",
            "Craftsperson",
        ),
    ),
    BuildingType(
        id="tavern",
        name="Tavern",
        description="A place to drink, eat, and hear the latest rumors",
        possible_names=(
            "The Prancing Pony",
            "The Green Dragon",
            "The Rusty Anchor",
            "The Golden Goose",
            "The Silver Crown",
            "The Dancing Bear",
        ),
        possible_owners=(
            "Jolly Barkeep",
            "Retired Soldier",
            "Local Family",
            "Gruff Veteran",
            "Cheerful Hostess",
        ),
        possible_wares=_wares(("ale", 0.9), ("wine", 0.7), ("meal", 0.8), ("spirits", 0.5)),
    ),
    BuildingType(
        id="blacksmith",
        name="Blacksmith",
        description="A forge for creating and repairing metal items",
        possible_names=(
            "The Anvil",
            "Red Forge",
            "Hammer & Tongs",
            "Steel Works",
            "The Blazing Forge",
            "Iron Heart",
        ),
        possible_owners=(
            "Burly Smith",
            "Master Craftsman",
            "Guild Member",
            "Dwarven Smith",
            "Family Business",
        ),
        possible_wares=_wares(
            ("sword", 0.7), ("armor", 0.6), ("tools", 0.9), ("horseshoe", 0.8)
        ),
    ),
    BuildingType(
        id="generalStore",
        name="General Store",
        description="A shop selling various common goods",
        possible_names=(
            "Market Goods",
            "Village Supplies",
            "Trading Post",
            "General Wares",
            "The Merchant's Stall",
            "Traveler's Necessities",
        ),
        possible_owners=(
            "Shopkeeper",
            "Trading Family",
            "Retired Explorer",
            "Merchant Guild Member",
            "Foreign Trader",
        ),
        possible_wares=_wares(
            ("rope", 0.9),
            ("lantern", 0.8),
            ("backpack", 0.7),
            ("tinderbox", 0.6),
            ("blanket", 0.7),
        ),
    ),
    BuildingType(
        id="farm",
        name="Farm",
        description="Agricultural land where crops are grown or animals raised",
        possible_names=(
            "Green Pastures",
            "Fertile Fields",
            "Old Mill Farm",
            "Hillside Ranch",
            "River Valley Crops",
        ),
        possible_owners=(
            "Farmer Family",
            "Land Baron",
            "Commune Workers",
            "Elderly Couple",
            "Homesteader",
        ),
        possible_wares=_wares(
            ("grain", 0.8), ("vegetables", 0.7), ("milk", 0.6), ("eggs", 0.6)
        ),
    ),
    BuildingType(
        id="temple",
        name="Temple",
        description="A place of worship and spiritual guidance",
        possible_names=(
            "Temple of Light",
            "Sacred Grove",
            "Divine Sanctuary",
            "House of the Eternal",
            "Hallowed Halls",
        ),
        possible_owners=(
            "High Priest",
            "Cleric",
            "Religious Order",
            "Hermit Sage",
            "Devout Family",
        ),
        possible_wares=_wares(
            ("holySymbol", 0.8), ("incense", 0.7), ("healingPotion", 0.5)
        ),
    ),
    BuildingType(
        id="bakery",
        name="Bakery",
        description="A shop that makes and sells bread and pastries",
        possible_names=(
            "Golden Crust",
            "Sweet Rolls",
            "The Flour Mill",
            "Morning Bread",
            "Hearth & Home",
        ),
        possible_owners=(
            "Baker Family",
            "Master Baker",
            "Former Chef",
            "Elderly Woman",
            "Guild Apprentice",
        ),
        possible_wares=_wares(("bread", 0.9), ("pastry", 0.7), ("cake", 0.5)),
    ),
    BuildingType(
        id="butcher",
        name="Butcher",
        description="A shop that prepares and sells meat",
        possible_names=(
            "Prime Cuts",
            "The Cleaver",
            "Fresh Meats",
            "Hunter's Bounty",
            "The Smoking Rack",
        ),
        possible_owners=(
            "Butcher Family",
            "Gruff Man",
            "Hunter",
            "Former Soldier",
            "Guild Member",
        ),
        possible_wares=_wares(
            ("beef", 0.8), ("pork", 0.7), ("poultry", 0.7), ("sausage", 0.6)
        ),
    ),
    BuildingType(
        id="tailor",
        name="Tailor",
        description="A workshop that sews and mends clothing",
        possible_names=(
            "The Golden Thread",
            "Needle & Thimble",
            "Fine Fabrics",
            "The Silk Loom",
            "Stitch in Time",
        ),
        possible_owners=(
            "Master Tailor",
            "Seamstress",
            "Weaver Family",
            "Guild Apprentice",
            "Foreign Clothier",
        ),
        possible_wares=_wares(("clothing", 0.9), ("cloak", 0.7), ("silk", 0.3)),
    ),
    BuildingType(
        id="townHall",
        name="Town Hall",
        description="Seat of the town council and local records",
        possible_names=("Town Hall", "Council House", "The Moot Hall", "Guildhall"),
        possible_owners=("Mayor", "Town Council", "Reeve", "Elected Elders"),
    ),
    BuildingType(
        id="cityHall",
        name="City Hall",
        description="Seat of city government and the magistrates' courts",
        possible_names=("City Hall", "The Magistracy", "Hall of Records", "The Senate"),
        possible_owners=("Lord Mayor", "City Council", "High Magistrate", "Governor"),
    ),
    BuildingType(
        id="market",
        name="Market",
        description="An open square of stalls where traders gather",
        possible_names=(
            "Market Square",
            "The Grand Bazaar",
            "Traders' Row",
            "The Corn Exchange",
            "Merchants' Plaza",
        ),
        possible_owners=(
            "Market Warden",
            "Merchant Guild",
            "City Council",
            "Trading Company",
        ),
        possible_wares=_wares(
            ("fruit", 0.8),
            ("vegetables", 0.8),
            ("spices", 0.5),
            ("exotic", 0.3),
        ),
    ),
    BuildingType(
        id="jeweler",
        name="Jeweler",
        description="A shop that cuts gems and crafts fine jewelry",
        possible_names=(
            "The Gilded Gem",
            "Sparkle & Shine",
            "The Silver Setting",
            "Crown Jewels",
        ),
        possible_owners=(
            "Master Jeweler",
            "Gnomish Gemcutter",
            "Wealthy Merchant",
            "Noble Patron",
        ),
        possible_wares=_wares(("jewelry", 0.9), ("gemstone", 0.6), ("silk", 0.2)),
    ),
    BuildingType(
        id="library",
        name="Library",
        description="A hall of books, maps and learned scribes",
        possible_names=(
            "The Great Library",
            "Hall of Scrolls",
            "The Quiet Stacks",
            "House of Letters",
        ),
        possible_owners=(
            "Head Librarian",
            "Scholarly Order",
            "Retired Wizard",
            "City Archive",
        ),
        possible_wares=_wares(("book", 0.9), ("map", 0.6), ("scroll", 0.5)),
    ),
    BuildingType(
        id="alchemist",
        name="Alchemist",
        description="A workshop brewing potions and tinctures",
        possible_names=(
            "The Bubbling Cauldron",
            "Elixirs & Essences",
            "The Green Phial",
            "Mortar & Pestle",
        ),
        possible_owners=(
            "Eccentric Alchemist",
            "Herbalist",
            "Hedge Witch",
            "Guild Apothecary",
        ),
        possible_wares=_wares(
            ("healingPotion", 0.8), ("antidote", 0.6), ("herbs", 0.7)
        ),
    ),
]

DEFAULT_BUILDING_TYPES: Mapping[CategoryId, BuildingType] = {
    building_type.id: building_type for building_type in _BUILDING_TYPES
}

# =============================================================================
# WARES
# =============================================================================

_WARE_TYPES = [
    # Food and drink
    WareType("ale", "Ale", 4, "A mug of local brew"),
    WareType("wine", "Wine", 10, "A bottle of wine"),
    WareType("meal", "Hot Meal", 5, "A hot cooked meal"),
    WareType("spirits", "Spirits", 15, "A bottle of strong spirits"),
    # Smithing
    WareType("sword", "Sword", 50, "A metal sword"),
    WareType("armor", "Armor", 100, "Protective gear"),
    WareType("tools", "Tools", 25, "Crafting tools"),
    WareType("horseshoe", "Horseshoes", 8, "Set of iron horseshoes"),
    # General goods
    WareType("rope", "Rope (50ft)", 1, "Sturdy hemp rope"),
    WareType("lantern", "Lantern", 5, "A hooded lantern"),
    WareType("backpack", "Backpack", 2, "A leather backpack"),
    WareType("tinderbox", "Tinderbox", 1, "Fire starting kit"),
    WareType("blanket", "Woolen Blanket", 3, "Warm woolen blanket"),
    # Farm produce
    WareType("grain", "Grain", 1, "Sack of wheat or barley"),
    WareType("vegetables", "Vegetables", 2, "Fresh seasonal vegetables"),
    WareType("fruit", "Fruit", 2, "Basket of orchard fruit"),
    WareType("milk", "Milk", 1, "Fresh milk"),
    WareType("eggs", "Eggs", 1, "Dozen fresh eggs"),
    # Temple and alchemy
    WareType("holySymbol", "Holy Symbol", 15, "Religious icon or symbol"),
    WareType("incense", "Incense", 5, "Fragrant ceremonial incense"),
    WareType("healingPotion", "Healing Potion", 50, "Medicinal tonic or potion"),
    WareType("antidote", "Antidote", 30, "Vial that cures common poisons"),
    WareType("herbs", "Herbs", 3, "Bundle of dried medicinal herbs"),
    # Bakery and butcher
    WareType("bread", "Bread", 1, "Fresh baked loaf"),
    WareType("pastry", "Pastry", 3, "Sweet or savory pastry"),
    WareType("cake", "Cake", 8, "Decorated cake for special occasions"),
    WareType("beef", "Beef", 5, "Cut of beef"),
    WareType("pork", "Pork", 4, "Cut of pork"),
    WareType("poultry", "Poultry", 3, "Chicken or other fowl"),
    WareType("sausage", "Sausage", 3, "Seasoned meat sausage"),
    # Clothing
    WareType("clothing", "Clothing", 6, "Everyday tunic and breeches"),
    WareType("cloak", "Cloak", 12, "Hooded traveling cloak"),
    # Learning
    WareType("book", "Book", 25, "Bound volume on a learned subject"),
    WareType("map", "Map", 15, "Hand-drawn regional map"),
    WareType("scroll", "Scroll", 10, "Sealed scroll of notes or verse"),
    # Luxury and trade
    WareType("exotic", "Exotic Goods", 50, "Rare items from distant lands"),
    WareType("spices", "Spices", 25, "Rare and expensive spices"),
    WareType("silk", "Silk", 40, "Fine silk fabrics"),
    WareType("jewelry", "Jewelry", 75, "Decorative precious metal jewelry"),
    WareType("gemstone", "Gemstone", 60, "Cut and polished gemstone"),
]

WARES_DATABASE: Mapping[str, WareType] = {ware.id: ware for ware in _WARE_TYPES}

# =============================================================================
# ECONOMY FACTORS
# =============================================================================

DEFAULT_ECONOMY_FACTORS: tuple[EconomyFactor, ...] = (
    EconomyFactor(
        id="prosperity",
        name="Prosperity",
        description="The general economic wellbeing of the settlement",
        wares_modifiers={
            "ale": 0.2,
            "wine": 0.3,
            "meal": 0.1,
            "sword": 0.5,
            "armor": 0.6,
            "tools": 0.2,
            "rope": 0.1,
            "lantern": 0.2,
            "backpack": 0.3,
            "bread": 0.1,
            "pastry": 0.3,
            "beef": 0.4,
            "grain": 0.1,
            "vegetables": 0.1,
            "holySymbol": 0.5,
        },
    ),
    EconomyFactor(
        id="tradeRoute",
        name="Trade Route",
        description="Whether the settlement is on a major trade route",
        wares_modifiers={
            "ale": -0.1,
            "wine": -0.2,
            "meal": -0.05,
            "sword": -0.2,
            "armor": -0.3,
            "tools": -0.1,
            "rope": -0.05,
            "lantern": -0.1,
            "backpack": -0.15,
            "exotic": -0.4,
            "spices": -0.3,
            "silk": -0.3,
            "jewelry": -0.2,
        },
    ),
    EconomyFactor(
        id="resourceScarcity",
        name="Resource Scarcity",
        description="The availability of natural resources in the region",
        wares_modifiers={
            "wood": 0.3,
            "stone": 0.3,
            "metal": 0.4,
            "tools": 0.2,
            "furniture": 0.2,
            "weapons": 0.3,
            "armor": 0.3,
        },
    ),
    EconomyFactor(
        id="seasonalHarvest",
        name="Seasonal Harvest",
        description="The impact of recent harvests on food prices",
        wares_modifiers={
            "grain": -0.3,
            "vegetables": -0.3,
            "fruit": -0.3,
            "bread": -0.2,
            "pastry": -0.2,
            "meal": -0.1,
            "ale": -0.1,
        },
    ),
)


def get_settlement_type(
    kind: str,
    settlement_types: Mapping[str, SettlementType] = DEFAULT_SETTLEMENT_TYPES,
) -> SettlementType:
    """Look up a settlement type by kind.

    Raises:
        ConfigurationError: If the kind is not in the table.
    """
    settlement_type = settlement_types.get(str(kind).lower())
    if settlement_type is None:
        known = ", ".join(settlement_types)
        raise ConfigurationError(
            f"Unknown settlement type {kind!r} (expected one of: {known})"
        )
    return settlement_type


def get_building_type(
    type_id: CategoryId,
    building_types: Mapping[CategoryId, BuildingType] = DEFAULT_BUILDING_TYPES,
) -> BuildingType:
    """Look up a building type by id.

    Raises:
        ConfigurationError: If the type is not in the table.
    """
    building_type = building_types.get(type_id)
    if building_type is None:
        raise ConfigurationError(f"Unknown building type {type_id!r}")
    return building_type
