"""Settlement name generation from prefix and suffix tables."""

from __future__ import annotations

from burgh.util import rng
from burgh.util.rng import RNG

_rng = rng.get("settlement.names")

PREFIXES = (
    "Green", "Red", "Blue", "Black", "White", "Silver", "Gold", "Iron",
    "Stone", "River", "Lake", "Hill", "Mountain", "East", "West", "North",
    "South", "Old", "New", "High", "Low", "Royal", "Far", "Deep", "Bright",
    "Dark", "Fair", "Shadow", "Sun", "Moon", "Star", "Wolf", "Bear", "Deer",
    "Hawk", "Eagle", "Raven", "Golden", "Oak", "Pine", "Maple", "Winter",
    "Summer", "Spring", "Autumn", "Frost", "Wind", "Storm",
)

SUFFIXES = (
    "wood", "water", "ford", "bridge", "ton", "wick", "ham", "bury",
    "field", "vale", "dale", "haven", "gate", "cross", "watch", "port",
    "harbor", "keep", "fall", "spring", "grove", "ridge", "stone", "ville",
    "borough", "shire", "castle", "fort", "hold", "landing", "reach", "run",
    "crest", "peak", "hollow", "glen", "moor", "point", "shore", "bay",
    "hill", "cliff", "town", "view", "side", "rest", "pass", "mead",
)

# Kind-specific tables; kinds not listed here use the general tables
THEMED_NAME_PARTS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "village": (
        (
            "Green", "Little", "Oak", "Mill", "Apple", "West", "East", "North",
            "South", "River", "Stone", "Red", "White", "Blue", "New", "Old",
        ),
        (
            "field", "vale", "dale", "hill", "wood", "brook", "thorpe",
            "ton", "wick", "ham", "mead", "stead", "ford", "cross",
        ),
    ),
    "city": (
        (
            "High", "Royal", "Grand", "King's", "Queen's", "Great", "Capital",
            "Imperial", "Golden", "Silver", "Star", "Iron", "Crown", "Tower",
        ),
        (
            "haven", "port", "keep", "gate", "castle", "moor", "spire", "reach",
            "hold", "point", "throne", "shire", "court", "bridge", "watch",
        ),
    ),
}


class NameGenerator:
    """Builds names like "Stoneford" by joining a prefix and a suffix."""

    def __init__(self, rng: RNG = _rng) -> None:
        self.rng = rng

    def generate_name(self) -> str:
        return self._join(PREFIXES, SUFFIXES)

    def generate_name_options(self, count: int = 5) -> list[str]:
        """Several independent names to choose from."""
        return [self.generate_name() for _ in range(count)]

    def generate_themed_name(self, kind: str) -> str:
        """A name drawing on tables suited to the settlement kind."""
        prefixes, suffixes = THEMED_NAME_PARTS.get(kind, (PREFIXES, SUFFIXES))
        return self._join(prefixes, suffixes)

    def _join(self, prefixes: tuple[str, ...], suffixes: tuple[str, ...]) -> str:
        return self.rng.choice(prefixes) + self.rng.choice(suffixes)
