"""Tests for settlement name generation."""

from __future__ import annotations

from burgh.settlement.names import PREFIXES, SUFFIXES, THEMED_NAME_PARTS, NameGenerator
from burgh.util.rng import RNGProvider


def names(seed: int = 42) -> NameGenerator:
    return NameGenerator(rng=RNGProvider(seed).get("settlement.names"))


def split_name(name: str, prefixes: tuple[str, ...], suffixes: tuple[str, ...]) -> bool:
    return any(
        name == prefix + suffix for prefix in prefixes for suffix in suffixes
    )


class TestNameGenerator:
    def test_general_names(self) -> None:
        generator = names()
        for _ in range(20):
            assert split_name(generator.generate_name(), PREFIXES, SUFFIXES)

    def test_themed_names_use_kind_tables(self) -> None:
        generator = names()
        for kind in ("village", "city"):
            prefixes, suffixes = THEMED_NAME_PARTS[kind]
            for _ in range(20):
                assert split_name(generator.generate_themed_name(kind), prefixes, suffixes)

    def test_unthemed_kind_uses_general_tables(self) -> None:
        name = names().generate_themed_name("town")
        assert split_name(name, PREFIXES, SUFFIXES)

    def test_name_options(self) -> None:
        options = names().generate_name_options(4)
        assert len(options) == 4

    def test_same_seed_same_names(self) -> None:
        assert names(3).generate_name_options() == names(3).generate_name_options()
