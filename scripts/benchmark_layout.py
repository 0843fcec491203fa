#!/usr/bin/env python3
"""Benchmark settlement layout generation for each settlement kind."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

from burgh.environment.buildings import Building
from burgh.environment.generators.pipeline import SettlementKind, generate_layout
from burgh.environment.layout import MapSettings
from burgh.settlement.catalog import DEFAULT_BUILDING_TYPES, DEFAULT_SETTLEMENT_TYPES
from burgh.settlement.content import BuildingContentGenerator, choose_building_type
from burgh.util.rng import RNGProvider


class LayoutBenchmark:
    """Times generate_layout at the largest building count of each kind."""

    def __init__(self, iterations: int) -> None:
        self.iterations = iterations
        self.settings = MapSettings()
        self.results: dict[str, dict[str, float]] = {}

    def _buildings(self, kind: SettlementKind, seed: int) -> list[Building]:
        settlement_type = DEFAULT_SETTLEMENT_TYPES[kind.value]
        content_rng = RNGProvider(seed).get("settlement.content")
        content = BuildingContentGenerator(rng=content_rng)
        buildings = []
        for _ in range(settlement_type.max_buildings):
            type_id = choose_building_type(
                settlement_type.building_distribution, rng=content_rng
            )
            buildings.append(content.generate_building(DEFAULT_BUILDING_TYPES[type_id]))
        return buildings

    def _run_case(self, kind: SettlementKind) -> tuple[float, int]:
        """Return average layout time in milliseconds and total fallbacks."""
        elapsed_total = 0.0
        fallbacks = 0

        for i in range(self.iterations):
            buildings = self._buildings(kind, i)

            start = time.perf_counter()
            result = generate_layout(buildings, kind, self.settings, seed=i)
            elapsed_total += time.perf_counter() - start
            fallbacks += result.report.fallback_count

        return (elapsed_total / self.iterations) * 1000.0, fallbacks

    def run(self) -> None:
        """Run all configured settlement kinds."""
        print("Settlement Layout Benchmark")
        print("=" * 42)
        print(f"Iterations per kind: {self.iterations}")
        print(f"Map size: {self.settings.width}x{self.settings.height}")
        print()
        print(f"{'Kind':>10} {'Layout (ms)':>14} {'Fallbacks':>12}")
        print("-" * 42)

        for kind in SettlementKind:
            layout_ms, fallbacks = self._run_case(kind)
            self.results[kind.value] = {
                "layout_ms": layout_ms,
                "fallbacks": fallbacks,
            }
            print(f"{kind.value:>10} {layout_ms:14.2f} {fallbacks:12d}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark settlement layout")
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of runs per settlement kind (default: 5)",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    args = parser.parse_args(argv)

    benchmark = LayoutBenchmark(iterations=args.iterations)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)


if __name__ == "__main__":
    main()
