"""Command line entry point: generate a settlement and print a summary."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import config
from .environment.layout import MapSettings
from .errors import ConfigurationError
from .render.preview import save_preview
from .settlement.generator import SettlementGenerator, export_settlement_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="burgh", description="Generate a procedural settlement"
    )
    parser.add_argument(
        "--kind",
        choices=("village", "town", "city"),
        default="town",
        help="Settlement kind (default: town)",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=config.RANDOM_SEED,
        help=f"Master random seed (default: {config.RANDOM_SEED})",
    )
    parser.add_argument("--name", type=str, help="Settlement name (default: random)")
    parser.add_argument("--width", type=int, default=config.DEFAULT_MAP_WIDTH)
    parser.add_argument("--height", type=int, default=config.DEFAULT_MAP_HEIGHT)
    parser.add_argument(
        "--road-density", type=float, default=config.DEFAULT_ROAD_DENSITY
    )
    parser.add_argument(
        "--water-probability",
        type=float,
        default=config.DEFAULT_WATER_FEATURE_PROBABILITY,
    )
    parser.add_argument("--json", type=Path, help="Write the settlement as JSON")
    parser.add_argument("--png", type=Path, help="Write a map preview image")
    parser.add_argument(
        "--verbose", action="store_true", help="Log generation details"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = MapSettings(
            width=args.width,
            height=args.height,
            road_density=args.road_density,
            water_feature_probability=args.water_probability,
        )
        generator = SettlementGenerator(settings=settings, seed=args.seed)
        settlement = generator.generate(args.kind, name=args.name)
    except ConfigurationError as e:
        parser.error(str(e))

    report = settlement.layout_result.report if settlement.layout_result else None
    print(f"{settlement.name} ({settlement.kind})")
    print(f"  Population:     {settlement.population}")
    print(f"  Buildings:      {len(settlement.buildings)}")
    print(f"  Roads:          {len(settlement.layout.roads)}")
    print(f"  Water features: {len(settlement.layout.water_features)}")
    print(f"  Districts:      {len(settlement.districts)}")
    if report is not None:
        print(f"  Fallback:       {report.fallback_count}")
    print(f"  Prosperity:     {settlement.economy.prosperity:.2f}")

    if args.json:
        args.json.write_text(export_settlement_json(settlement))
        print(f"\nSaved settlement to {args.json}")
    if args.png:
        save_preview(settlement, args.png)
        print(f"Saved map preview to {args.png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
