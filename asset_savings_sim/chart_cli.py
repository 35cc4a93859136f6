"""CLI entry point for chart generation."""

import argparse
import sys
from pathlib import Path

from asset_savings_sim.charts import plot_holdings, plot_trajectory
from asset_savings_sim.cli import run_from_config, setup_logging
from asset_savings_sim.config import parse_args


def _add_chart_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="output directory (default: reports/charts)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="output filename suffix (e.g. 2020 → trajectory-2020.png)",
    )
    parser.add_argument(
        "--no-holdings", action="store_true",
        help="skip the asset holdings chart",
    )


def main():
    r, args = parse_args("Asset savings simulation chart generation", _add_chart_args)
    setup_logging(args.verbose)

    _, _, results = run_from_config(r)

    path = plot_trajectory(results, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    if not args.no_holdings:
        path = plot_holdings(results, args.output, name=args.name)
        print(f"  → {path}", file=sys.stderr)

    print("Done", file=sys.stderr)


if __name__ == "__main__":
    main()
