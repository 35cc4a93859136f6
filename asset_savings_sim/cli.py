"""CLI entry point for a single simulation (3 scenario comparison)."""

import argparse
import json
import logging
import sys
from pathlib import Path

from asset_savings_sim.config import build_inputs, parse_args
from asset_savings_sim.dates import day_count
from asset_savings_sim.params import SimulationInputs
from asset_savings_sim.prices import PriceOracle, load_prices, read_price_rows
from asset_savings_sim.simulation import SimulationResults, run_simulation, validate_inputs


LOG_ROWS = 24  # sampled rows in the trajectory log


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_from_config(r: dict) -> tuple[SimulationInputs, PriceOracle, SimulationResults]:
    """Load prices, build and validate inputs, run. Exits with status 1 on bad input."""
    try:
        oracle = load_prices(read_price_rows(r["prices"]))
    except FileNotFoundError as e:
        print(e, file=sys.stderr)
        raise SystemExit(1)

    price_range = oracle.date_range()
    try:
        inputs = build_inputs(r, last_price_date=price_range[1] if price_range else None)
    except ValueError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        raise SystemExit(1)

    errors = validate_inputs(inputs)
    if errors:
        for err in errors:
            print(f"Invalid input: {err}", file=sys.stderr)
        raise SystemExit(1)

    days = day_count(inputs.start_date, inputs.end_date)
    print(f"Simulating {days:,} days...", file=sys.stderr)
    return inputs, oracle, run_simulation(inputs, oracle)


def _print_header(inputs: SimulationInputs, oracle: PriceOracle):
    print("=" * 80)
    print(f"Asset savings simulation ({inputs.start_date.isoformat()} - {inputs.end_date.isoformat()})")
    price_range = oracle.date_range()
    if price_range:
        print(f"  Prices: {len(oracle):,} days ({price_range[0].isoformat()} - {price_range[1].isoformat()})")
    else:
        print(f"  Prices: none (fallback {oracle.fallback_price:,.2f})")
    growth = f" (+{inputs.salary_growth_rate * 100:.1f}%/yr)" if inputs.salary_growth_rate else ""
    print(f"  Salary: {inputs.salary:,.2f} on day {inputs.salary_day}{growth}")
    if inputs.expenses:
        parts = []
        for e in inputs.expenses:
            when = f"day {e.day}" if e.day is not None else f"dow {e.day_of_week}"
            parts.append(f"{e.name} {e.amount:,.2f} {e.frequency} ({when})")
        print(f"  Expenses: {', '.join(parts)}")
        if inputs.expense_inflation_rate:
            print(f"  Expense inflation: {inputs.expense_inflation_rate * 100:.1f}%/yr")
    else:
        print("  Expenses: none")
    print("=" * 80)
    print()


def _print_row(label: str, values: list[float], fmt: str = "{:>18,.2f}"):
    print(f"{label:<24} " + " ".join(fmt.format(v) for v in values))


def _print_balance_table(results: SimulationResults):
    print("[Final balances]")
    print("-" * 84)
    print(f"{'':<24} {'Currency only':>18} {'Accumulate':>18} {'Liquidate':>18}")
    print("-" * 84)
    _print_row("Balance", [
        results.final_currency_balance,
        results.final_accumulate_balance,
        results.final_liquidate_balance,
    ])
    _print_row("Asset units", [0.0, results.final_accumulate_units, results.final_liquidate_units],
               fmt="{:>18.8f}")
    _print_row("Cash", [
        results.final_currency_balance,
        results.final_accumulate_cash,
        results.final_liquidate_cash,
    ])
    _print_row("Gain vs currency (%)", [
        0.0,
        results.accumulate_gain_percentage,
        results.liquidate_gain_percentage,
    ], fmt="{:>17.2f}%")
    print("-" * 84)


def _print_totals(results: SimulationResults):
    print("\n[Totals]")
    print(f"  Salary received: {results.total_salary_received:>18,.2f}  ({results.total_salary_received_units:.8f} units)")
    print(f"  Expenses paid:   {results.total_expenses_paid:>18,.2f}  ({results.total_expenses_paid_units:.8f} units)")
    print(f"  Days simulated:  {results.days_simulated:>18,}")
    if results.fallback_price_days:
        print(f"  ⚠ {results.fallback_price_days:,} days priced at the fallback")


def _print_log(results: SimulationResults):
    points = results.data_points
    step = max(1, len(points) // LOG_ROWS)
    print(f"\n[Sampled trajectory (every {step} recorded points)]")
    print("-" * 100)
    print(f"{'Date':<12} {'Price':>12} {'Currency':>16} {'Accumulate':>16} {'Liquidate':>16} {'Liq. units':>14}")
    print("-" * 100)
    for i, p in enumerate(points):
        if i % step == 0 or i == len(points) - 1:
            print(
                f"{p.date.isoformat():<12} "
                f"{p.price:>12,.2f} "
                f"{p.currency_balance:>16,.2f} "
                f"{p.accumulate_balance:>16,.2f} "
                f"{p.liquidate_balance:>16,.2f} "
                f"{p.liquidate_units:>14.6f}"
            )
    print("-" * 100)


def _add_cli_args(parser: argparse.ArgumentParser):
    parser.add_argument("--json", type=Path, default=None, help="write full results as JSON to this path")


def main():
    """Execute main simulation (3 scenario comparison)"""
    r, args = parse_args("Asset-denominated savings simulation", _add_cli_args)
    setup_logging(args.verbose)

    inputs, oracle, results = run_from_config(r)

    _print_header(inputs, oracle)
    _print_balance_table(results)
    _print_totals(results)
    _print_log(results)

    if args.json:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        with open(args.json, "w", encoding="utf-8") as f:
            json.dump(results.to_dict(), f, indent=2)
        print(f"  → {args.json}", file=sys.stderr)


if __name__ == "__main__":
    main()
