"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from datetime import date
from pathlib import Path
from typing import Callable

from asset_savings_sim.dates import DAY_NAMES, parse_day_of_week, parse_iso_date
from asset_savings_sim.params import (
    FREQUENCY_MONTHLY,
    FREQUENCY_WEEKLY,
    PRECISIONS,
    Expense,
    SimulationInputs,
)

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "prices": "data/prices.csv",
    "salary": 3000.0,
    "salary_day": 1,
    "salary_growth": 0.0,
    "expenses": "",
    "expense_inflation": 0.0,
    "start_date": "2020-01-01",
    "end_date": "",
    "precision": "monthly",
}


def _expense_table_to_str(item: dict) -> str:
    name = item.get("name")
    amount = item.get("amount")
    if not name or amount is None:
        raise ValueError(f"expense table needs name and amount: {item}")
    frequency = item.get("frequency", FREQUENCY_MONTHLY)
    if frequency == FREQUENCY_WEEKLY:
        when = item.get("day_of_week", 0)
    else:
        when = item.get("day", 1)
    return f"{name}:{amount}:{frequency}:{when}"


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Normalize expenses: TOML [[expenses]] tables / string list → CLI-compatible string
    if "expenses" in raw:
        v = raw["expenses"]
        if isinstance(v, list):
            try:
                parts = [
                    _expense_table_to_str(item) if isinstance(item, dict) else str(item)
                    for item in v
                ]
            except ValueError as e:
                print(f"Invalid input: {path}: {e}", file=sys.stderr)
                raise SystemExit(1)
            raw["expenses"] = ",".join(parts)
    # TOML native dates → ISO strings
    for key in ("start_date", "end_date"):
        if isinstance(raw.get(key), date):
            raw[key] = raw[key].isoformat()
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared simulation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="config file path (default: config.toml)")
    parser.add_argument("--prices", type=str, default=None, help=f"price CSV with Date,Price columns (default: {d['prices']})")
    parser.add_argument("--salary", type=float, default=None, help=f"base salary per month (default: {d['salary']:.0f})")
    parser.add_argument("--salary-day", type=int, default=None, help=f"day of month the salary is paid, 1-31 (default: {d['salary_day']})")
    parser.add_argument("--salary-growth", type=float, default=None, help=f"annual salary growth rate, e.g. 0.03 (default: {d['salary_growth']})")
    parser.add_argument("--expenses", type=str, default=None, help="recurring expenses, comma-separated name:amount:monthly:day or name:amount:weekly:dow (e.g. rent:1000:monthly:5,food:50:weekly:sun)")
    parser.add_argument("--expense-inflation", type=float, default=None, help=f"annual expense inflation rate (default: {d['expense_inflation']})")
    parser.add_argument("--start-date", type=str, default=None, help=f"first simulated day, YYYY-MM-DD (default: {d['start_date']})")
    parser.add_argument("--end-date", type=str, default=None, help="last simulated day, YYYY-MM-DD (default: last date in the price data)")
    parser.add_argument("--precision", type=str, default=None, choices=PRECISIONS, help=f"recording precision (default: {d['precision']})")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def parse_expenses(s: str) -> tuple[Expense, ...]:
    """Parse expenses string "name:amount:frequency:when,..." → ordered Expense tuple.

    `when` is the day of month for monthly expenses and 0-6 / sun..sat for
    weekly ones. Raises ValueError on malformed entries.
    """
    if not s or not s.strip():
        return ()
    result: list[Expense] = []
    for entry in s.split(","):
        entry = entry.strip()
        if not entry:
            continue
        parts = [p.strip() for p in entry.split(":")]
        if len(parts) != 4:
            raise ValueError(f"Malformed expense {entry!r} (expected name:amount:frequency:when)")
        name, amount_str, frequency, when = parts
        amount = float(amount_str)
        frequency = frequency.lower()
        if frequency == FREQUENCY_WEEKLY:
            dow = parse_day_of_week(when)
            if not 0 <= dow <= 6:
                raise ValueError(f"{name}: day of week must be 0-6 or one of {', '.join(DAY_NAMES)} (got {when!r})")
            result.append(Expense(name, amount, FREQUENCY_WEEKLY, day_of_week=dow))
        else:
            result.append(Expense(name, amount, frequency, day=int(when)))
    return tuple(result)


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def build_inputs(r: dict, last_price_date: date | None = None) -> SimulationInputs:
    """Build SimulationInputs from resolved config dict.

    An empty end_date falls back to `last_price_date`.
    """
    start_date = parse_iso_date(str(r["start_date"]))
    if r["end_date"]:
        end_date = parse_iso_date(str(r["end_date"]))
    elif last_price_date is not None:
        end_date = last_price_date
    else:
        raise ValueError("end_date is not set and the price data has no dates")
    return SimulationInputs(
        start_date=start_date,
        end_date=end_date,
        salary=float(r["salary"]),
        salary_day=int(r["salary_day"]),
        salary_growth_rate=float(r["salary_growth"]),
        expenses=parse_expenses(r["expenses"]),
        expense_inflation_rate=float(r["expense_inflation"]),
        precision=r["precision"],
    )


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, namespace); namespace carries extra CLI args
    added via add_args_fn.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    config = load_config(args.config)
    return resolve(args, config), args
