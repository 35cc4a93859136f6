"""Historical daily asset price lookup with look-back and static fallback."""

import csv
import logging
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from asset_savings_sim.dates import parse_price_date

logger = logging.getLogger(__name__)

FALLBACK_PRICE = 42250.0  # used when no price exists within the look-back window
LOOKBACK_DAYS = 7  # weekends / holidays / gaps in the source table


@dataclass(frozen=True)
class PriceQuote:
    """Result of a price lookup.

    source_date is the dated entry the price came from, None on fallback.
    """

    price: float
    source_date: date | None

    @property
    def fallback(self) -> bool:
        return self.source_date is None


@dataclass(frozen=True)
class PriceOracle:
    """Immutable date → price series.

    Safe to share between simulation runs: nothing mutates it after
    construction.
    """

    prices: Mapping[date, float] = field(default_factory=dict, hash=False)
    accepted_rows: int = 0
    skipped_rows: int = 0
    fallback_price: float = FALLBACK_PRICE

    def __post_init__(self):
        if not self.fallback_price > 0:
            raise ValueError(f"fallback_price must be positive: {self.fallback_price}")
        object.__setattr__(self, "prices", MappingProxyType(dict(self.prices)))

    def __len__(self) -> int:
        return len(self.prices)

    def __contains__(self, day: date) -> bool:
        return day in self.prices

    def quote(self, day: date) -> PriceQuote:
        """Exact date, else up to LOOKBACK_DAYS earlier, else the fallback price."""
        price = self.prices.get(day)
        if price is not None:
            return PriceQuote(price, day)
        for offset in range(1, LOOKBACK_DAYS + 1):
            prev = day - timedelta(days=offset)
            price = self.prices.get(prev)
            if price is not None:
                return PriceQuote(price, prev)
        return PriceQuote(self.fallback_price, None)

    def price_on_or_before(self, day: date) -> float:
        """Total lookup: never raises, always returns a positive price."""
        q = self.quote(day)
        if q.fallback:
            logger.warning("No price found for %s, using fallback %.2f", day.isoformat(), q.price)
        return q.price

    def date_range(self) -> tuple[date, date] | None:
        """Earliest and latest dated price, or None when the series is empty."""
        if not self.prices:
            return None
        return min(self.prices), max(self.prices)


def price_on_or_before(oracle: PriceOracle, day: date) -> float:
    return oracle.price_on_or_before(day)


def _parse_price(raw: str) -> float | None:
    try:
        price = float(raw.replace(",", "").strip())
    except ValueError:
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def load_prices(
    rows: Iterable[Mapping[str, str]],
    fallback_price: float = FALLBACK_PRICE,
) -> PriceOracle:
    """Build a PriceOracle from parsed table rows with "Date" and "Price" fields.

    Date is "MM/DD/YYYY", Price may carry "," thousands separators; other
    fields are ignored. Rows that are missing a field or fail to parse are
    skipped and counted, never raised. A later row for the same date
    replaces an earlier one.
    """
    prices: dict[date, float] = {}
    accepted = 0
    skipped = 0
    for row in rows:
        raw_date = row.get("Date")
        raw_price = row.get("Price")
        if not raw_date or not raw_price:
            skipped += 1
            continue
        try:
            day = parse_price_date(raw_date)
        except ValueError:
            skipped += 1
            continue
        price = _parse_price(raw_price)
        if price is None:
            skipped += 1
            continue
        prices[day] = price
        accepted += 1

    logger.info("Loaded %d price records (%d rows skipped)", len(prices), skipped)
    return PriceOracle(
        prices=prices,
        accepted_rows=accepted,
        skipped_rows=skipped,
        fallback_price=fallback_price,
    )


def read_price_rows(csv_path: str | Path) -> list[dict[str, str]]:
    """Read a price CSV (header row with at least Date, Price) into row dicts."""
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"Price file not found: {csv_path}")
    with open(path, newline="", encoding="utf-8-sig") as f:
        return [row for row in csv.DictReader(f) if any(row.values())]
