"""Shared fixtures: a deterministic daily price table for 2015-2024."""

from datetime import date

import pytest

from asset_savings_sim import load_prices
from asset_savings_sim.dates import iter_days

PRICE_HEADER = ("Date", "Price", "Open", "High", "Low", "Vol.", "Change %")


def mock_price(day: date) -> float:
    if day.year == 2015:
        return 220.0
    if day.year == 2019:
        return 7200.0
    if day.year == 2020:
        return 9650.0 if day.month == 2 else 7200.0
    if day.year == 2021:
        return 28950.0
    return 42250.0


def mock_price_rows() -> list[dict[str, str]]:
    rows = []
    for day in iter_days(date(2015, 1, 1), date(2024, 12, 31)):
        price = f"{mock_price(day):,.1f}"
        values = (day.strftime("%m/%d/%Y"), price, price, price, price, "1.2K", "0.00%")
        rows.append(dict(zip(PRICE_HEADER, values)))
    return rows


@pytest.fixture(scope="session")
def oracle():
    return load_prices(mock_price_rows())

