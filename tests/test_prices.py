"""Tests for price loading and lookup."""

import logging
from datetime import date

import pytest

from asset_savings_sim import FALLBACK_PRICE, PriceOracle, load_prices, price_on_or_before
from asset_savings_sim.prices import read_price_rows


class TestLoadPrices:
    def test_thousands_separator(self):
        oracle = load_prices([{"Date": "01/02/2020", "Price": "7,200.5"}])
        assert oracle.prices[date(2020, 1, 2)] == 7200.5

    def test_skips_malformed_rows(self):
        rows = [
            {"Date": "01/01/2020", "Price": "100"},
            {"Date": "not a date", "Price": "100"},
            {"Date": "01/02/2020", "Price": "abc"},
            {"Date": "01/03/2020", "Price": "-5"},
            {"Date": "01/04/2020", "Price": "0"},
            {"Date": "01/05/2020", "Price": "nan"},
            {"Date": "01/06/2020"},
            {"Price": "100"},
            {"Date": "", "Price": ""},
        ]
        oracle = load_prices(rows)
        assert len(oracle) == 1
        assert oracle.accepted_rows == 1
        assert oracle.skipped_rows == 8

    def test_later_duplicate_wins(self):
        oracle = load_prices([
            {"Date": "01/01/2020", "Price": "100"},
            {"Date": "01/01/2020", "Price": "200"},
        ])
        assert oracle.prices[date(2020, 1, 1)] == 200.0

    def test_ignores_extra_fields(self, oracle):
        assert oracle.prices[date(2020, 2, 10)] == 9650.0
        assert oracle.skipped_rows == 0

    def test_prices_read_only(self, oracle):
        with pytest.raises(TypeError):
            oracle.prices[date(2020, 1, 1)] = 1.0

    def test_hashable(self, oracle):
        other = load_prices([{"Date": "01/01/2020", "Price": "100"}])
        assert isinstance(hash(oracle), int)
        assert hash(other) == hash(load_prices([{"Date": "01/01/2020", "Price": "100"}]))

    def test_invalid_fallback(self):
        with pytest.raises(ValueError, match="fallback_price"):
            PriceOracle(prices={}, fallback_price=0)


class TestPriceLookup:
    def setup_method(self):
        self.oracle = load_prices([
            {"Date": "01/01/2020", "Price": "100"},
            {"Date": "01/03/2020", "Price": "300"},
        ])

    def test_exact(self):
        assert price_on_or_before(self.oracle, date(2020, 1, 3)) == 300.0

    def test_look_back(self):
        assert price_on_or_before(self.oracle, date(2020, 1, 2)) == 100.0

    def test_look_back_seven_days(self):
        q = self.oracle.quote(date(2020, 1, 10))
        assert q.price == 300.0
        assert q.source_date == date(2020, 1, 3)
        assert not q.fallback

    def test_beyond_window_falls_back(self):
        q = self.oracle.quote(date(2020, 1, 11))
        assert q.price == FALLBACK_PRICE
        assert q.fallback

    def test_before_first_price_falls_back(self):
        assert self.oracle.price_on_or_before(date(2019, 12, 31)) == FALLBACK_PRICE

    def test_empty_oracle(self):
        assert price_on_or_before(PriceOracle(), date(2020, 1, 1)) == FALLBACK_PRICE

    def test_custom_fallback(self):
        oracle = load_prices([], fallback_price=123.0)
        assert oracle.price_on_or_before(date(2020, 1, 1)) == 123.0

    def test_fallback_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="asset_savings_sim.prices"):
            self.oracle.price_on_or_before(date(2021, 1, 1))
        assert "fallback" in caplog.text

    def test_mock_table(self, oracle):
        assert oracle.price_on_or_before(date(2015, 6, 1)) == 220.0
        assert oracle.price_on_or_before(date(2020, 1, 15)) == 7200.0
        assert oracle.price_on_or_before(date(2021, 1, 15)) == 28950.0
        assert oracle.price_on_or_before(date(2023, 1, 15)) == 42250.0


class TestDateRange:
    def test_range(self, oracle):
        assert oracle.date_range() == (date(2015, 1, 1), date(2024, 12, 31))

    def test_empty(self):
        assert PriceOracle().date_range() is None


class TestReadPriceRows:
    def test_reads_csv(self, tmp_path):
        path = tmp_path / "prices.csv"
        path.write_text(
            '\ufeffDate,Price,Open\n01/01/2020,"7,200.0",7100\n\n01/02/2020,7300.0,7200\n',
            encoding="utf-8",
        )
        rows = read_price_rows(path)
        assert len(rows) == 2
        assert rows[0]["Date"] == "01/01/2020"
        assert rows[0]["Price"] == "7,200.0"
        oracle = load_prices(rows)
        assert oracle.prices[date(2020, 1, 1)] == 7200.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_price_rows(tmp_path / "missing.csv")
