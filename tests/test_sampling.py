"""Tests for chart downsampling."""

from datetime import date, timedelta

import pytest

from asset_savings_sim import SimulationDataPoint, sample_chart_data
from asset_savings_sim.sampling import chart_stride


def _points(n: int, balance: float = 0.0) -> list[SimulationDataPoint]:
    start = date(2020, 1, 1)
    return [
        SimulationDataPoint(
            date=start + timedelta(days=i),
            price=100.0,
            currency_balance=balance + i,
            accumulate_balance=balance,
            accumulate_units=0.0,
            accumulate_cash=0.0,
            liquidate_balance=-balance,
            liquidate_units=0.0,
            liquidate_cash=0.0,
            total_salary_received=0.0,
            total_expenses_paid=0.0,
        )
        for i in range(n)
    ]


class TestChartStride:
    @pytest.mark.parametrize(
        "n, expected",
        [(0, 1), (1, 1), (49, 1), (50, 1), (99, 1), (100, 2), (1461, 29)],
    )
    def test_stride(self, n, expected):
        assert chart_stride(n) == expected


class TestSampleChartData:
    def test_empty(self):
        assert sample_chart_data([]) == []

    def test_short_series_kept(self):
        chart = sample_chart_data(_points(31))
        assert len(chart) == 31
        assert chart[0].period == "2020-01-01"

    def test_last_point_always_kept(self):
        points = _points(101)
        chart = sample_chart_data(points)
        # stride 2: indices 0, 2, ..., 100
        assert len(chart) == 51
        assert chart[-1].period == points[-1].date.isoformat()

    def test_last_point_appended_off_stride(self):
        points = _points(102)
        chart = sample_chart_data(points)
        assert len(chart) == 52
        assert chart[-2].period == points[100].date.isoformat()
        assert chart[-1].period == points[101].date.isoformat()

    def test_bounded(self):
        for n in (50, 149, 1461, 36_600):
            assert len(sample_chart_data(_points(n))) <= 2 * 50 + 1

    def test_rounds_half_up(self):
        chart = sample_chart_data(_points(1, balance=2.5))
        assert chart[0].currency == 3
        assert chart[0].accumulate == 3
        assert chart[0].liquidate == -2

    def test_rounded_to_int(self):
        chart = sample_chart_data(_points(1, balance=1234.49))
        assert chart[0].currency == 1234
        assert isinstance(chart[0].currency, int)
