"""Tests for PNG chart generation."""

import dataclasses
from datetime import date

import pytest

from asset_savings_sim import Expense, SimulationInputs, run_simulation
from asset_savings_sim.charts import plot_holdings, plot_trajectory


@pytest.fixture(scope="module")
def results(oracle):
    inputs = SimulationInputs(
        start_date=date(2019, 1, 1),
        end_date=date(2021, 12, 31),
        salary=3000,
        expenses=(Expense("rent", 2000, "monthly", day=5),),
        precision="monthly",
    )
    return run_simulation(inputs, oracle)


class TestPlotTrajectory:
    def test_writes_png(self, results, tmp_path):
        path = plot_trajectory(results, tmp_path / "charts")
        assert path == tmp_path / "charts" / "trajectory.png"
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_name_suffix(self, results, tmp_path):
        path = plot_trajectory(results, tmp_path, name="2019")
        assert path.name == "trajectory-2019.png"
        assert path.exists()

    def test_empty_chart_data(self, results, tmp_path):
        with pytest.raises(ValueError):
            plot_trajectory(dataclasses.replace(results, chart_data=[]), tmp_path)


class TestPlotHoldings:
    def test_writes_png(self, results, tmp_path):
        path = plot_holdings(results, tmp_path, name="x")
        assert path.name == "holdings-x.png"
        assert path.stat().st_size > 0

    def test_empty_data_points(self, results, tmp_path):
        with pytest.raises(ValueError):
            plot_holdings(dataclasses.replace(results, data_points=[]), tmp_path)
