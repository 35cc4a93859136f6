"""Chart generation for savings simulation results."""

from datetime import date
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from asset_savings_sim.simulation import SimulationResults

# Scenario color mapping
STRATEGY_COLORS = {
    "Currency only": "#7f7f7f",  # gray
    "Accumulate": "#1f77b4",     # blue
    "Liquidate": "#ff7f0e",      # orange
}

DEFAULT_COLOR = "#2ca02c"


def _format_currency_axis(ax: plt.Axes):
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x:,.0f}")
    )


def _format_date_axis(ax: plt.Axes):
    locator = mdates.AutoDateLocator()
    ax.xaxis.set_major_locator(locator)
    ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_trajectory(results: SimulationResults, output_path: Path, name: str = "") -> Path:
    """Generate a line chart of the three scenario balances over the sampled chart data.

    Args:
        results: run_simulation() result (uses chart_data).
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "2020" → "trajectory-2020.png").

    Returns:
        Path to the generated PNG file.
    """
    if not results.chart_data:
        raise ValueError("No chart data to plot")

    fig, ax = plt.subplots(figsize=(14, 8))

    periods = [date.fromisoformat(p.period) for p in results.chart_data]
    series = {
        "Currency only": [p.currency for p in results.chart_data],
        "Accumulate": [p.accumulate for p in results.chart_data],
        "Liquidate": [p.liquidate for p in results.chart_data],
    }
    for label, values in series.items():
        color = STRATEGY_COLORS.get(label, DEFAULT_COLOR)
        ax.plot(periods, values, label=label, color=color, linewidth=2)

    ax.axhline(0, color="#888888", linewidth=0.7, linestyle=":")
    ax.set_xlabel("Date")
    ax.set_ylabel("Balance (currency)")
    ax.set_title("Balance trajectory by scenario")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_currency_axis(ax)
    _format_date_axis(ax)

    return _save(fig, output_path, "trajectory", name)


def plot_holdings(results: SimulationResults, output_path: Path, name: str = "") -> Path:
    """Generate a two-panel chart: asset units held (top) and the asset price (bottom).

    Uses every recorded data point, not the downsampled chart data.
    """
    if not results.data_points:
        raise ValueError("No data points to plot")

    fig, (ax_units, ax_price) = plt.subplots(
        2, 1, figsize=(14, 9), sharex=True, gridspec_kw={"height_ratios": [2, 1]},
    )

    dates = [p.date for p in results.data_points]
    ax_units.plot(dates, [p.accumulate_units for p in results.data_points],
                  label="Accumulate", color=STRATEGY_COLORS["Accumulate"], linewidth=2)
    ax_units.plot(dates, [p.liquidate_units for p in results.data_points],
                  label="Liquidate", color=STRATEGY_COLORS["Liquidate"], linewidth=2)
    ax_units.set_ylabel("Asset units held")
    ax_units.set_title("Asset holdings by scenario")
    ax_units.legend(loc="upper left")
    ax_units.grid(True, alpha=0.3)

    ax_price.plot(dates, [p.price for p in results.data_points], color=DEFAULT_COLOR, linewidth=1.2)
    ax_price.set_xlabel("Date")
    ax_price.set_ylabel("Price")
    ax_price.grid(True, alpha=0.3)
    _format_currency_axis(ax_price)
    _format_date_axis(ax_price)

    return _save(fig, output_path, "holdings", name)
