"""Asset-Denominated Savings Simulation Package."""

from asset_savings_sim.params import (
    Expense,
    SimulationInputs,
    InflationAccumulator,
    FREQUENCY_MONTHLY,
    FREQUENCY_WEEKLY,
    PRECISION_DAILY,
    PRECISION_MONTHLY,
)
from asset_savings_sim.prices import (
    PriceOracle,
    PriceQuote,
    load_prices,
    read_price_rows,
    price_on_or_before,
    FALLBACK_PRICE,
    LOOKBACK_DAYS,
)
from asset_savings_sim.schedule import is_salary_due, is_expense_due
from asset_savings_sim.strategies import Strategy, CurrencyOnly, Accumulate, Liquidate
from asset_savings_sim.simulation import (
    SimulationDataPoint,
    SimulationResults,
    run_simulation,
    validate_inputs,
    validate_date_range,
    gain_percentage,
    MAX_SIMULATION_DAYS,
)
from asset_savings_sim.sampling import ChartPoint, sample_chart_data, MAX_CHART_POINTS

__all__ = [
    "Expense",
    "SimulationInputs",
    "InflationAccumulator",
    "FREQUENCY_MONTHLY",
    "FREQUENCY_WEEKLY",
    "PRECISION_DAILY",
    "PRECISION_MONTHLY",
    "PriceOracle",
    "PriceQuote",
    "load_prices",
    "read_price_rows",
    "price_on_or_before",
    "FALLBACK_PRICE",
    "LOOKBACK_DAYS",
    "is_salary_due",
    "is_expense_due",
    "Strategy",
    "CurrencyOnly",
    "Accumulate",
    "Liquidate",
    "SimulationDataPoint",
    "SimulationResults",
    "run_simulation",
    "validate_inputs",
    "validate_date_range",
    "gain_percentage",
    "MAX_SIMULATION_DAYS",
    "ChartPoint",
    "sample_chart_data",
    "MAX_CHART_POINTS",
]
