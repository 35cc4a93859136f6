"""Day-by-day simulation engine for the three savings strategies."""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date

from asset_savings_sim.dates import day_count, iter_days
from asset_savings_sim.params import (
    FREQUENCY_MONTHLY,
    PRECISION_DAILY,
    PRECISIONS,
    InflationAccumulator,
    SimulationInputs,
)
from asset_savings_sim.prices import PriceOracle
from asset_savings_sim.sampling import ChartPoint, sample_chart_data
from asset_savings_sim.schedule import is_expense_due, is_salary_due
from asset_savings_sim.strategies import Accumulate, CurrencyOnly, Liquidate, Strategy

logger = logging.getLogger(__name__)

MAX_SIMULATION_DAYS = 36_600  # ~100 years
WEEKLY_SAMPLE_MODULUS = 7  # monthly precision samples days 1, 8, 15, 22, 29


@dataclass(frozen=True)
class SimulationDataPoint:
    """Snapshot of one recorded day. Balances are in the price currency."""

    date: date
    price: float
    currency_balance: float
    accumulate_balance: float
    accumulate_units: float
    accumulate_cash: float
    liquidate_balance: float
    liquidate_units: float
    liquidate_cash: float
    total_salary_received: float
    total_expenses_paid: float


@dataclass
class SimulationResults:
    data_points: list[SimulationDataPoint]
    chart_data: list[ChartPoint]

    final_currency_balance: float
    final_accumulate_balance: float
    final_accumulate_units: float
    final_accumulate_cash: float
    final_liquidate_balance: float
    final_liquidate_units: float
    final_liquidate_cash: float

    accumulate_gain_percentage: float
    liquidate_gain_percentage: float

    total_salary_received: float
    total_expenses_paid: float
    total_salary_received_units: float
    total_expenses_paid_units: float

    days_simulated: int = 0
    fallback_price_days: int = 0

    def to_dict(self) -> dict:
        """JSON-safe dict (dates as ISO strings)."""
        d = dataclasses.asdict(self)
        for point in d["data_points"]:
            point["date"] = point["date"].isoformat()
        return d


def gain_percentage(final_asset: float, final_currency: float) -> float:
    """Relative advantage of an asset strategy over currency-only, in percent.

    Uses |currency| as denominator so a negative currency balance still
    gives a finite, correctly signed result.
    """
    if final_currency != 0:
        return (final_asset - final_currency) / abs(final_currency) * 100
    return 100.0 if final_asset > 0 else 0.0


def validate_date_range(start_date: date, end_date: date) -> None:
    """Raise ValueError if the range is reversed or longer than MAX_SIMULATION_DAYS."""
    if end_date < start_date:
        raise ValueError(
            f"end_date {end_date.isoformat()} is before start_date {start_date.isoformat()}"
        )
    days = day_count(start_date, end_date)
    if days > MAX_SIMULATION_DAYS:
        raise ValueError(
            f"Simulation range of {days} days exceeds the limit of {MAX_SIMULATION_DAYS} days"
        )


def validate_inputs(inputs: SimulationInputs) -> list[str]:
    """Validate input ranges. Returns list of error messages (empty if valid)."""
    errors = []

    if inputs.salary < 0:
        errors.append(f"salary must be >= 0 (got {inputs.salary})")
    if not 1 <= inputs.salary_day <= 31:
        errors.append(f"salary_day must be 1-31 (got {inputs.salary_day})")
    if inputs.salary_growth_rate < 0:
        errors.append(f"salary_growth_rate must be >= 0 (got {inputs.salary_growth_rate})")
    if inputs.expense_inflation_rate < 0:
        errors.append(f"expense_inflation_rate must be >= 0 (got {inputs.expense_inflation_rate})")
    if inputs.precision not in PRECISIONS:
        errors.append(f"precision must be one of {', '.join(PRECISIONS)} (got {inputs.precision!r})")

    for expense in inputs.expenses:
        if expense.amount < 0:
            errors.append(f"{expense.name}: amount must be >= 0 (got {expense.amount})")
        if expense.frequency == FREQUENCY_MONTHLY:
            if not 1 <= expense.day <= 31:
                errors.append(f"{expense.name}: day must be 1-31 (got {expense.day})")
        elif not 0 <= expense.day_of_week <= 6:
            errors.append(f"{expense.name}: day_of_week must be 0-6 (got {expense.day_of_week})")

    try:
        validate_date_range(inputs.start_date, inputs.end_date)
    except ValueError as e:
        errors.append(str(e))

    return errors


def _should_record(precision: str, day: date, month_changed: bool, is_last_day: bool) -> bool:
    if precision == PRECISION_DAILY or is_last_day:
        return True
    return day.day % WEEKLY_SAMPLE_MODULUS == 1 or month_changed


def _snapshot(
    day: date,
    price: float,
    currency: Strategy,
    accumulate: Strategy,
    liquidate: Strategy,
    total_salary: float,
    total_expenses: float,
) -> SimulationDataPoint:
    return SimulationDataPoint(
        date=day,
        price=price,
        currency_balance=currency.cash,
        accumulate_balance=accumulate.balance(price),
        accumulate_units=accumulate.units,
        accumulate_cash=accumulate.cash,
        liquidate_balance=liquidate.balance(price),
        liquidate_units=liquidate.units,
        liquidate_cash=liquidate.cash,
        total_salary_received=total_salary,
        total_expenses_paid=total_expenses,
    )


def run_simulation(inputs: SimulationInputs, oracle: PriceOracle) -> SimulationResults:
    """Simulate every day from start_date to end_date inclusive.

    Pure function of (inputs, oracle): the oracle is only read, and all
    ledger state lives in this call.
    """
    validate_date_range(inputs.start_date, inputs.end_date)
    if inputs.precision not in PRECISIONS:
        raise ValueError(f"Unknown precision {inputs.precision!r}")

    currency = CurrencyOnly()
    accumulate = Accumulate()
    liquidate = Liquidate()
    strategies = (currency, accumulate, liquidate)

    growth = InflationAccumulator(
        salary_growth_rate=inputs.salary_growth_rate,
        expense_inflation_rate=inputs.expense_inflation_rate,
        last_year=inputs.start_date.year,
    )

    total_salary = 0.0
    total_expenses = 0.0
    total_salary_units = 0.0
    total_expenses_units = 0.0
    fallback_days = 0
    days = 0
    last_month = inputs.start_date.month
    data_points: list[SimulationDataPoint] = []

    logger.debug(
        "Simulating %s .. %s (%s precision, %d expenses)",
        inputs.start_date.isoformat(), inputs.end_date.isoformat(),
        inputs.precision, len(inputs.expenses),
    )

    for day in iter_days(inputs.start_date, inputs.end_date):
        days += 1
        growth.advance_to(day.year)

        quote = oracle.quote(day)
        price = quote.price
        if quote.fallback:
            fallback_days += 1

        if is_salary_due(day, inputs.salary_day):
            salary = growth.salary(inputs.salary)
            for s in strategies:
                s.credit(salary)
            total_salary += salary
            total_salary_units += salary / price

        for expense in inputs.expenses:
            if not is_expense_due(expense, day):
                continue
            amount = growth.expense(expense.amount)
            for s in strategies:
                s.pay(amount, price)
            total_expenses += amount
            total_expenses_units += amount / price

        for s in strategies:
            s.convert_surplus(price)

        month_changed = day.month != last_month
        last_month = day.month
        if _should_record(inputs.precision, day, month_changed, day == inputs.end_date):
            data_points.append(
                _snapshot(day, price, currency, accumulate, liquidate, total_salary, total_expenses)
            )

    if fallback_days:
        logger.warning(
            "%d of %d simulated days had no price within the look-back window; used fallback %.2f",
            fallback_days, days, oracle.fallback_price,
        )

    last = data_points[-1]
    logger.debug("Simulation finished: %d days, %d data points", days, len(data_points))

    return SimulationResults(
        data_points=data_points,
        chart_data=sample_chart_data(data_points),
        final_currency_balance=last.currency_balance,
        final_accumulate_balance=last.accumulate_balance,
        final_accumulate_units=last.accumulate_units,
        final_accumulate_cash=last.accumulate_cash,
        final_liquidate_balance=last.liquidate_balance,
        final_liquidate_units=last.liquidate_units,
        final_liquidate_cash=last.liquidate_cash,
        accumulate_gain_percentage=gain_percentage(last.accumulate_balance, last.currency_balance),
        liquidate_gain_percentage=gain_percentage(last.liquidate_balance, last.currency_balance),
        total_salary_received=total_salary,
        total_expenses_paid=total_expenses,
        total_salary_received_units=total_salary_units,
        total_expenses_paid_units=total_expenses_units,
        days_simulated=days,
        fallback_price_days=fallback_days,
    )
