"""Simulation inputs and the annual growth/inflation accumulator."""

from dataclasses import dataclass, field
from datetime import date

FREQUENCY_MONTHLY = "monthly"
FREQUENCY_WEEKLY = "weekly"
FREQUENCIES = (FREQUENCY_MONTHLY, FREQUENCY_WEEKLY)

PRECISION_DAILY = "daily"
PRECISION_MONTHLY = "monthly"  # weekly samples + month changes + last day
PRECISIONS = (PRECISION_DAILY, PRECISION_MONTHLY)


@dataclass(frozen=True)
class Expense:
    """Recurring expense.

    Monthly expenses carry `day` (1-31, clamped to the month length when
    evaluated); weekly expenses carry `day_of_week` (0=Sunday .. 6=Saturday).
    """

    name: str
    amount: float
    frequency: str = FREQUENCY_MONTHLY
    day: int | None = None
    day_of_week: int | None = None

    def __post_init__(self):
        if self.frequency not in FREQUENCIES:
            raise ValueError(f"{self.name}: unknown frequency {self.frequency!r} (expected monthly or weekly)")
        if self.frequency == FREQUENCY_MONTHLY:
            if self.day is None or self.day_of_week is not None:
                raise ValueError(f"{self.name}: monthly expense needs day and no day_of_week")
        elif self.day_of_week is None or self.day is not None:
            raise ValueError(f"{self.name}: weekly expense needs day_of_week and no day")


@dataclass(frozen=True)
class SimulationInputs:
    """Everything one run needs besides the price data."""

    start_date: date
    end_date: date

    # Income
    salary: float = 0.0
    salary_day: int = 1  # clamped to the month length
    salary_growth_rate: float = 0.0  # annual, applied from the second calendar year

    # Expenses (declared order decides who gets paid first in the liquidate scenario)
    expenses: tuple[Expense, ...] = ()
    expense_inflation_rate: float = 0.0

    precision: str = PRECISION_DAILY

    def __post_init__(self):
        object.__setattr__(self, "expenses", tuple(self.expenses))


@dataclass
class InflationAccumulator:
    """Salary growth and expense inflation multipliers.

    Both start at 1.0 and compound once per calendar-year transition, so
    the first year of a run always uses the base amounts.
    """

    salary_growth_rate: float
    expense_inflation_rate: float
    last_year: int
    salary_multiplier: float = field(default=1.0, init=False)
    expense_multiplier: float = field(default=1.0, init=False)

    def advance_to(self, year: int) -> bool:
        """Compound once if `year` is past the last processed year. Returns True if it did."""
        if year <= self.last_year:
            return False
        self.salary_multiplier *= 1 + self.salary_growth_rate
        self.expense_multiplier *= 1 + self.expense_inflation_rate
        self.last_year = year
        return True

    def salary(self, base: float) -> float:
        return base * self.salary_multiplier

    def expense(self, base: float) -> float:
        return base * self.expense_multiplier
