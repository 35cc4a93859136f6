"""Savings strategy ledgers (one per simulated scenario)."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class Strategy:
    """Base ledger: cash in the price currency plus held asset units.

    Every strategy receives the same salary and expense events; they only
    differ in how expenses are paid and whether surplus cash buys the asset.
    """

    name: str
    cash: float = field(default=0.0)
    units: float = field(default=0.0)

    HOLDS_ASSET: ClassVar[bool] = True

    def credit(self, amount: float) -> None:
        self.cash += amount

    def pay(self, amount: float, price: float) -> None:
        raise NotImplementedError

    def convert_surplus(self, price: float) -> None:
        """Convert the entire positive cash balance into asset units at `price`."""
        if self.HOLDS_ASSET and self.cash > 0:
            self.units += self.cash / price
            self.cash = 0.0

    def asset_value(self, price: float) -> float:
        return self.units * price

    def balance(self, price: float) -> float:
        """Net position: asset market value plus (possibly negative) cash."""
        return self.asset_value(price) + self.cash


class CurrencyOnly(Strategy):
    """Keep everything in the price currency. Balance may go negative."""

    HOLDS_ASSET = False

    def __init__(self):
        super().__init__(name="Currency only")

    def pay(self, amount: float, price: float) -> None:
        self.cash -= amount


class Accumulate(Strategy):
    """Buy the asset with every positive cash balance and never sell.

    Expenses come out of cash only; a shortfall stays as negative cash and
    is netted against the next credit, so units never decrease. The
    reported balance is the market value of the units alone; the shortfall
    is tracked separately in `cash`.
    """

    def __init__(self):
        super().__init__(name="Accumulate")

    def pay(self, amount: float, price: float) -> None:
        self.cash -= amount

    def balance(self, price: float) -> float:
        return self.asset_value(price)


class Liquidate(Strategy):
    """Buy the asset with positive cash, sell it to cover expense shortfalls.

    Waterfall per expense: cash, then a partial sale, then a full sale;
    whatever remains unpaid after a full sale is absorbed (cash clamps to 0).
    """

    def __init__(self):
        super().__init__(name="Liquidate")

    def pay(self, amount: float, price: float) -> None:
        if self.cash >= amount:
            self.cash -= amount
            return

        shortfall = amount - self.cash
        needed = shortfall / price
        if self.units >= needed:
            self.units -= needed
            self.cash = 0.0
            return

        self.cash += self.units * price
        self.units = 0.0
        if self.cash >= amount:
            self.cash -= amount
        else:
            self.cash = 0.0
