"""Downsampling of recorded data points for charts."""

import math
from dataclasses import dataclass
from typing import Sequence

MAX_CHART_POINTS = 50


@dataclass(frozen=True)
class ChartPoint:
    period: str  # ISO date
    currency: int
    accumulate: int
    liquidate: int


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def chart_stride(n_points: int, max_points: int = MAX_CHART_POINTS) -> int:
    return max(1, n_points // max_points)


def sample_chart_data(data_points: Sequence, max_points: int = MAX_CHART_POINTS) -> list[ChartPoint]:
    """Keep every `stride`-th data point plus the last one, balances rounded to whole units.

    Output has at most ceil(L / stride) + 1 entries and always ends on the
    input's last date.
    """
    n = len(data_points)
    stride = chart_stride(n, max_points)
    return [
        ChartPoint(
            period=p.date.isoformat(),
            currency=_round_half_up(p.currency_balance),
            accumulate=_round_half_up(p.accumulate_balance),
            liquidate=_round_half_up(p.liquidate_balance),
        )
        for i, p in enumerate(data_points)
        if i % stride == 0 or i == n - 1
    ]
