"""Monte Carlo statistics utilities."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Sequence

import numpy as np
import pandas as pd


def quantile(values: Sequence[float], q: float) -> float:
    """Empirical quantile with linear interpolation between order statistics."""

    if not 0.0 <= q <= 1.0:
        raise ValueError("quantile probabilities must be in [0,1]")
    samples = sorted(float(v) for v in values)
    if not samples:
        raise ValueError("values cannot be empty")
    idx = q * (len(samples) - 1)
    lower = int(math.floor(idx))
    upper = int(math.ceil(idx))
    if lower == upper:
        return samples[lower]
    weight = idx - lower
    return samples[lower] * (1 - weight) + samples[upper] * weight


def quantiles(values: Sequence[float], qs: Iterable[float] = (0.05, 0.5, 0.95)) -> Dict[str, float]:
    """Return empirical quantiles keyed by ``q`` (e.g., ``{"p5": value}``)."""

    return {f"p{int(round(q * 100))}": quantile(values, q) for q in qs}


def mean(values: Sequence[float]) -> float:
    total = 0.0
    count = 0
    for v in values:
        total += float(v)
        count += 1
    if count == 0:
        raise ValueError("values cannot be empty")
    return total / count


def break_even_price(dcfs: Sequence[float], target_profit_probability: float) -> float:
    """Highest entry price that is profitable with probability ``target_profit_probability``."""

    if not 0.0 < target_profit_probability < 1.0:
        raise ValueError("target_profit_probability must lie in (0, 1)")
    return quantile(dcfs, 1 - target_profit_probability)


@dataclass
class PriceStats:
    price: float
    mean_margin: float
    profit_probability: float
    conditional_margin: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def price_statistics(dcfs: Sequence[float], price: float) -> PriceStats:
    """Margin and profit probability of buying at ``price``.

    ``conditional_margin`` is the expected margin over the profitable trials
    only and is NaN when no trial beats the price.
    """

    if price <= 0:
        raise ValueError("price must be positive")
    arr = np.asarray(dcfs, dtype=float)
    if arr.size == 0:
        raise ValueError("dcfs cannot be empty")
    profitable = arr[arr > price]
    conditional = float(profitable.mean() / price - 1) if profitable.size else float("nan")
    return PriceStats(
        price=float(price),
        mean_margin=float(np.mean(arr / price) - 1),
        profit_probability=float(np.mean(arr > price)),
        conditional_margin=conditional,
    )


def entry_price_curve(dcfs: Sequence[float], targets: Iterable[float]) -> pd.DataFrame:
    """Break-even entry price for each target probability of profit."""

    rows = [
        {"target_profit_probability": float(t), "entry_price": break_even_price(dcfs, t)}
        for t in targets
    ]
    return pd.DataFrame(rows, columns=["target_profit_probability", "entry_price"])


def years_distribution(years: Sequence[int]) -> pd.DataFrame:
    """Frequency of each number of years until depletion."""

    series = pd.Series(list(years), dtype=int)
    if series.empty:
        raise ValueError("years cannot be empty")
    counts = series.value_counts().sort_index()
    return pd.DataFrame(
        {
            "years": counts.index.astype(int),
            "trials": counts.to_numpy(),
            "share": counts.to_numpy() / len(series),
        }
    )


__all__ = [
    "quantile",
    "quantiles",
    "mean",
    "break_even_price",
    "PriceStats",
    "price_statistics",
    "entry_price_curve",
    "years_distribution",
]
