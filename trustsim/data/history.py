"""Historical (sales, dividend) record and the inputs derived from it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from trustsim.config import Config


@dataclass(frozen=True)
class HistoricalDataset:
    """Paired per-year sales and dividends with a sampling weight per year.

    Weights are normalised on construction. Sales must be strictly positive:
    every simulated year then either depletes the reserves or shrinks them,
    which is what guarantees a trial ends.
    """

    sales: np.ndarray
    dividends: np.ndarray
    probs: np.ndarray

    def __post_init__(self) -> None:
        sales = np.asarray(self.sales, dtype=float)
        dividends = np.asarray(self.dividends, dtype=float)
        probs = np.asarray(self.probs, dtype=float)
        if not (len(sales) == len(dividends) == len(probs)):
            raise ValueError(
                "sales, dividends and probs must have equal length "
                f"(got {len(sales)}, {len(dividends)}, {len(probs)})"
            )
        if len(sales) == 0:
            raise ValueError("dataset must contain at least one data point")
        if not np.all(np.isfinite(sales)) or np.any(sales <= 0):
            raise ValueError("sales must be strictly positive")
        if np.any(dividends < 0):
            raise ValueError("dividends must be non-negative")
        total = probs.sum()
        if np.any(probs < 0) or total <= 0:
            raise ValueError("probs must be non-negative with a positive sum")
        object.__setattr__(self, "sales", sales)
        object.__setattr__(self, "dividends", dividends)
        object.__setattr__(self, "probs", probs / total)

    @property
    def historical_point_count(self) -> int:
        return len(self.sales)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"sales": self.sales, "dividend": self.dividends, "prob": self.probs})


@dataclass(frozen=True)
class SimulationInputs:
    """Everything the simulation needs that is derived from the trust's filings."""

    dataset: HistoricalDataset
    initial_reserves: float
    stub_dividend: float
    tax_rate: float
    discount_rate: float


def current_year_point(sales_history: Sequence[float], sales_change: float, quarterly: Sequence[float]) -> tuple[float, float]:
    """Estimate the (sales, dividend) pair of the year in progress."""

    sales = float(sales_history[-1]) * (1 + sales_change)
    dividend = float(sum(quarterly))
    return sales, dividend


def build_inputs(config: Config) -> SimulationInputs:
    """Resolve the configured trust record into simulation inputs."""

    trust = config.trust
    sales = [float(s) for s in trust.sales_history]
    dividends = [float(d) for d in trust.dividend_history]
    reserves = float(trust.reserves_start)
    stub = 0.0
    if trust.current_year is not None:
        current = trust.current_year
        sales_now, dividend_now = current_year_point(sales, current.sales_change, current.quarterly_dividends)
        sales.append(sales_now)
        dividends.append(dividend_now)
        # reserves left once the current year's extraction is booked
        reserves = max(reserves - sales_now, 0.0)
        stub = float(current.quarterly_dividends[-1])
    if config.valuation.stub_dividend is not None:
        stub = float(config.valuation.stub_dividend)
    dataset = HistoricalDataset(
        sales=np.array(sales),
        dividends=np.array(dividends),
        probs=np.array(config.sampling.weights, dtype=float),
    )
    return SimulationInputs(
        dataset=dataset,
        initial_reserves=reserves,
        stub_dividend=stub,
        tax_rate=config.valuation.tax.combined,
        discount_rate=config.valuation.discount_rate,
    )


__all__ = ["HistoricalDataset", "SimulationInputs", "current_year_point", "build_inputs"]
