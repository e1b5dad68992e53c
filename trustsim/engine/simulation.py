"""Year projection and single-trial depletion simulation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from trustsim.data.history import HistoricalDataset
from trustsim.engine.sampler import WeightedSampler
from trustsim.engine.state import TrialState, TrialStatus


@dataclass(frozen=True)
class YearProjection:
    dividend: float
    reserves: float
    index: int | None = None


def apply_year(reserves: float, sales: float, dividend: float) -> YearProjection:
    """Book one year of ``sales`` against ``reserves``.

    When the reserves cannot cover the full year the dividend is pro-rated by
    the share of the year's sales still available and the reserves are
    exhausted.
    """

    if reserves < 0:
        raise ValueError(f"reserves must be non-negative, received {reserves}")
    if sales < reserves:
        return YearProjection(dividend=dividend, reserves=reserves - sales)
    return YearProjection(dividend=dividend * (reserves / sales), reserves=0.0)


def project(reserves: float, dataset: HistoricalDataset, sampler: WeightedSampler) -> YearProjection:
    """Project one year of dividend and remaining reserves from a sampled data point."""

    i = sampler.draw()
    year = apply_year(reserves, float(dataset.sales[i]), float(dataset.dividends[i]))
    return YearProjection(dividend=year.dividend, reserves=year.reserves, index=i)


class TrialSimulator:
    """Run depletion trials from a fixed starting reserve."""

    def __init__(self, dataset: HistoricalDataset, initial_reserves: float, sampler: WeightedSampler) -> None:
        if initial_reserves < 0:
            raise ValueError("initial_reserves must be non-negative")
        if sampler.size != dataset.historical_point_count:
            raise ValueError(
                f"sampler covers {sampler.size} points but the dataset has {dataset.historical_point_count}"
            )
        self.dataset = dataset
        self.initial_reserves = float(initial_reserves)
        self.sampler = sampler

    def run_trial(self) -> TrialState:
        """Simulate years until the reserves are depleted."""

        state = TrialState(reserves=self.initial_reserves)
        while state.status is TrialStatus.ACTIVE:
            year = project(state.reserves, self.dataset, self.sampler)
            state.record(year.dividend, year.reserves)
        return state

    def simulate(self) -> np.ndarray:
        """Return the payout path of one trial."""

        return self.run_trial().payout_path()


__all__ = ["YearProjection", "apply_year", "project", "TrialSimulator"]
