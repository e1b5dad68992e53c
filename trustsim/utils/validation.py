"""Validation helpers."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from trustsim.config import Config


def assert_fraction(value: float, name: str) -> None:
    """Ensure value lies within [0, 1]."""

    if not 0 <= value <= 1:
        raise ValueError(f"{name} must lie in [0, 1], received {value}")


def assert_positive(values: Sequence[float], name: str) -> None:
    """Ensure every entry is strictly positive."""

    arr = np.asarray(values, dtype=float)
    if arr.size and (not np.all(np.isfinite(arr)) or np.any(arr <= 0)):
        raise ValueError(f"{name} must contain only positive finite values")


def assert_monotonic(sequence: Sequence[float], increasing: bool = True, tol: float = 1e-9) -> None:
    """Ensure a sequence is monotonic within tolerance."""

    arr = np.asarray(sequence, dtype=float)
    diffs = np.diff(arr)
    if increasing and np.any(diffs < -tol):
        raise ValueError("Sequence must be non-decreasing")
    if not increasing and np.any(diffs > tol):
        raise ValueError("Sequence must be non-increasing")


def validate_config(config: Config) -> None:
    """Run cross-field checks on configuration (fractions, sales, weights)."""

    assert_fraction(config.valuation.tax.combined, "valuation.tax.combined")
    assert_fraction(config.report.target_profit_probability, "report.target_profit_probability")
    assert_positive(config.trust.sales_history, "trust.sales_history")
    if config.trust.current_year is not None:
        current_sales = config.trust.sales_history[-1] * (1 + config.trust.current_year.sales_change)
        assert_positive([current_sales], "current-year sales estimate")
    if len(config.sampling.weights) != config.trust.point_count:
        raise ValueError("sampling.weights must have one entry per data point")
    if config.simulation.ensemble_size <= 0:
        raise ValueError("Ensemble size must be positive")


__all__ = ["assert_fraction", "assert_positive", "assert_monotonic", "validate_config"]
