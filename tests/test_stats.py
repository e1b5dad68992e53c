import math

import numpy as np
import pytest

from trustsim.engine.stats import (
    break_even_price,
    entry_price_curve,
    mean,
    price_statistics,
    quantile,
    quantiles,
    years_distribution,
)


def test_quantile_of_identical_values() -> None:
    assert quantile([2.5] * 1000, 0.05) == pytest.approx(2.5)


def test_quantile_interpolates_like_numpy() -> None:
    values = np.random.default_rng(8).normal(3.0, 0.5, size=501)
    for q in (0.05, 0.25, 0.5, 0.9):
        assert quantile(values, q) == pytest.approx(float(np.quantile(values, q)))


def test_quantiles_keys() -> None:
    out = quantiles([1.0, 2.0, 3.0])
    assert set(out) == {"p5", "p50", "p95"}
    assert out["p5"] <= out["p50"] <= out["p95"]


def test_quantile_rejects_empty_and_out_of_range() -> None:
    with pytest.raises(ValueError):
        quantile([], 0.5)
    with pytest.raises(ValueError):
        quantile([1.0], 1.5)
    with pytest.raises(ValueError):
        mean([])


def test_break_even_price_is_lower_tail_quantile() -> None:
    dcfs = np.arange(1, 101, dtype=float)
    assert break_even_price(dcfs, 0.95) == pytest.approx(quantile(dcfs, 0.05))
    with pytest.raises(ValueError):
        break_even_price(dcfs, 1.0)


def test_price_statistics() -> None:
    dcfs = np.array([2.0, 3.0, 4.0, 5.0])
    stats = price_statistics(dcfs, 3.5)
    assert stats.mean_margin == pytest.approx(np.mean(dcfs / 3.5) - 1)
    assert stats.profit_probability == pytest.approx(0.5)
    assert stats.conditional_margin == pytest.approx(4.5 / 3.5 - 1)
    assert stats.as_dict()["price"] == 3.5


def test_conditional_margin_nan_without_profitable_trials() -> None:
    stats = price_statistics([1.0, 2.0], 10.0)
    assert stats.profit_probability == 0.0
    assert math.isnan(stats.conditional_margin)


def test_price_statistics_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        price_statistics([1.0], 0.0)
    with pytest.raises(ValueError):
        price_statistics([], 1.0)


def test_entry_price_falls_as_target_rises() -> None:
    dcfs = np.random.default_rng(2).lognormal(1.0, 0.3, size=2000)
    curve = entry_price_curve(dcfs, [0.5, 0.75, 0.9, 0.95, 0.99])
    assert list(curve.columns) == ["target_profit_probability", "entry_price"]
    assert curve["entry_price"].is_monotonic_decreasing


def test_years_distribution() -> None:
    table = years_distribution([5, 4, 5, 6, 5])
    assert table["years"].tolist() == [4, 5, 6]
    assert table["trials"].tolist() == [1, 3, 1]
    assert table["share"].sum() == pytest.approx(1.0)
