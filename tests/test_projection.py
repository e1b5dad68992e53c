import numpy as np
import pytest

from trustsim.engine.sampler import WeightedSampler
from trustsim.engine.simulation import apply_year, project


@pytest.mark.parametrize("reserves", [0.5, 500.0, 1066.0, 1215.0, 1392.0, 2784.0, 6429.7])
def test_apply_year_transition(nrt_dataset, reserves: float) -> None:
    for sales, dividend in zip(nrt_dataset.sales, nrt_dataset.dividends):
        year = apply_year(reserves, sales, dividend)
        if sales < reserves:
            assert year.reserves == pytest.approx(reserves - sales)
            assert year.reserves > 0
            assert year.dividend == dividend
        else:
            assert year.reserves == 0.0
            assert year.dividend == pytest.approx(dividend * reserves / sales)


def test_reserves_equal_to_sales_pays_full_dividend_and_depletes() -> None:
    year = apply_year(1215.0, 1215.0, 0.82)
    assert year.reserves == 0.0
    assert year.dividend == pytest.approx(0.82)


def test_partial_year_is_pro_rated() -> None:
    year = apply_year(696.0, 1392.0, 0.67)
    assert year.reserves == 0.0
    assert year.dividend == pytest.approx(0.335)


def test_negative_reserves_rejected() -> None:
    with pytest.raises(ValueError):
        apply_year(-1.0, 1392.0, 0.67)


def test_project_uses_sampled_point(point_mass_dataset) -> None:
    sampler = WeightedSampler(point_mass_dataset.probs, np.random.default_rng(3))
    year = project(5000.0, point_mass_dataset, sampler)
    assert year.index == 0
    assert year.dividend == pytest.approx(0.67)
    assert year.reserves == pytest.approx(5000.0 - 1392.0)
