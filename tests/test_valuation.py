import numpy as np
import pytest

from trustsim.engine.valuation import discounted_cash_flow, present_value


def test_zero_rate_is_identity() -> None:
    cf = [0.82, 0.76, 0.3]
    assert np.allclose(present_value(cf, 0.0), cf)


def test_single_flow_discounted_one_period() -> None:
    assert present_value([1.5], 0.0065) == pytest.approx([1.5 / 1.0065])


def test_later_flows_discounted_more() -> None:
    pv = present_value([1.0, 1.0, 1.0], 0.05)
    assert pv == pytest.approx([1 / 1.05, 1 / 1.05**2, 1 / 1.05**3])
    assert np.all(np.diff(pv) < 0)


def test_empty_flow() -> None:
    assert present_value([], 0.01).size == 0


def test_rate_at_or_below_minus_one_rejected() -> None:
    with pytest.raises(ValueError):
        present_value([1.0], -1.0)


def test_dcf_tax_and_stub() -> None:
    payouts = [0.67, 0.67]
    r = 0.0065
    tax = 0.315
    expected = (0.67 / 1.0065 + 0.67 / 1.0065**2) * (1 - tax) + 0.08 * (1 - tax)
    assert discounted_cash_flow(payouts, r, tax, 0.08) == pytest.approx(expected)
    assert discounted_cash_flow(payouts, r, 0.0, 0.08) >= discounted_cash_flow(payouts, r, tax, 0.08)


def test_dcf_rejects_invalid_tax() -> None:
    with pytest.raises(ValueError):
        discounted_cash_flow([1.0], 0.01, tax_rate=1.0)
