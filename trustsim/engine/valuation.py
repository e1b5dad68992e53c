"""Present value and per-trial discounted cash flow."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def present_value(cf: Sequence[float], r: float) -> np.ndarray:
    """Discount a future cash flow, one entry per year, at rate ``r``.

    Entry ``k`` (1-indexed) is divided by ``(1 + r) ** k``.
    """

    if r <= -1:
        raise ValueError("discount rate must be greater than -1")
    flows = np.asarray(cf, dtype=float)
    periods = np.arange(1, flows.size + 1)
    return flows / (1 + r) ** periods


def discounted_cash_flow(payouts: Sequence[float], r: float, tax_rate: float = 0.0, stub: float = 0.0) -> float:
    """Total present value of ``payouts`` after tax, plus an un-discounted stub dividend."""

    if not 0 <= tax_rate < 1:
        raise ValueError(f"tax_rate must lie in [0, 1), received {tax_rate}")
    keep = 1 - tax_rate
    return float(np.sum(present_value(np.asarray(payouts, dtype=float) * keep, r)) + stub * keep)


__all__ = ["present_value", "discounted_cash_flow"]
