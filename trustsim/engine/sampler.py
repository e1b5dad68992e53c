"""Weighted resampling of historical data points."""

from __future__ import annotations

import numpy as np
from numpy.random import Generator


class WeightedSampler:
    """Draw indices from a fixed categorical distribution.

    Draws go through the cumulative weights so that zero-weight indices are
    never selected.
    """

    def __init__(self, probs: np.ndarray, rng: Generator) -> None:
        probs = np.asarray(probs, dtype=float)
        if probs.ndim != 1 or probs.size == 0:
            raise ValueError("probs must be a non-empty 1-D array")
        if np.any(probs < 0) or probs.sum() <= 0:
            raise ValueError("probs must be non-negative with a positive sum")
        self.probs = probs / probs.sum()
        self._cdf = np.cumsum(self.probs)
        self._cdf[-1] = 1.0
        self.rng = rng

    @property
    def size(self) -> int:
        return self.probs.size

    def draw(self) -> int:
        """Return one index."""

        return int(np.searchsorted(self._cdf, self.rng.random(), side="right"))

    def draw_many(self, size: int) -> np.ndarray:
        """Return ``size`` independent indices."""

        if size < 0:
            raise ValueError("size must be non-negative")
        return np.searchsorted(self._cdf, self.rng.random(size), side="right")


__all__ = ["WeightedSampler"]
