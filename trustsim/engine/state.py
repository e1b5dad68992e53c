"""Trial state definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

import numpy as np


class TrialStatus(str, Enum):
    ACTIVE = "active"
    DEPLETED = "depleted"


@dataclass
class TrialState:
    """Container for the mutable state of one depletion trial."""

    reserves: float
    payouts: List[float] = field(default_factory=list)
    reserve_history: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.reserves < 0:
            raise ValueError(f"reserves must be non-negative, received {self.reserves}")
        self.reserve_history.append(float(self.reserves))

    @property
    def status(self) -> TrialStatus:
        return TrialStatus.ACTIVE if self.reserves > 0 else TrialStatus.DEPLETED

    @property
    def years(self) -> int:
        return len(self.payouts)

    def record(self, dividend: float, reserves: float) -> None:
        if self.status is TrialStatus.DEPLETED:
            raise RuntimeError("cannot advance a depleted trial")
        self.payouts.append(float(dividend))
        self.reserves = float(reserves)
        self.reserve_history.append(self.reserves)

    def payout_path(self) -> np.ndarray:
        return np.asarray(self.payouts, dtype=float)


__all__ = ["TrialStatus", "TrialState"]
