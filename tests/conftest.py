import numpy as np
import pytest

from trustsim.data.history import HistoricalDataset


@pytest.fixture
def nrt_dataset() -> HistoricalDataset:
    return HistoricalDataset(
        sales=np.array([1392, 1330, 1066, 1215, 1093.5]),
        dividends=np.array([0.67, 0.76, 0.70, 0.82, 0.38]),
        probs=np.array([0.1, 0.1, 0.1, 0.5, 0.2]),
    )


@pytest.fixture
def point_mass_dataset() -> HistoricalDataset:
    return HistoricalDataset(
        sales=np.array([1392, 1330, 1066, 1215, 1093.5]),
        dividends=np.array([0.67, 0.76, 0.70, 0.82, 0.38]),
        probs=np.array([1.0, 0.0, 0.0, 0.0, 0.0]),
    )
