"""Plotting utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def _ensure_out(out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


def plot_dcf_histogram(
    dcfs: Sequence[float], price: float, out_path: Path, title: str, bins: int = 20
) -> Path:
    """Histogram of discounted cash flows with the market price marked."""

    _ensure_out(out_path.parent)
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.hist(np.asarray(dcfs, dtype=float), bins=bins, color="tab:blue", alpha=0.8, label="Discounted cash flow")
    ax.axvline(price, color="red", label=f"Price {price:,.2f}")
    ax.set_title(title)
    ax.set_xlabel("Present value per unit")
    ax.set_ylabel("Trials")
    ax.legend()
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
    return out_path


def plot_all(metrics: pd.DataFrame, out_dir: Path, scenario: str, price: float, bins: int = 20) -> list[Path]:
    out_dir = _ensure_out(out_dir)
    return [
        plot_dcf_histogram(metrics["dcf"], price, out_dir / f"{scenario}_dcf.png", f"DCF after tax - {scenario}", bins),
        plot_dcf_histogram(
            metrics["dcf_no_tax"], price, out_dir / f"{scenario}_dcf_no_tax.png", f"DCF before tax - {scenario}", bins
        ),
    ]


__all__ = ["plot_dcf_histogram", "plot_all"]
