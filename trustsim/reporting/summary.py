"""Summary table generation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from trustsim.engine.monte_carlo import MonteCarloResult
from trustsim.engine.stats import PriceStats, break_even_price, price_statistics, years_distribution
from trustsim.utils.io import save_table

REGIMES = {"taxed": "dcf", "no_tax": "dcf_no_tax"}


@dataclass
class RegimeSummary:
    regime: str
    break_even_price: float
    stats: PriceStats


def summarize_regimes(metrics: pd.DataFrame, target_profit_probability: float, price: float) -> list[RegimeSummary]:
    """Break-even price and price statistics for the taxed and untaxed ensembles."""

    out: list[RegimeSummary] = []
    for regime, column in REGIMES.items():
        dcfs = metrics[column].to_numpy()
        out.append(
            RegimeSummary(
                regime=regime,
                break_even_price=break_even_price(dcfs, target_profit_probability),
                stats=price_statistics(dcfs, price),
            )
        )
    return out


def summary_table(metrics: pd.DataFrame, target_profit_probability: float, price: float) -> pd.DataFrame:
    """Return one row per tax regime with the headline statistics."""

    rows = []
    for item in summarize_regimes(metrics, target_profit_probability, price):
        column = REGIMES[item.regime]
        rows.append(
            {
                "regime": item.regime,
                "mean_dcf": float(metrics[column].mean()),
                "target_profit_probability": target_profit_probability,
                "break_even_price": item.break_even_price,
                "price": item.stats.price,
                "mean_margin": item.stats.mean_margin,
                "profit_probability": item.stats.profit_probability,
                "conditional_margin": item.stats.conditional_margin,
            }
        )
    return pd.DataFrame(rows)


def export_summary(
    result: MonteCarloResult, out_dir: Path, target_profit_probability: float, price: float, name: str = "summary"
) -> Path:
    table = summary_table(result.metrics, target_profit_probability, price)
    save_table(table, out_dir, name)
    save_table(years_distribution(result.years), out_dir, "years")
    return out_dir / f"{name}.csv"


__all__ = ["REGIMES", "RegimeSummary", "summarize_regimes", "summary_table", "export_summary"]
