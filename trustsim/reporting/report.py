"""Markdown reporting for Monte Carlo valuation results."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from trustsim.config import Config
from trustsim.engine.monte_carlo import MonteCarloResult
from trustsim.engine.stats import entry_price_curve, quantiles, years_distribution
from trustsim.reporting.summary import summarize_regimes

_CURVE_TARGETS = (0.5, 0.75, 0.9, 0.95, 0.99)


def _pct(value: float) -> str:
    return f"{value:.1%}" if pd.notna(value) else "n/a"


def _inputs_section(result: MonteCarloResult) -> list[str]:
    inputs = result.inputs
    table = inputs.dataset.to_frame()
    table.insert(0, "point", range(1, len(table) + 1))
    return [
        "## Inputs",
        f"- Initial reserves: {inputs.initial_reserves:,.1f}",
        f"- Discount rate: {inputs.discount_rate:.2%}",
        f"- Combined tax rate: {inputs.tax_rate:.1%}",
        f"- Stub dividend: {inputs.stub_dividend:.2f}",
        f"- Trials: {result.ensemble_size:,} (seed {result.seed})",
        "",
        table.to_markdown(index=False, floatfmt=".3f"),
        "",
    ]


def _regime_section(config: Config, result: MonteCarloResult) -> list[str]:
    target = config.report.target_profit_probability
    price = config.report.market_price
    lines = [f"## Valuation at price {price:.2f}", ""]
    for item in summarize_regimes(result.metrics, target, price):
        stats = item.stats
        lines.extend(
            [
                f"### {'After tax' if item.regime == 'taxed' else 'Before tax'}",
                f"- Entry price for {target:.0%} probability of profit: {item.break_even_price:.2f}",
                f"- Expected margin: {_pct(stats.mean_margin)}",
                f"- Probability of profit: {_pct(stats.profit_probability)}",
                f"- Expected margin given profit: {_pct(stats.conditional_margin)}",
                "",
            ]
        )
    return lines


def _distribution_section(result: MonteCarloResult, targets: Sequence[float]) -> list[str]:
    percentiles = pd.DataFrame(
        {
            "after_tax": quantiles(result.dcfs),
            "before_tax": quantiles(result.dcfs_no_tax),
        }
    ).rename_axis("percentile").reset_index()
    curve = entry_price_curve(result.dcfs, targets)
    curve["entry_price_no_tax"] = entry_price_curve(result.dcfs_no_tax, targets)["entry_price"]
    years = years_distribution(result.years)
    return [
        "## Distribution",
        percentiles.to_markdown(index=False, floatfmt=".3f"),
        "",
        "### Entry price by target probability of profit",
        curve.to_markdown(index=False, floatfmt=".3f"),
        "",
        "### Years until depletion",
        years.to_markdown(index=False, floatfmt=".3f"),
        "",
    ]


def build_markdown_report(
    config: Config,
    result: MonteCarloResult,
    plots: Iterable[Path] = (),
    targets: Sequence[float] = _CURVE_TARGETS,
) -> str:
    lines = [f"# Valuation report: {config.meta.name}", ""]
    if config.meta.description:
        lines.extend([config.meta.description, ""])
    lines.extend(_inputs_section(result))
    lines.extend(_regime_section(config, result))
    lines.extend(_distribution_section(result, targets))
    plot_list = list(plots)
    if plot_list:
        lines.append("## Charts")
        for path in plot_list:
            lines.append(f"![{path.stem}]({path.name})")
        lines.append("")
    return "\n".join(lines)


def save_report(markdown: str, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(markdown, encoding="utf-8")
    return path


__all__ = ["build_markdown_report", "save_report"]
