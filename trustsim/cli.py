"""Command line interface for trustsim."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from trustsim import get_version
from trustsim.config import Config, ReportParams, load_config
from trustsim.engine.monte_carlo import run_mc
from trustsim.engine.stats import entry_price_curve, years_distribution
from trustsim.reporting.plots import plot_all
from trustsim.reporting.report import build_markdown_report, save_report
from trustsim.reporting.summary import export_summary, summary_table
from trustsim.utils.io import load_result_tables, timestamped_dir
from trustsim.utils.validation import validate_config

app = typer.Typer(help="Royalty trust depletion and valuation CLI")
console = Console()


def _resolve_output(base: Path, scenario: str) -> Path:
    base.mkdir(parents=True, exist_ok=True)
    return timestamped_dir(base, scenario)


def _with_overrides(cfg: Config, price: Optional[float], target: Optional[float]) -> Config:
    update = {}
    if price is not None:
        update["market_price"] = price
    if target is not None:
        update["target_profit_probability"] = target
    if not update:
        return cfg
    report = ReportParams.model_validate({**cfg.report.model_dump(), **update})
    return cfg.model_copy(update={"report": report})


def _print_summary(cfg: Config, summary) -> None:
    table = Table(title=f"{cfg.meta.name}: price {cfg.report.market_price:.2f}")
    table.add_column("Regime")
    table.add_column(f"Entry @ {cfg.report.target_profit_probability:.0%}", justify="right")
    table.add_column("Mean margin", justify="right")
    table.add_column("P(profit)", justify="right")
    table.add_column("Margin | profit", justify="right")
    for _, row in summary.iterrows():
        table.add_row(
            str(row["regime"]),
            f"{row['break_even_price']:.3f}",
            f"{row['mean_margin']:.2%}",
            f"{row['profit_probability']:.2%}",
            f"{row['conditional_margin']:.2%}",
        )
    console.print(table)


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML"),
    out: Path = typer.Option(Path("results/mc"), help="Output directory"),
    draws: Optional[int] = typer.Option(None, min=1, help="Override the number of trials"),
    seed: Optional[int] = typer.Option(None, min=0, help="Override the random seed"),
    price: Optional[float] = typer.Option(None, min=0.0, help="Override the comparison market price"),
    target: Optional[float] = typer.Option(None, min=0.0, max=1.0, help="Override the target probability of profit"),
) -> None:
    """Run the Monte Carlo valuation and persist tables, plots and a report."""

    cfg = _with_overrides(load_config(config), price, target)
    validate_config(cfg)
    scenario_name = cfg.meta.name or (config.stem if config else "base")
    out_dir = _resolve_output(out, scenario_name)
    console.print(f"[bold cyan]Running Monte Carlo[/bold cyan] -> {out_dir}")
    result = run_mc(cfg, ensemble_size=draws, seed=seed, out_dir=out_dir)
    export_summary(result, out_dir, cfg.report.target_profit_probability, cfg.report.market_price)
    plots = plot_all(result.metrics, out_dir, scenario_name, cfg.report.market_price, cfg.report.histogram_bins)
    report_path = save_report(build_markdown_report(cfg, result, plots), out_dir / "report.md")
    _print_summary(cfg, summary_table(result.metrics, cfg.report.target_profit_probability, cfg.report.market_price))
    console.print(years_distribution(result.years).to_string(index=False))
    console.print(f"Saved report to {report_path}")


@app.command()
def curve(
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML"),
    targets: List[float] = typer.Option([0.5, 0.75, 0.9, 0.95, 0.99], "--target", help="Target probabilities of profit"),
    draws: Optional[int] = typer.Option(None, min=1, help="Override the number of trials"),
) -> None:
    """Print the break-even entry price for several target probabilities of profit."""

    cfg = load_config(config)
    validate_config(cfg)
    result = run_mc(cfg, ensemble_size=draws)
    table = entry_price_curve(result.dcfs, targets)
    table["entry_price_no_tax"] = entry_price_curve(result.dcfs_no_tax, targets)["entry_price"]
    console.print(table.to_string(index=False, float_format=lambda v: f"{v:.3f}"))


@app.command()
def plot(
    result: Path = typer.Option(..., exists=True, file_okay=False, help="Result directory"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Configuration YAML"),
    price: Optional[float] = typer.Option(None, min=0.0, help="Override the comparison market price"),
) -> None:
    """Regenerate histograms from a stored ``mc_metrics`` table."""

    cfg = _with_overrides(load_config(config), price, None)
    metrics = load_result_tables(result)["mc_metrics"]
    for path in plot_all(metrics, result, result.parent.name or cfg.meta.name, cfg.report.market_price, cfg.report.histogram_bins):
        console.print(f"Saved {path}")


@app.command()
def validate(config: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Validate configuration without running simulation."""

    cfg = load_config(config)
    validate_config(cfg)
    console.print("Configuration validated successfully")


@app.command()
def version() -> None:
    """Print the installed package version."""

    console.print(get_version())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
