"""Run trustsim Monte Carlo and persist a JSON artifact."""

from __future__ import annotations

import argparse
import hashlib
import json
from pathlib import Path
from typing import Any

import pandas as pd

from trustsim.config import Config, load_config
from trustsim.engine.monte_carlo import run_mc
from trustsim.engine.stats import quantiles
from trustsim.reporting.summary import summary_table


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run trustsim Monte Carlo and store artifact.")
    parser.add_argument("config", type=Path, nargs="?", help="Path to YAML config overrides")
    parser.add_argument("--draws", type=int, default=None, help="Number of Monte Carlo trials")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("artifacts/mc"),
        help="Output directory for Monte Carlo artifacts",
    )
    return parser.parse_args()


def _config_hash(config: Config) -> str:
    encoded = json.dumps(config.model_dump(mode="json"), sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()[:16]


def _artifact_path(base: Path, token: str) -> Path:
    base.mkdir(parents=True, exist_ok=True)
    return base / f"{token}.json"


def _print_summary(summary: pd.DataFrame) -> None:
    if summary.empty:
        print("No summary data available")
        return
    print(summary.to_string(index=False, float_format=lambda v: f"{v:.4f}"))


def main() -> None:
    args = _parse_args()
    config = load_config(args.config)
    result = run_mc(config, ensemble_size=args.draws, seed=args.seed)
    summary = summary_table(result.metrics, config.report.target_profit_probability, config.report.market_price)
    payload: dict[str, Any] = {
        "percentiles": {
            "dcf": quantiles(result.dcfs),
            "dcf_no_tax": quantiles(result.dcfs_no_tax),
        },
        "summary": summary.astype(object).where(summary.notna(), None).to_dict(orient="records"),
        "years": {str(k): int(v) for k, v in result.metrics["years"].value_counts().sort_index().items()},
        "meta": {
            "seed": result.seed,
            "draws": result.ensemble_size,
            "runtime_sec": result.runtime_sec,
            "config_hash": _config_hash(config),
        },
    }
    token = f"{payload['meta']['config_hash']}_{result.seed}_{result.ensemble_size}"
    artifact_path = _artifact_path(args.out, token)
    artifact_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print("Monte Carlo summary:")
    _print_summary(summary)
    print(f"\nArtifact saved to {artifact_path}")


if __name__ == "__main__":
    main()
