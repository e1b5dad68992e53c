"""Configuration models and loaders for trustsim."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, model_validator


class MetaParams(BaseModel):
    name: str = "nrt"
    description: str | None = None
    version: str | None = None


class CurrentYearParams(BaseModel):
    """Estimate for the year in progress, built from interim filings."""

    sales_change: float = Field(
        -0.10, gt=-1.0, description="Change in sales versus the last full year (fraction)"
    )
    quarterly_dividends: List[float] = Field(
        default_factory=lambda: [0.08, 0.11, 0.11, 0.08],
        min_length=1,
        description="Dividends per unit for each quarter of the current year, paid or estimated",
    )

    @model_validator(mode="after")
    def validate_dividends(self) -> "CurrentYearParams":
        if any(div < 0 for div in self.quarterly_dividends):
            raise ValueError("Quarterly dividends must be non-negative")
        return self


class TrustParams(BaseModel):
    """Reserve position and historical extraction record of the trust."""

    reserves_start: float = Field(..., gt=0, description="Net reserves at the start of the current year")
    sales_history: List[float] = Field(..., min_length=1, description="Net sales per historical year")
    dividend_history: List[float] = Field(..., min_length=1, description="Dividend per unit per historical year")
    current_year: Optional[CurrentYearParams] = Field(default_factory=CurrentYearParams)

    @model_validator(mode="after")
    def validate_history(self) -> "TrustParams":
        if len(self.sales_history) != len(self.dividend_history):
            raise ValueError("sales_history and dividend_history must have the same length")
        if any(sale <= 0 for sale in self.sales_history):
            raise ValueError("Historical sales must be strictly positive")
        if any(div < 0 for div in self.dividend_history):
            raise ValueError("Historical dividends must be non-negative")
        return self

    @property
    def point_count(self) -> int:
        return len(self.sales_history) + (1 if self.current_year is not None else 0)


class SamplingParams(BaseModel):
    """Probability of sampling each historical data point."""

    weights: List[float] = Field(
        default_factory=lambda: [0.1, 0.1, 0.1, 0.5, 0.2],
        min_length=1,
        description="Unnormalised weights, one per data point (history first, current year last)",
    )

    @model_validator(mode="after")
    def validate_weights(self) -> "SamplingParams":
        if any(w < 0 for w in self.weights):
            raise ValueError("Sampling weights must be non-negative")
        if sum(self.weights) <= 0:
            raise ValueError("Sampling weights must have a positive sum")
        return self


class TaxParams(BaseModel):
    """Personal tax components applied to distributions."""

    federal: float = Field(0.15, ge=0, le=1, description="Federal income tax bracket")
    net_investment: float = Field(0.038, ge=0, le=1, description="Net investment income tax")
    state: float = Field(0.088, ge=0, le=1)
    local: float = Field(0.039, ge=0, le=1)

    @property
    def combined(self) -> float:
        return self.federal + self.net_investment + self.state + self.local

    @model_validator(mode="after")
    def validate_combined(self) -> "TaxParams":
        if self.combined >= 1.0:
            raise ValueError("Combined tax rate must be below 1")
        return self


class ValuationParams(BaseModel):
    """Discounting inputs."""

    discount_rate: float = Field(0.0065, gt=-1.0, description="Individual risk-free rate per year")
    tax: TaxParams = Field(default_factory=TaxParams)
    stub_dividend: Optional[float] = Field(
        None, ge=0, description="Already declared dividend added un-discounted; defaults to the last quarter"
    )


class SimulationParams(BaseModel):
    """Monte Carlo settings."""

    ensemble_size: int = Field(10_000, ge=1, description="Number of simulated trials")
    seed: int = Field(1337, ge=0)


class ReportParams(BaseModel):
    """Inputs for the summary statistics."""

    target_profit_probability: float = Field(0.95, gt=0, lt=1)
    market_price: float = Field(3.03, gt=0, description="Observed price per unit used for comparison")
    histogram_bins: int = Field(20, ge=1)


class Config(BaseModel):
    """Top-level configuration model."""

    meta: MetaParams = Field(default_factory=MetaParams)
    trust: TrustParams
    sampling: SamplingParams = Field(default_factory=SamplingParams)
    valuation: ValuationParams = Field(default_factory=ValuationParams)
    simulation: SimulationParams = Field(default_factory=SimulationParams)
    report: ReportParams = Field(default_factory=ReportParams)

    @model_validator(mode="after")
    def validate_weight_count(self) -> "Config":
        expected = self.trust.point_count
        if len(self.sampling.weights) != expected:
            raise ValueError(
                f"sampling.weights has {len(self.sampling.weights)} entries, expected {expected} "
                "(one per historical year plus the current year)"
            )
        return self


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(base)
    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_update(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config_dict() -> Dict[str, Any]:
    """Return the default configuration as a dictionary."""

    default = Config(
        meta=MetaParams(name="nrt", description="North European Oil Royalty Trust, 2020-09-12"),
        trust=TrustParams(
            reserves_start=6429.7,
            sales_history=[1392, 1330, 1066, 1215],
            dividend_history=[0.67, 0.76, 0.70, 0.82],
        ),
    )
    return default.model_dump()


def load_config(path: str | Path | None = None, overrides: Optional[Dict[str, Any]] = None) -> Config:
    """Load configuration from YAML and merge with defaults."""

    base_dict = default_config_dict()
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as handle:
            user_data = yaml.safe_load(handle) or {}
        if not isinstance(user_data, dict):
            raise ValueError(f"Config YAML {path} must map to an object")
        base_dict = _deep_update(base_dict, user_data)
    if overrides:
        base_dict = _deep_update(base_dict, overrides)
    config = Config.model_validate(base_dict)
    return config


__all__ = [
    "Config",
    "MetaParams",
    "TrustParams",
    "CurrentYearParams",
    "SamplingParams",
    "TaxParams",
    "ValuationParams",
    "SimulationParams",
    "ReportParams",
    "default_config_dict",
    "load_config",
]
