from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from trustsim.config import load_config
from trustsim.data.history import build_inputs, current_year_point
from trustsim.utils.validation import validate_config

BASE_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "base.yaml"


def test_defaults_match_base_yaml() -> None:
    assert load_config() == load_config(BASE_CONFIG)


def test_default_values() -> None:
    cfg = load_config(BASE_CONFIG)
    validate_config(cfg)
    assert cfg.simulation.ensemble_size == 10_000
    assert cfg.simulation.seed == 1337
    assert cfg.valuation.tax.combined == pytest.approx(0.315)
    assert cfg.trust.point_count == 5


def test_current_year_point() -> None:
    sales, dividend = current_year_point([1392, 1330, 1066, 1215], -0.10, [0.08, 0.11, 0.11, 0.08])
    assert sales == pytest.approx(1093.5)
    assert dividend == pytest.approx(0.38)


def test_build_inputs_books_current_year() -> None:
    inputs = build_inputs(load_config(BASE_CONFIG))
    assert inputs.dataset.historical_point_count == 5
    assert inputs.dataset.sales[-1] == pytest.approx(1093.5)
    assert inputs.dataset.dividends[-1] == pytest.approx(0.38)
    assert inputs.dataset.probs.sum() == pytest.approx(1.0)
    assert inputs.dataset.probs[3] == pytest.approx(0.5)
    assert inputs.initial_reserves == pytest.approx(6429.7 - 1093.5)
    assert inputs.stub_dividend == pytest.approx(0.08)
    assert inputs.tax_rate == pytest.approx(0.315)


def test_history_only_dataset() -> None:
    cfg = load_config(
        overrides={
            "trust": {"current_year": None, "reserves_start": 2784},
            "sampling": {"weights": [1, 0, 0, 0]},
        }
    )
    inputs = build_inputs(cfg)
    assert inputs.dataset.historical_point_count == 4
    assert inputs.initial_reserves == pytest.approx(2784)
    assert inputs.stub_dividend == 0.0


def test_explicit_stub_wins() -> None:
    cfg = load_config(overrides={"valuation": {"stub_dividend": 0.2}})
    assert build_inputs(cfg).stub_dividend == pytest.approx(0.2)


def test_yaml_overrides_merge(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump({"report": {"market_price": 2.5}, "simulation": {"seed": 7}}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.report.market_price == 2.5
    assert cfg.simulation.seed == 7
    assert cfg.report.target_profit_probability == 0.95
    assert cfg.trust.reserves_start == pytest.approx(6429.7)


@pytest.mark.parametrize(
    "overrides",
    [
        {"sampling": {"weights": [0.5, 0.5]}},
        {"sampling": {"weights": [0, 0, 0, 0, 0]}},
        {"trust": {"sales_history": [1392, 0, 1066, 1215]}},
        {"trust": {"dividend_history": [0.67, 0.76]}},
        {"valuation": {"tax": {"federal": 0.9, "state": 0.2}}},
        {"report": {"target_profit_probability": 1.0}},
        {"simulation": {"ensemble_size": 0}},
    ],
)
def test_invalid_configs_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        load_config(overrides=overrides)


def test_non_mapping_yaml_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
