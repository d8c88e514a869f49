from datetime import date

import pytest
import yaml

from event_model.config.loaders import (
    ConfigLoadError,
    deep_merge,
    load_scenario,
    load_simulation_config,
    load_yaml_config,
)
from event_model.config.models import SimulationConfigError


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


BASE = {
    "date_range": {"start": "2024-01-01", "end": "2024-12-31"},
    "seed": 1,
    "rates": {"hire_rate": 0.2, "promotion_rate": 0.1},
    "seasonality": {"hires": "sine", "terminations": "holiday"},
}


def test_deep_merge():
    merged = deep_merge({"a": 1, "n": {"k": 1, "j": 2}}, {"n": {"k": 5}, "b": [1]})
    assert merged == {"a": 1, "n": {"k": 5, "j": 2}, "b": [1]}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError, match="not found"):
        load_yaml_config(tmp_path / "nope.yaml")


def test_non_mapping_file(tmp_path):
    f = tmp_path / "list.yaml"
    f.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigLoadError, match="Expected a dictionary"):
        load_yaml_config(f)


def test_unparsable_file(tmp_path):
    f = tmp_path / "bad.yaml"
    f.write_text("a: [1, 2\n")
    with pytest.raises(ConfigLoadError):
        load_yaml_config(f)


def test_extends_chain(tmp_path):
    write_yaml(tmp_path / "base.yaml", BASE)
    child = write_yaml(
        tmp_path / "child.yaml",
        {"extends": "base.yaml", "seasonality": {"hires": "quarterly"}, "seed": 9},
    )
    merged = load_scenario(child)
    assert "extends" not in merged
    assert merged["seasonality"] == {"hires": "quarterly", "terminations": "holiday"}
    assert merged["seed"] == 9
    assert merged["rates"] == BASE["rates"]


def test_circular_extends(tmp_path):
    write_yaml(tmp_path / "a.yaml", {"extends": "b.yaml"})
    write_yaml(tmp_path / "b.yaml", {"extends": "a.yaml"})
    with pytest.raises(ConfigLoadError, match="Circular"):
        load_scenario(tmp_path / "a.yaml")


def test_missing_parent(tmp_path):
    f = write_yaml(tmp_path / "orphan.yaml", {"extends": "ghost.yaml"})
    with pytest.raises(ConfigLoadError, match="ghost.yaml"):
        load_scenario(f)


def test_load_simulation_config_with_overrides(tmp_path):
    f = write_yaml(tmp_path / "scenario.yaml", BASE)
    cfg = load_simulation_config(f, overrides={"seed": 77, "date_range": {"end": "2024-06-30"}})
    assert cfg.scenario_name == "scenario"
    assert cfg.seed == 77
    assert cfg.date_range.start == date(2024, 1, 1)
    assert cfg.date_range.end == date(2024, 6, 30)
    assert cfg.seasonality.terminations == "holiday"


def test_none_overrides_ignored(tmp_path):
    f = write_yaml(tmp_path / "scenario.yaml", BASE)
    assert load_simulation_config(f, overrides={"seed": None}).seed == 1


def test_flat_dates_can_be_overridden(tmp_path):
    data = {"start_date": "2024-01-01", "end_date": "2024-12-31"}
    f = write_yaml(tmp_path / "flat.yaml", data)
    cfg = load_simulation_config(f, overrides={"date_range": {"start": "2024-03-01"}})
    assert cfg.date_range.start == date(2024, 3, 1)
    assert cfg.date_range.end == date(2024, 12, 31)


def test_invalid_scenario_raises_config_error(tmp_path):
    bad = dict(BASE, rates={"hire_rate": 1.0})
    f = write_yaml(tmp_path / "bad.yaml", bad)
    with pytest.raises(SimulationConfigError, match="hire_rate"):
        load_simulation_config(f)


def test_shipped_scenarios_validate():
    from pathlib import Path

    config_dir = Path(__file__).resolve().parents[2] / "config"
    baseline = load_simulation_config(config_dir / "default.yaml")
    assert baseline.scenario_name == "baseline"
    holiday = load_simulation_config(config_dir / "holiday_push.yaml")
    assert holiday.seasonality.hires == "holiday"
    assert holiday.seasonality.terminations == "summer_slump"
    assert holiday.sampler.method == "binomial"
