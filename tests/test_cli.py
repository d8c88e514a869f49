import pytest
import yaml

from event_model import cli
from logging_config import reset_logging


@pytest.fixture(autouse=True)
def isolated_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def scenario(tmp_path):
    path = tmp_path / "scenario.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "date_range": {"start": "2024-01-01", "end": "2024-03-31"},
                "seed": 3,
                "rates": {"hire_rate": 0.3, "voluntary_termination_rate": 0.1, "promotion_rate": 0.1},
            }
        )
    )
    return path


def test_cli_runs_and_writes_tables(scenario, tmp_path, capsys):
    out = tmp_path / "out"
    code = cli.main(
        ["--config", str(scenario), "--output-dir", str(out), "--format", "csv", "--log-dir", str(tmp_path / "logs")]
    )
    assert code == 0
    assert (out / "daily_events.csv").exists()
    assert (out / "employees.csv").exists()
    captured = capsys.readouterr().out
    assert "Scenario: scenario (seed 3)" in captured
    assert "Days simulated: 91" in captured
    assert (tmp_path / "logs" / "combined.log").exists()


def test_cli_overrides(scenario, tmp_path, capsys):
    code = cli.main(
        ["--config", str(scenario), "--end", "2024-01-10", "--seed", "8", "--log-dir", str(tmp_path / "logs")]
    )
    assert code == 0
    captured = capsys.readouterr().out
    assert "seed 8" in captured
    assert "Days simulated: 10" in captured


def test_cli_bad_range_exits_with_config_error(scenario, tmp_path, capsys):
    code = cli.main(
        ["--config", str(scenario), "--start", "2024-05-01", "--log-dir", str(tmp_path / "logs")]
    )
    assert code == cli.EXIT_BAD_CONFIG
    assert "after end date" in capsys.readouterr().err


def test_cli_missing_config(tmp_path, capsys):
    code = cli.main(["--config", str(tmp_path / "missing.yaml"), "--log-dir", str(tmp_path / "logs")])
    assert code == cli.EXIT_BAD_CONFIG
    assert "not found" in capsys.readouterr().err
