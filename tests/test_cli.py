import json

import pytest
from typer.testing import CliRunner

from freefall import __version__
from freefall.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_local_configs(tmp_path, monkeypatch):
    """Run from an empty directory so only packaged or built-in configs are found."""
    monkeypatch.chdir(tmp_path)


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_bodies_list():
    result = runner.invoke(app, ["bodies", "list"])
    assert result.exit_code == 0
    assert "Earth" in result.output
    assert "Moon" in result.output


def test_bodies_show_json():
    result = runner.invoke(app, ["bodies", "show", "earth", "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["name"] == "Earth"
    assert data["schwarzschild_radius"] == pytest.approx(8.87e-3, rel=1e-3)


def test_bodies_show_unknown():
    result = runner.invoke(app, ["bodies", "show", "vulcan"])
    assert result.exit_code == 1


def test_fall_time():
    result = runner.invoke(app, ["fall", "time", "10"])
    assert result.exit_code == 0
    assert "1.428571" in result.output


def test_fall_distance():
    result = runner.invoke(app, ["fall", "distance", "1", "10"])
    assert result.exit_code == 0
    assert "4.9" in result.output


def test_fall_initial_height_planet():
    result = runner.invoke(app, ["fall", "initial-height", "1", "0", "--model", "planet"])
    assert result.exit_code == 0
    assert "4.9" in result.output


def test_fall_time_bad_domain():
    result = runner.invoke(app, ["fall", "time", "0", "10"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_fall_points_csv(tmp_path):
    out = tmp_path / "pts.csv"
    result = runner.invoke(app, ["fall", "points", "10", "-n", "4", "-o", str(out)])
    assert result.exit_code == 0
    lines = out.read_text().splitlines()
    assert lines[0] == "time_s,altitude_m"
    assert len(lines) == 1 + 9


def test_embed_point():
    result = runner.invoke(app, ["embed", "point", "0", "0"])
    assert result.exit_code == 0
    assert "point:" in result.output
    assert "normal:" in result.output


def test_embed_walk_anchors_only(tmp_path):
    out = tmp_path / "walk.csv"
    result = runner.invoke(app, ["embed", "walk", "--max-points", "0", "-o", str(out)])
    assert result.exit_code == 0
    assert "2 points" in result.output
    assert len(out.read_text().splitlines()) == 3


def test_embed_walk_missing_config():
    result = runner.invoke(app, ["embed", "walk", "--config", "missing.yml"])
    assert result.exit_code == 1


@pytest.fixture
def moon_fall_config(tmp_path):
    path = tmp_path / "moon_fall.yml"
    path.write_text("body: moon\nfall:\n  model: constant\n")
    return path


def test_fall_time_from_config(moon_fall_config):
    result = runner.invoke(app, ["fall", "time", "10", "--config", str(moon_fall_config)])
    assert result.exit_code == 0
    # sqrt(2 * 10 / 1.62)
    assert "3.51364" in result.output


def test_fall_overrides_and_options_win_over_config(moon_fall_config):
    result = runner.invoke(app, ["fall", "time", "10", "-c", str(moon_fall_config), "--set", "fall.acceleration=20"])
    assert result.exit_code == 0
    assert "Fall time: 1 s" in result.output
    result = runner.invoke(app, ["fall", "time", "10", "-c", str(moon_fall_config), "--body", "earth"])
    assert result.exit_code == 0
    assert "1.428571" in result.output


def test_fall_rejects_bad_config_values(moon_fall_config):
    result = runner.invoke(app, ["fall", "time", "10", "-c", str(moon_fall_config), "--set", "fall.model=rocket"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_run_log_file(tmp_path):
    log = tmp_path / "logs" / "run.log"
    result = runner.invoke(app, ["--log-file", str(log), "embed", "walk", "--max-points", "0"])
    assert result.exit_code == 0
    text = log.read_text()
    assert "Run log opened" in text
    assert "Walking 0 points on earth" in text


def test_run_log_json(tmp_path):
    log = tmp_path / "run.jsonl"
    result = runner.invoke(app, ["--log-file", str(log), "--log-json", "embed", "walk", "--max-points", "0"])
    assert result.exit_code == 0
    records = [json.loads(line) for line in log.read_text().splitlines()]
    messages = [r["record"]["message"] for r in records]
    assert "Walking 0 points on earth" in messages
