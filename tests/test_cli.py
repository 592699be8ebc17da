"""Tests for the gesture-features CLI."""

import json

import pytest
from typer.testing import CliRunner

from gesture_features.cli import app

runner = CliRunner()


def _write_gesture(path, strokes):
    path.write_text(json.dumps({"strokes": strokes}))
    return str(path)


@pytest.fixture
def cross_file(tmp_path):
    return _write_gesture(tmp_path / "cross.json", [[[0, 5], [10, 5]], [[5, 0], [5, 10]]])


@pytest.fixture
def zigzag_file(tmp_path):
    return _write_gesture(tmp_path / "zigzag.json", [[[0, 0], [4, 8], [8, 0], [12, 8]]])


class TestFeaturize:
    def test_spatial(self, cross_file):
        result = runner.invoke(app, ["featurize", cross_file, "--grid-size", "4"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["kind"] == "spatial"
        assert len(data["vector"]) == 16
        assert all(0.0 <= v <= 1.0 for v in data["vector"])

    def test_sequence(self, zigzag_file):
        result = runner.invoke(app, ["featurize", zigzag_file, "--kind", "sequence"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data["vector"]) == 32
        assert data["vector"][:2] == [0.0, 0.0]

    def test_config_file(self, cross_file, tmp_path):
        cfg = tmp_path / "features.yml"
        cfg.write_text("grid_size: 5\n")
        result = runner.invoke(app, ["featurize", cross_file, "--config", str(cfg)])
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)["vector"]) == 25

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["featurize", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"points": []}')
        result = runner.invoke(app, ["featurize", str(path)])
        assert result.exit_code == 1

    def test_flat_gesture_fails(self, tmp_path):
        path = _write_gesture(tmp_path / "line.json", [[[0, 0], [10, 0]]])
        result = runner.invoke(app, ["featurize", path])
        assert result.exit_code == 1

    def test_bad_grid_size(self, cross_file):
        result = runner.invoke(app, ["featurize", cross_file, "--grid-size", "0"])
        assert result.exit_code == 1

    def test_unknown_log_level(self, cross_file):
        result = runner.invoke(app, ["featurize", cross_file, "--log-level", "loud"])
        assert result.exit_code == 1
        assert "Unknown log level" in result.output


class TestOrient:
    def test_diagonal(self, tmp_path):
        path = _write_gesture(tmp_path / "diag.json", [[[0, 0], [5, 5], [10, 10]]])
        result = runner.invoke(app, ["orient", path])
        assert result.exit_code == 0, result.output
        box = json.loads(result.output)
        assert box["angle"] == pytest.approx(45.0)
        assert box["center_x"] == pytest.approx(5.0)


class TestCompare:
    def test_identical_is_zero(self, cross_file):
        result = runner.invoke(app, ["compare", cross_file, cross_file])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["distance"] == 0.0

    def test_cosine(self, cross_file, zigzag_file):
        result = runner.invoke(app, ["compare", cross_file, zigzag_file, "--metric", "cosine"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["metric"] == "cosine"
        assert 0.0 < data["distance"] <= 3.1416

    def test_unknown_metric(self, cross_file):
        result = runner.invoke(app, ["compare", cross_file, cross_file, "--metric", "manhattan"])
        assert result.exit_code == 1
