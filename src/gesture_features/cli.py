"""gesture-features CLI - inspect the features of gestures stored as JSON.

Usage:
    gesture-features featurize   - Print a gesture's feature vector
    gesture-features orient      - Print a gesture's oriented bounding box
    gesture-features compare     - Distance between two gestures

Gesture files look like:
    {"strokes": [[[0, 0], [10, 0], [10, 10]], [[0, 10], [10, 0]]]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

try:
    import typer
except ImportError:
    raise ImportError("typer is required for CLI. Install with: pip install typer")

from gesture_features.config import FeatureConfig
from gesture_features.distance import cosine_distance, euclidean_distance
from gesture_features.featurizer import GestureFeaturizer
from gesture_features.geometry import Gesture, InvalidInputError

app = typer.Typer(
    name="gesture-features",
    help="Geometric feature extraction for freehand gestures.",
    add_completion=False,
)


def _load_gesture(path: str) -> Gesture:
    p = Path(path)
    if not p.exists():
        typer.echo(f"❌ Gesture file not found: {path}", err=True)
        raise typer.Exit(1)
    try:
        data = json.loads(p.read_text())
        return Gesture.from_lists(data["strokes"])
    except (KeyError, TypeError, ValueError) as e:
        typer.echo(f"❌ Invalid gesture file {path}: {e}", err=True)
        raise typer.Exit(1)


def _make_featurizer(config_path: Optional[str], grid_size: Optional[int], log_level: str) -> GestureFeaturizer:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        typer.echo(f"❌ Unknown log level: {log_level}", err=True)
        raise typer.Exit(1)
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")
    try:
        config = FeatureConfig.from_yaml(config_path) if config_path else FeatureConfig()
        if grid_size is not None:
            config.grid_size = grid_size
            config.validate()
    except (OSError, InvalidInputError) as e:
        typer.echo(f"❌ Bad configuration: {e}", err=True)
        raise typer.Exit(1)
    return GestureFeaturizer(config)


@app.command()
def featurize(
    gesture_file: str = typer.Argument(..., help="Path to gesture JSON file"),
    kind: str = typer.Option("spatial", help="Feature kind: spatial or sequence"),
    grid_size: Optional[int] = typer.Option(None, help="Override the rasterization grid size"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to feature config YAML"),
    log_level: str = typer.Option("warning", help="Log level"),
):
    """Print the spatial or sequential feature vector of a gesture."""
    featurizer = _make_featurizer(config, grid_size, log_level)
    gesture = _load_gesture(gesture_file)
    try:
        inst = featurizer.instance(gesture, kind=kind)
    except InvalidInputError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps({
        "kind": kind,
        "magnitude": inst.magnitude,
        "vector": [round(float(v), 6) for v in inst.vector],
    }))


@app.command()
def orient(
    gesture_file: str = typer.Argument(..., help="Path to gesture JSON file"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to feature config YAML"),
    log_level: str = typer.Option("warning", help="Log level"),
):
    """Print the oriented bounding box of a gesture."""
    featurizer = _make_featurizer(config, None, log_level)
    gesture = _load_gesture(gesture_file)
    try:
        box = featurizer.oriented_bbox(gesture)
    except InvalidInputError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(box.to_dict()))


@app.command()
def compare(
    first: str = typer.Argument(..., help="First gesture JSON file"),
    second: str = typer.Argument(..., help="Second gesture JSON file"),
    metric: str = typer.Option("euclidean", help="Distance metric: euclidean or cosine"),
    grid_size: Optional[int] = typer.Option(None, help="Override the rasterization grid size"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to feature config YAML"),
    log_level: str = typer.Option("warning", help="Log level"),
):
    """Distance between the spatial features of two gestures."""
    if metric not in ("euclidean", "cosine"):
        typer.echo(f"❌ Unknown metric: {metric}", err=True)
        raise typer.Exit(1)

    featurizer = _make_featurizer(config, grid_size, log_level)
    g1, g2 = _load_gesture(first), _load_gesture(second)
    try:
        a = featurizer.instance(g1, label=Path(first).stem)
        b = featurizer.instance(g2, label=Path(second).stem)
        if metric == "cosine":
            distance = cosine_distance(a, b)
        else:
            distance = euclidean_distance(a.vector, b.vector)
    except InvalidInputError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps({"metric": metric, "distance": distance}))


if __name__ == "__main__":
    app()
