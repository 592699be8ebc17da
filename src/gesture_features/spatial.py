"""Spatial featurization: normalize a gesture into a square grid and splat its points.

Each stroke is resampled to a fixed number of points, mapped into grid
coordinates with a similarity transform that fits the gesture's bounding box
into the grid, and splatted bilinearly. A cell keeps the largest weight any
point gave it, so overlapping strokes never push a cell above 1.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from gesture_features.config import SEQUENCE_SAMPLE_SIZE
from gesture_features.geometry import Gesture, InvalidInputError, Rect, Transform, as_points
from gesture_features.sequential import resample

logger = logging.getLogger("gesture_features.spatial")


def normalization_transform(bbox: Rect, grid_size: int) -> Transform:
    """Similarity transform that centers ``bbox`` in a ``grid_size`` square grid.

    The scale is the smaller of the two per-axis scales, so aspect ratio is
    preserved and the whole box fits. The box center lands on cell
    ``grid_size // 2``, so odd grids put it on a cell corner rather than
    the exact middle.
    """
    if bbox.width <= 0 or bbox.height <= 0:
        raise InvalidInputError(
            f"Gesture bounding box must have positive area, got {bbox.width}x{bbox.height}"
        )

    scale = min(grid_size / bbox.width, grid_size / bbox.height)
    trans = Transform.scale(scale)
    trans = trans.pre_concat(Transform.translate(-bbox.center_x, -bbox.center_y))
    return trans.post_concat(Transform.translate(grid_size // 2, grid_size // 2))


def splat(points, grid_size: int, grid: Optional[np.ndarray] = None) -> np.ndarray:
    """Bilinearly splat grid-space points into a (grid_size, grid_size) array.

    Each point touches the cells at floor/ceil of its coordinates. Cells outside
    the grid are skipped. Values combine by maximum, not by sum.

    Args:
        points: Points in grid coordinates, flat or shape (N, 2).
        grid_size: Edge length of the grid.
        grid: Optional existing grid to accumulate into (modified in place).

    Returns:
        The grid, indexed [row=y, col=x].
    """
    if grid_size < 1:
        raise InvalidInputError(f"grid_size must be >= 1, got {grid_size}")
    if grid is None:
        grid = np.zeros((grid_size, grid_size), dtype=np.float64)

    pts = as_points(points)
    if len(pts) == 0:
        return grid

    x, y = pts[:, 0], pts[:, 1]
    x_floor, y_floor = np.floor(x), np.floor(y)
    x_ceil, y_ceil = np.ceil(x), np.ceil(y)

    corners = [
        (x_floor, y_floor, (1 - x + x_floor) * (1 - y + y_floor)),
        (x_ceil, y_floor, (1 - x_ceil + x) * (1 - y + y_floor)),
        (x_floor, y_ceil, (1 - x + x_floor) * (1 - y_ceil + y)),
        (x_ceil, y_ceil, (1 - x_ceil + x) * (1 - y_ceil + y)),
    ]
    for cx, cy, weight in corners:
        inside = (cx >= 0) & (cx < grid_size) & (cy >= 0) & (cy < grid_size)
        if not inside.any():
            continue
        rows = cy[inside].astype(np.intp)
        cols = cx[inside].astype(np.intp)
        np.maximum.at(grid, (rows, cols), weight[inside])

    return grid


def rasterize(
    gesture: Gesture,
    grid_size: int,
    sample_size: int = SEQUENCE_SAMPLE_SIZE,
) -> np.ndarray:
    """Rasterize a gesture into a flattened row-major ``grid_size**2`` vector.

    Args:
        gesture: Gesture whose bounding box spans a non-zero area.
        grid_size: Edge length of the square grid.
        sample_size: Points per stroke after resampling.

    Returns:
        Spatial feature vector with entries in [0, 1].
    """
    if grid_size < 1:
        raise InvalidInputError(f"grid_size must be >= 1, got {grid_size}")

    trans = normalization_transform(gesture.bounding_box, grid_size)
    grid = np.zeros((grid_size, grid_size), dtype=np.float64)

    for stroke in gesture.strokes:
        pts = trans.map_points(resample(stroke, sample_size))
        splat(pts, grid_size, grid)

    logger.debug(
        "Rasterized %d strokes into %dx%d grid (%d cells set)",
        gesture.stroke_count, grid_size, grid_size, int(np.count_nonzero(grid)),
    )
    return grid.reshape(-1)
