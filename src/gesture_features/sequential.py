"""Arc-length resampling of a single stroke into a fixed-size sequential vector."""

from __future__ import annotations

import logging
import math

import numpy as np

from gesture_features.geometry import InvalidInputError, Stroke

logger = logging.getLogger("gesture_features.sequential")


def resample(stroke: Stroke, sample_size: int) -> np.ndarray:
    """Resample a stroke to ``sample_size`` points spaced evenly by arc length.

    Walks the polyline, emitting a point every ``stroke.length / (sample_size - 1)``
    units. The first output point is always the stroke's first raw point. If the
    raw points run out before ``sample_size`` points are emitted (rounding, or a
    caller-supplied length longer than the polyline), the remaining slots repeat
    the last point reached.

    Args:
        stroke: Stroke with at least two points and a positive length.
        sample_size: Number of output points, at least 2.

    Returns:
        Flat vector [x0, y0, x1, y1, ...] of length ``2 * sample_size``.
    """
    if sample_size < 2:
        raise InvalidInputError(f"sample_size must be >= 2, got {sample_size}")
    if len(stroke) < 2:
        raise InvalidInputError(f"Stroke needs at least 2 points, got {len(stroke)}")
    if not math.isfinite(stroke.length) or stroke.length <= 0:
        raise InvalidInputError(f"Stroke length must be positive, got {stroke.length}")

    increment = stroke.length / (sample_size - 1)
    pts = stroke.points

    last_x, last_y = float(pts[0, 0]), float(pts[0, 1])
    out = [(last_x, last_y)]
    distance_so_far = 0.0

    i = 1
    count = len(pts)
    while i < count and len(out) < sample_size:
        cur_x, cur_y = float(pts[i, 0]), float(pts[i, 1])
        dx = cur_x - last_x
        dy = cur_y - last_y
        distance = math.hypot(dx, dy)
        if distance > 0 and distance_so_far + distance >= increment:
            ratio = (increment - distance_so_far) / distance
            last_x += ratio * dx
            last_y += ratio * dy
            out.append((last_x, last_y))
            distance_so_far = 0.0
        else:
            # Consume the raw point and move on to the next segment.
            last_x, last_y = cur_x, cur_y
            distance_so_far += distance
            i += 1

    if len(out) < sample_size:
        logger.debug(
            "Stroke exhausted after %d of %d samples, padding with last point",
            len(out), sample_size,
        )
        out.extend([(last_x, last_y)] * (sample_size - len(out)))

    return np.array(out, dtype=np.float64).reshape(-1)
