"""Distances between feature vectors and path-shape measures."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from gesture_features.geometry import InvalidInputError


@dataclass
class Instance:
    """A labeled feature vector with its Euclidean norm.

    ``magnitude`` is normally filled in by whoever builds the instance;
    it is computed from the vector when left out.
    """
    vector: np.ndarray
    label: Any = None
    magnitude: Optional[float] = field(default=None)

    def __post_init__(self):
        self.vector = np.asarray(self.vector, dtype=np.float64).reshape(-1)
        if self.magnitude is None:
            self.magnitude = float(np.linalg.norm(self.vector))

    @classmethod
    def from_vector(cls, vector, label: Any = None) -> Instance:
        return cls(vector=vector, label=label)


def _as_vector(v) -> np.ndarray:
    return np.asarray(v, dtype=np.float64).reshape(-1)


def euclidean_distance(vector1, vector2) -> float:
    """Mean squared per-dimension difference (squared distance / length)."""
    v1, v2 = _as_vector(vector1), _as_vector(vector2)
    if v1.size != v2.size:
        raise InvalidInputError(f"Vector lengths differ: {v1.size} vs {v2.size}")
    if v1.size == 0:
        raise InvalidInputError("Cannot compare empty vectors")
    diff = v1 - v2
    return float(np.dot(diff, diff) / v1.size)


def cosine_distance(instance1: Instance, instance2: Instance) -> float:
    """Angle between two instance vectors, in [0, pi].

    Uses the instances' stored magnitudes.
    """
    v1, v2 = instance1.vector, instance2.vector
    if v1.size != v2.size:
        raise InvalidInputError(f"Vector lengths differ: {v1.size} vs {v2.size}")
    denom = instance1.magnitude * instance2.magnitude
    if denom == 0:
        raise InvalidInputError("Cosine distance is undefined for a zero-magnitude instance")

    cos = float(np.dot(v1, v2)) / denom
    # Rounding can push the ratio slightly past +/-1.
    return math.acos(min(1.0, max(-1.0, cos)))


def compute_total_length(vector) -> float:
    """Path length of a flat [x0, y0, x1, y1, ...] vector.

    Sums the segments between consecutive points but stops one segment
    short: the segment ending at the last point is not counted.
    """
    pts = _as_vector(vector)
    total = 0.0
    for i in range(0, pts.size - 4, 2):
        total += math.hypot(pts[i + 2] - pts[i], pts[i + 3] - pts[i + 1])
    return total


def compute_straightness(vector, total_length: Optional[float] = None) -> float:
    """How close a path is to a straight line, in [0, 1].

    Ratio of the direct distance between the first and the last point covered
    by ``compute_total_length`` to that total length. Pass ``total_length`` to
    reuse an already computed value.
    """
    pts = _as_vector(vector)
    if pts.size < 4 or pts.size % 2 != 0:
        raise InvalidInputError(f"Need at least two points in a flat vector, got {pts.size} values")
    if total_length is None:
        total_length = compute_total_length(pts)
    if total_length <= 0:
        raise InvalidInputError("Straightness is undefined for a path of zero length")

    end = max(pts.size - 4, 2)
    direct = math.hypot(pts[end] - pts[0], pts[end + 1] - pts[1])
    return min(1.0, direct / total_length)
