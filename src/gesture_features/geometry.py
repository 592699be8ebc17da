"""Core geometric types: points, strokes, gestures and a small affine transform."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np


class InvalidInputError(ValueError):
    """Raised when input geometry cannot be featurized."""


def as_points(points) -> np.ndarray:
    """Coerce a flat [x0, y0, x1, y1, ...] vector or an (N, 2) array to (N, 2) float64."""
    arr = np.array(points, dtype=np.float64)
    if arr.ndim == 1:
        if arr.size % 2 != 0:
            raise InvalidInputError(
                f"Flat point vector must have an even length, got {arr.size}"
            )
        arr = arr.reshape(-1, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidInputError(f"Expected points of shape (N, 2), got {arr.shape}")
    return arr


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its min/max corners."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0

    @classmethod
    def of_points(cls, points: np.ndarray) -> Rect:
        mins = points.min(axis=0)
        maxs = points.max(axis=0)
        return cls(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))

    def union(self, other: Rect) -> Rect:
        return Rect(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )


@dataclass
class Stroke:
    """One continuous pen path.

    ``points`` is stored as an (N, 2) float64 array. ``length`` is the total
    polyline arc length; it is computed from the points unless the caller
    already knows it.
    """
    points: np.ndarray
    length: Optional[float] = None

    def __post_init__(self):
        self.points = as_points(self.points)
        if len(self.points) == 0:
            raise InvalidInputError("Stroke must contain at least one point")
        if self.length is None:
            self.length = polyline_length(self.points)
        else:
            self.length = float(self.length)

    @classmethod
    def from_points(cls, points: Iterable[Point2D | Sequence[float]]) -> Stroke:
        coords = [(p.x, p.y) if isinstance(p, Point2D) else tuple(p) for p in points]
        return cls(np.array(coords, dtype=np.float64).reshape(-1, 2))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def bounding_box(self) -> Rect:
        return Rect.of_points(self.points)

    def point(self, index: int) -> Point2D:
        x, y = self.points[index]
        return Point2D(float(x), float(y))


def polyline_length(points: np.ndarray) -> float:
    """Sum of the segment lengths of a polyline."""
    if len(points) < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(points, axis=0), axis=1).sum())


@dataclass
class Gesture:
    """One or more strokes drawn as a single input, kept in drawing order."""
    strokes: list[Stroke] = field(default_factory=list)

    def add_stroke(self, stroke: Stroke):
        self.strokes.append(stroke)

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    @property
    def length(self) -> float:
        return sum(s.length for s in self.strokes)

    @property
    def bounding_box(self) -> Rect:
        if not self.strokes:
            raise InvalidInputError("Gesture has no strokes")
        box = self.strokes[0].bounding_box
        for stroke in self.strokes[1:]:
            box = box.union(stroke.bounding_box)
        return box

    def all_points(self) -> np.ndarray:
        """All stroke points concatenated in drawing order, shape (N, 2)."""
        if not self.strokes:
            return np.zeros((0, 2), dtype=np.float64)
        return np.concatenate([s.points for s in self.strokes])

    @classmethod
    def from_lists(cls, strokes: Iterable[Iterable[Sequence[float]]]) -> Gesture:
        """Build a gesture from nested [[[x, y], ...], ...] lists."""
        return cls([Stroke(np.array(list(s), dtype=np.float64)) for s in strokes])

    def to_lists(self) -> list[list[list[float]]]:
        return [s.points.tolist() for s in self.strokes]


class Transform:
    """2D affine transform backed by a 3x3 homogeneous matrix.

    ``pre_concat(other)`` applies ``other`` before this transform,
    ``post_concat(other)`` applies it after.
    """

    def __init__(self, matrix: Optional[np.ndarray] = None):
        self.matrix = np.identity(3) if matrix is None else np.array(matrix, dtype=np.float64)

    @classmethod
    def scale(cls, sx: float, sy: Optional[float] = None) -> Transform:
        sy = sx if sy is None else sy
        return cls(np.diag([sx, sy, 1.0]))

    @classmethod
    def translate(cls, dx: float, dy: float) -> Transform:
        m = np.identity(3)
        m[0, 2] = dx
        m[1, 2] = dy
        return cls(m)

    @classmethod
    def rotate(cls, degrees: float) -> Transform:
        """Counter-clockwise rotation about the origin (y axis up)."""
        rad = math.radians(degrees)
        c, s = math.cos(rad), math.sin(rad)
        return cls(np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]))

    def pre_concat(self, other: Transform) -> Transform:
        return Transform(self.matrix @ other.matrix)

    def post_concat(self, other: Transform) -> Transform:
        return Transform(other.matrix @ self.matrix)

    def map_points(self, points) -> np.ndarray:
        """Return transformed copies of the given points, shape (N, 2)."""
        pts = as_points(points)
        return pts @ self.matrix[:2, :2].T + self.matrix[:2, 2]

    def __repr__(self):
        return f"Transform({self.matrix.tolist()})"
