"""Principal-axis orientation and oriented bounding boxes of point sets.

The principal axis comes from a closed-form eigen-decomposition of the 2x2
population covariance matrix. Inputs are copied on entry; caller arrays are
never modified.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from gesture_features.config import ISOTROPIC_FALLBACK_ANGLE, SEQUENCE_SAMPLE_SIZE
from gesture_features.geometry import InvalidInputError, Stroke, Transform, as_points
from gesture_features.sequential import resample

logger = logging.getLogger("gesture_features.orientation")

# Relative gap below which the two eigenvalues count as equal.
ISOTROPY_TOLERANCE = 1e-9


@dataclass(frozen=True)
class CovarianceMatrix:
    """Symmetric 2x2 covariance. ``yx`` mirrors ``xy``."""
    xx: float
    xy: float
    yy: float

    @property
    def yx(self) -> float:
        return self.xy

    def as_array(self) -> np.ndarray:
        return np.array([[self.xx, self.xy], [self.yx, self.yy]], dtype=np.float64)

    def eigenvalues(self) -> tuple[float, float]:
        """Roots of l^2 + a*l + b = 0, larger first."""
        a = -(self.xx + self.yy)
        b = self.xx * self.yy - self.xy * self.yx
        half = a / 2.0
        # half^2 - b == ((xx - yy) / 2)^2 + xy^2, which cannot go negative.
        rightside = math.sqrt(((self.xx - self.yy) / 2.0) ** 2 + self.xy * self.yx)
        return -half + rightside, -half - rightside


@dataclass(frozen=True)
class OrientedBoundingBox:
    """Rectangle aligned to a principal axis.

    ``angle`` is in degrees, in (-180, 180]. ``width`` and ``height`` are
    extents along the rotated x and y axes.
    """
    angle: float
    center_x: float
    center_y: float
    width: float
    height: float

    @property
    def squareness(self) -> float:
        if self.height == 0:
            return math.inf
        return self.width / self.height

    def corners(self) -> np.ndarray:
        """The four corners in input coordinates, shape (4, 2)."""
        hw, hh = self.width / 2.0, self.height / 2.0
        local = np.array([[-hw, -hh], [hw, -hh], [hw, hh], [-hw, hh]])
        trans = Transform.translate(self.center_x, self.center_y).pre_concat(
            Transform.rotate(self.angle)
        )
        return trans.map_points(local)

    def to_dict(self) -> dict:
        return {
            "angle": self.angle,
            "center_x": self.center_x,
            "center_y": self.center_y,
            "width": self.width,
            "height": self.height,
        }


def compute_centroid(points) -> np.ndarray:
    """Arithmetic mean of the points, as an array [cx, cy]."""
    pts = as_points(points)
    if len(pts) == 0:
        raise InvalidInputError("Cannot compute the centroid of an empty point set")
    return pts.mean(axis=0)


def compute_covariance(points, centroid: Optional[Sequence[float]] = None) -> CovarianceMatrix:
    """Population covariance (denominator = point count) about the centroid."""
    pts = as_points(points)
    if len(pts) == 0:
        raise InvalidInputError("Cannot compute the covariance of an empty point set")
    center = compute_centroid(pts) if centroid is None else np.asarray(centroid, dtype=np.float64)

    d = pts - center
    n = len(d)
    return CovarianceMatrix(
        xx=float((d[:, 0] * d[:, 0]).sum() / n),
        xy=float((d[:, 0] * d[:, 1]).sum() / n),
        yy=float((d[:, 1] * d[:, 1]).sum() / n),
    )


def _is_isotropic(lambda1: float, lambda2: float) -> bool:
    return lambda1 - lambda2 <= ISOTROPY_TOLERANCE * max(abs(lambda1), abs(lambda2))


def compute_orientation(cov: CovarianceMatrix) -> tuple[float, float]:
    """Direction of the principal axis as an unnormalized vector.

    Returns (0, 0) when the eigenvalues are equal and no axis exists, and
    (1, 0) when the covariance has no cross term.
    """
    lambda1, lambda2 = cov.eigenvalues()
    if _is_isotropic(lambda1, lambda2):
        return 0.0, 0.0
    if cov.xy == 0 or cov.yx == 0:
        return 1.0, 0.0
    return 1.0, (lambda1 - cov.xx) / cov.xy


def compute_oriented_bbox(
    points,
    centroid: Optional[Sequence[float]] = None,
    fallback_angle: float = ISOTROPIC_FALLBACK_ANGLE,
) -> OrientedBoundingBox:
    """Oriented bounding box of a point set.

    Args:
        points: Flat [x0, y0, ...] vector or (N, 2) array. Not modified.
        centroid: Precomputed centroid; computed from the points if omitted.
        fallback_angle: Angle reported when the point cloud is isotropic.
    """
    pts = as_points(points).copy()
    if len(pts) == 0:
        raise InvalidInputError("Cannot compute the bounding box of an empty point set")
    if not np.isfinite(pts).all():
        raise InvalidInputError("Points must have finite coordinates")
    center = compute_centroid(pts) if centroid is None else np.asarray(centroid, dtype=np.float64)
    if not np.isfinite(center).all():
        raise InvalidInputError(f"Centroid must be finite, got {center.tolist()}")

    pts -= center
    cov = compute_covariance(pts, centroid=(0.0, 0.0))
    dir_x, dir_y = compute_orientation(cov)

    if dir_x == 0 and dir_y == 0:
        logger.debug("Isotropic point cloud, using fallback angle %.1f", fallback_angle)
        angle = fallback_angle
    else:
        angle = math.degrees(math.atan2(dir_y, dir_x))
        pts = Transform.rotate(-angle).map_points(pts)

    mins = pts.min(axis=0)
    maxs = pts.max(axis=0)
    return OrientedBoundingBox(
        angle=angle,
        center_x=float(center[0]),
        center_y=float(center[1]),
        width=float(maxs[0] - mins[0]),
        height=float(maxs[1] - mins[1]),
    )


def compute_oriented_bbox_from_points(
    raw_points,
    sample_size: int = SEQUENCE_SAMPLE_SIZE,
    fallback_angle: float = ISOTROPIC_FALLBACK_ANGLE,
) -> OrientedBoundingBox:
    """Resample a raw point list as one stroke, then compute its oriented box."""
    stroke = Stroke(as_points(raw_points))
    return compute_oriented_bbox(resample(stroke, sample_size), fallback_angle=fallback_angle)
