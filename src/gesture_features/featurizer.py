"""Front-end that turns gestures into feature vectors and labeled instances."""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from gesture_features.config import FeatureConfig
from gesture_features.distance import Instance
from gesture_features.geometry import Gesture, InvalidInputError, Stroke, as_points
from gesture_features.orientation import OrientedBoundingBox, compute_oriented_bbox
from gesture_features.profiler import FeatureProfiler
from gesture_features.sequential import resample
from gesture_features.spatial import rasterize

logger = logging.getLogger("gesture_features.featurizer")

INSTANCE_KINDS = ("spatial", "sequence")


class GestureFeaturizer:
    """Applies a FeatureConfig to gestures and tallies the work done per stage.

    Usage:
        featurizer = GestureFeaturizer(FeatureConfig(grid_size=16))
        inst = featurizer.instance(gesture, label="circle")
        print(featurizer.stats()["rasterize"]["cells_set"])
    """

    def __init__(
        self,
        config: Optional[FeatureConfig] = None,
        profiler: Optional[FeatureProfiler] = None,
    ):
        self.config = config or FeatureConfig()
        self.profiler = profiler or FeatureProfiler()

    def sequence_features(self, stroke: Stroke) -> np.ndarray:
        with self.profiler.stage("resample") as tally:
            vector = resample(stroke, self.config.sequence_sample_size)
            tally.add(points_in=len(stroke), points_out=self.config.sequence_sample_size)
        return vector

    def spatial_features(self, gesture: Gesture) -> np.ndarray:
        with self.profiler.stage("rasterize") as tally:
            vector = rasterize(
                gesture,
                self.config.grid_size,
                sample_size=self.config.sequence_sample_size,
            )
            tally.add(
                strokes=gesture.stroke_count,
                points_splatted=gesture.stroke_count * self.config.sequence_sample_size,
                cells_set=int(np.count_nonzero(vector)),
            )
        logger.debug("Spatial features for %d-stroke gesture", gesture.stroke_count)
        return vector

    def oriented_bbox(self, points) -> OrientedBoundingBox:
        """Oriented box of a gesture or of a raw point list.

        Each stroke of a gesture, or the raw list taken as a single stroke, is
        resampled to ``orientation_sample_size`` points first.
        """
        with self.profiler.stage("orientation") as tally:
            if isinstance(points, Gesture):
                strokes = points.strokes
            else:
                strokes = [Stroke(as_points(points))]
            if not strokes:
                raise InvalidInputError("Gesture has no strokes")

            sample_size = self.config.orientation_sample_size
            resampled = np.concatenate([resample(s, sample_size).reshape(-1, 2) for s in strokes])
            box = compute_oriented_bbox(resampled, fallback_angle=self.config.fallback_angle)
            tally.add(
                points_in=sum(len(s) for s in strokes),
                points_out=len(resampled),
            )
        return box

    def instance(self, gesture: Gesture, label: Any = None, kind: str = "spatial") -> Instance:
        """Build a labeled instance from a gesture.

        ``kind="sequence"`` uses the resampled first stroke, ``"spatial"``
        the rasterized grid of all strokes.
        """
        if kind not in INSTANCE_KINDS:
            raise InvalidInputError(f"Unknown instance kind {kind!r}, expected one of {INSTANCE_KINDS}")
        if not gesture.strokes:
            raise InvalidInputError("Gesture has no strokes")

        with self.profiler.stage("instance") as tally:
            if kind == "sequence":
                vector = self.sequence_features(gesture.strokes[0])
            else:
                vector = self.spatial_features(gesture)
            inst = Instance.from_vector(vector, label=label)
            tally.add(**{kind: 1})

        logger.debug("Built %s instance %r (magnitude=%.4f)", kind, label, inst.magnitude)
        return inst

    def stats(self) -> dict[str, dict]:
        """Per-stage call counts, failures, timings and workload counters."""
        return self.profiler.report()
