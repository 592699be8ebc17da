"""gesture-features - Geometric feature extraction for freehand gestures."""

__version__ = "0.1.0"

from gesture_features.geometry import Gesture, InvalidInputError, Point2D, Rect, Stroke, Transform
from gesture_features.config import FeatureConfig, ISOTROPIC_FALLBACK_ANGLE, SEQUENCE_SAMPLE_SIZE
from gesture_features.sequential import resample
from gesture_features.spatial import normalization_transform, rasterize, splat
from gesture_features.orientation import (
    CovarianceMatrix,
    OrientedBoundingBox,
    compute_centroid,
    compute_covariance,
    compute_orientation,
    compute_oriented_bbox,
    compute_oriented_bbox_from_points,
)
from gesture_features.distance import (
    Instance,
    compute_straightness,
    compute_total_length,
    cosine_distance,
    euclidean_distance,
)
from gesture_features.profiler import FeatureProfiler, StageTally
from gesture_features.featurizer import GestureFeaturizer
