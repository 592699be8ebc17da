"""Feature extraction settings, loadable from YAML.

Usage:
    config = FeatureConfig.from_yaml("features.yml")
    featurizer = GestureFeaturizer(config)

Example features.yml:
    sequence_sample_size: 16
    grid_size: 16
    orientation_sample_size: 16
    fallback_angle: -90.0
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from gesture_features.geometry import InvalidInputError

logger = logging.getLogger("gesture_features.config")

# Points per stroke when resampling ahead of rasterization or orientation.
SEQUENCE_SAMPLE_SIZE = 16

# Grid edge length used when no explicit size is given.
DEFAULT_GRID_SIZE = 16

# Reported angle when the covariance has equal eigenvalues and no axis exists.
ISOTROPIC_FALLBACK_ANGLE = -90.0


@dataclass
class FeatureConfig:
    """Parameters shared by every featurization stage."""
    sequence_sample_size: int = SEQUENCE_SAMPLE_SIZE
    grid_size: int = DEFAULT_GRID_SIZE
    orientation_sample_size: int = SEQUENCE_SAMPLE_SIZE
    fallback_angle: float = ISOTROPIC_FALLBACK_ANGLE

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.sequence_sample_size < 2:
            raise InvalidInputError(
                f"sequence_sample_size must be >= 2, got {self.sequence_sample_size}"
            )
        if self.orientation_sample_size < 2:
            raise InvalidInputError(
                f"orientation_sample_size must be >= 2, got {self.orientation_sample_size}"
            )
        if self.grid_size < 1:
            raise InvalidInputError(f"grid_size must be >= 1, got {self.grid_size}")
        if not -180.0 < self.fallback_angle <= 180.0:
            raise InvalidInputError(
                f"fallback_angle must lie in (-180, 180], got {self.fallback_angle}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> FeatureConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidInputError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_yaml(cls, path: str | Path) -> FeatureConfig:
        """Load settings from a YAML file. Missing keys keep their defaults."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise InvalidInputError(f"Config file {path} must hold a mapping")

        config = cls.from_dict(data)
        logger.info("Loaded feature config from %s", path)
        return config

    def to_yaml(self, path: str | Path):
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
