"""
Typed models for the light-bar detector.

These models carry the data flowing between pipeline stages: masks,
contours, candidates and configuration.
"""

from .errors import LightBarError, InvalidInputError, DimensionMismatchError, ConfigurationError
from .image import ImageInfo, is_empty_image
from .color import HsvRange
from .mask import BinaryMask, union_all
from .contour import BoundingRect, Contour
from .candidate import Candidate
from .config import (
    Config,
    ColorConfig,
    PreprocessConfig,
    MorphologyConfig,
    ClassificationThresholds,
    AnnotationConfig,
)

__all__ = [
    # Errors
    "LightBarError",
    "InvalidInputError",
    "DimensionMismatchError",
    "ConfigurationError",
    # Image
    "ImageInfo",
    "is_empty_image",
    # Masks
    "HsvRange",
    "BinaryMask",
    "union_all",
    # Contours
    "BoundingRect",
    "Contour",
    "Candidate",
    # Config
    "Config",
    "ColorConfig",
    "PreprocessConfig",
    "MorphologyConfig",
    "ClassificationThresholds",
    "AnnotationConfig",
]
