"""
Light-bar detection stages.

Each stage is a pure transform that allocates a fresh output:
- preprocess: optional blur and grayscale helpers
- color_mask: HSV thresholding for red and blue
- refine: morphological open/close
- contours: outer contour extraction
- classifier: geometric light-bar acceptance
"""

from .color_mask import ColorMaskBuilder
from .refine import MaskRefiner
from .contours import extract_contours
from .classifier import LightBarClassifier, aspect_ratio

__all__ = [
    "ColorMaskBuilder",
    "MaskRefiner",
    "extract_contours",
    "LightBarClassifier",
    "aspect_ratio",
]
