"""
Color mask builder.

Thresholds a BGR image in HSV space against the configured red and blue
ranges and returns the union as a single binary mask. Red wraps around the
hue axis, so it is matched with two sub-ranges whose masks are OR-ed.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

import cv2
import numpy as np

from models.color import HsvRange
from models.config import ColorConfig
from models.errors import InvalidInputError
from models.image import is_empty_image
from models.mask import BinaryMask, union_all


class ColorMaskBuilder:
    """Build a light-bar color mask from a BGR image."""

    def __init__(self, config: Optional[ColorConfig] = None):
        self._config = config or ColorConfig()

    @property
    def config(self) -> ColorConfig:
        return self._config

    @staticmethod
    def _to_hsv(image: np.ndarray) -> np.ndarray:
        if is_empty_image(image):
            raise InvalidInputError("mask construction received an empty image")
        if image.ndim != 3 or image.shape[2] != 3:
            raise InvalidInputError(
                f"mask construction expects a 3-channel BGR image, got shape {image.shape}"
            )
        if image.dtype != np.uint8:
            raise InvalidInputError(
                f"mask construction expects an 8-bit image, got dtype {image.dtype}"
            )
        return cv2.cvtColor(image, cv2.COLOR_BGR2HSV)

    @staticmethod
    def _threshold(hsv: np.ndarray, ranges: Iterable[HsvRange]) -> BinaryMask:
        masks = [
            BinaryMask(data=cv2.inRange(hsv, r.lower_array(), r.upper_array()))
            for r in ranges
        ]
        return union_all(masks)

    def color_masks(self, image: np.ndarray) -> Dict[str, BinaryMask]:
        """
        Build one mask per configured color.

        Args:
            image: BGR image of shape (H, W, 3).

        Returns:
            Mapping of color name ("red", "blue") to its mask.

        Raises:
            InvalidInputError: If the image is empty or not 3-channel.
        """
        hsv = self._to_hsv(image)
        return {
            color: self._threshold(hsv, ranges)
            for color, ranges in self._config.ranges_by_color().items()
        }

    def build(self, image: np.ndarray) -> BinaryMask:
        """Build the union of all color masks."""
        per_color = self.color_masks(image)
        mask = union_all(list(per_color.values()))
        logging.debug(
            "Color mask built: "
            + ", ".join(f"{color}={m.foreground_count}px" for color, m in per_color.items())
        )
        return mask
