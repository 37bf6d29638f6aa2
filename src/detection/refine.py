"""
Mask refinement with morphological open and close.
"""

from __future__ import annotations

import cv2

from models.errors import ConfigurationError, InvalidInputError
from models.mask import BinaryMask


class MaskRefiner:
    """
    Remove speckle noise and close small gaps in a binary mask.

    Opening drops isolated pixels; closing then rejoins a light bar that
    sensor noise split into fragments, so it yields one contour downstream.
    The result is not idempotent in general, so run it once per image.
    """

    def __init__(self, kernel_size: int = 3):
        if not isinstance(kernel_size, int) or kernel_size <= 0:
            raise ConfigurationError(
                f"morphology kernel size must be a positive integer, got {kernel_size!r}"
            )
        self.kernel_size = kernel_size
        self.kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))

    def refine(self, mask: BinaryMask) -> BinaryMask:
        """
        Apply one open followed by one close.

        Raises:
            InvalidInputError: If the mask has zero width or height.
        """
        if mask.is_empty:
            raise InvalidInputError("mask refinement received an empty mask")

        opening = cv2.morphologyEx(mask.data, cv2.MORPH_OPEN, self.kernel)
        closing = cv2.morphologyEx(opening, cv2.MORPH_CLOSE, self.kernel)
        return BinaryMask(data=closing)
