"""
Contour extraction from a refined mask.
"""

from __future__ import annotations

from typing import List

import cv2

from models.contour import Contour
from models.errors import InvalidInputError
from models.mask import BinaryMask


def extract_contours(mask: BinaryMask) -> List[Contour]:
    """
    Find the outer contours of all foreground regions.

    Order follows cv2.findContours and is kept unchanged downstream.

    Raises:
        InvalidInputError: If the mask has zero width or height.
    """
    if mask.is_empty:
        raise InvalidInputError("contour extraction received an empty mask")

    contours, _ = cv2.findContours(mask.data, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    return [Contour.from_points(c) for c in contours]
