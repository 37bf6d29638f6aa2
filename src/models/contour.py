"""
Contour models for extracted foreground regions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np


@dataclass(frozen=True)
class BoundingRect:
    """
    An upright bounding rectangle in pixel coordinates.

    Attributes:
        x: Left edge x coordinate.
        y: Top edge y coordinate.
        width: Rectangle width in pixels.
        height: Rectangle height in pixels.
    """
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def top_left(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_degenerate(self) -> bool:
        """True when the rectangle has zero width or height."""
        return self.width <= 0 or self.height <= 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return as (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    @classmethod
    def from_tuple(cls, t: Tuple[int, int, int, int]) -> "BoundingRect":
        """Create from (x, y, width, height) tuple."""
        return cls(x=int(t[0]), y=int(t[1]), width=int(t[2]), height=int(t[3]))


@dataclass(frozen=True, eq=False)
class Contour:
    """
    Boundary of one connected foreground region.

    Attributes:
        points: Boundary points as an int32 array of shape (N, 1, 2).
        bbox: Upright bounding rectangle of the points.
        area: Enclosed polygon area in pixels (not the bounding box area).
    """
    points: np.ndarray
    bbox: BoundingRect
    area: float

    @property
    def num_points(self) -> int:
        return int(len(self.points))

    @classmethod
    def from_points(cls, points: np.ndarray) -> "Contour":
        """
        Adapter: Build a Contour from raw points, deriving bbox and area.

        Accepts the (N, 1, 2) layout returned by cv2.findContours or a plain
        (N, 2) list of points.
        """
        pts = np.asarray(points, dtype=np.int32).reshape(-1, 1, 2)
        if len(pts) == 0:
            return cls(points=pts, bbox=BoundingRect(0, 0, 0, 0), area=0.0)
        bbox = BoundingRect.from_tuple(cv2.boundingRect(pts))
        area = float(cv2.contourArea(pts))
        return cls(points=pts, bbox=bbox, area=area)
