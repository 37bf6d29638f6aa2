"""
ImageInfo model describing an input image.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


def is_empty_image(image: Optional[np.ndarray]) -> bool:
    """True for None or an array with zero width or height."""
    return image is None or image.ndim < 2 or image.shape[0] == 0 or image.shape[1] == 0


@dataclass(frozen=True)
class ImageInfo:
    """
    Basic facts about a decoded image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        channels: Number of color channels (1 for grayscale).
        source: Optional path or identifier the image came from.
    """
    width: int
    height: int
    channels: int
    source: Optional[str] = None

    @classmethod
    def from_numpy(cls, image: np.ndarray, source: Optional[str] = None) -> "ImageInfo":
        """Create ImageInfo from a numpy array."""
        h, w = image.shape[:2]
        channels = image.shape[2] if image.ndim == 3 else 1
        return cls(width=int(w), height=int(h), channels=int(channels), source=source)

    @property
    def size(self) -> Tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height
