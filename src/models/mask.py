"""
Binary mask model.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Sequence, Tuple

import numpy as np

from .errors import DimensionMismatchError, InvalidInputError


FOREGROUND = 255
BACKGROUND = 0


@dataclass(frozen=True, eq=False)
class BinaryMask:
    """
    A single-channel foreground/background grid.

    Attributes:
        data: uint8 array of shape (H, W), 255 for foreground and 0 for background.
    """
    data: np.ndarray

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "BinaryMask":
        """Create a mask from any 2-D array; nonzero cells become foreground."""
        arr = np.asarray(arr)
        if arr.ndim != 2:
            raise InvalidInputError(f"mask must be 2-D, got shape {arr.shape}")
        data = np.where(arr != 0, FOREGROUND, BACKGROUND).astype(np.uint8)
        return cls(data=data)

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        """Return (height, width)."""
        return (self.height, self.width)

    @property
    def is_empty(self) -> bool:
        """True when the mask has zero width or height."""
        return self.data.size == 0

    @property
    def foreground_count(self) -> int:
        return int(np.count_nonzero(self.data))

    def union(self, other: "BinaryMask") -> "BinaryMask":
        """
        Logical OR of two masks with identical dimensions.

        Raises:
            DimensionMismatchError: If the masks differ in size.
        """
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"cannot combine masks of different dimensions: "
                f"{self.width}x{self.height} vs {other.width}x{other.height}"
            )
        return BinaryMask(data=np.bitwise_or(self.data, other.data))

    def __or__(self, other: "BinaryMask") -> "BinaryMask":
        return self.union(other)

    def equals(self, other: "BinaryMask") -> bool:
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))


def union_all(masks: Sequence[BinaryMask]) -> BinaryMask:
    """Fold a non-empty sequence of masks with union."""
    if not masks:
        raise InvalidInputError("cannot combine an empty list of masks")
    return reduce(BinaryMask.union, masks)
