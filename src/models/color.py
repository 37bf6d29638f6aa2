"""
HSV color range model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError


# OpenCV 8-bit HSV encoding
HUE_MAX = 180
SAT_MAX = 255
VAL_MAX = 255

HsvTriple = Tuple[int, int, int]


@dataclass(frozen=True)
class HsvRange:
    """
    An inclusive lower/upper bound in HSV space.

    Hue wrap-around (red) is expressed with two separate ranges rather
    than a single range whose lower hue exceeds its upper hue.

    Attributes:
        lower: (h, s, v) lower bound.
        upper: (h, s, v) upper bound.
    """
    lower: HsvTriple
    upper: HsvTriple

    def __post_init__(self) -> None:
        lower = _as_triple(self.lower, "lower")
        upper = _as_triple(self.upper, "upper")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

        for name, triple in (("lower", lower), ("upper", upper)):
            h, s, v = triple
            if not (0 <= h <= HUE_MAX and 0 <= s <= SAT_MAX and 0 <= v <= VAL_MAX):
                raise ConfigurationError(
                    f"HSV {name} bound {triple} outside 0-{HUE_MAX}/0-{SAT_MAX}/0-{VAL_MAX}"
                )
        if any(lo > hi for lo, hi in zip(lower, upper)):
            raise ConfigurationError(
                f"HSV lower bound {lower} exceeds upper bound {upper}"
            )

    def lower_array(self) -> np.ndarray:
        return np.array(self.lower, dtype=np.uint8)

    def upper_array(self) -> np.ndarray:
        return np.array(self.upper, dtype=np.uint8)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HsvRange":
        """Adapter: Create from {"lower": [h, s, v], "upper": [h, s, v]}."""
        if "lower" not in d or "upper" not in d:
            raise ConfigurationError("HSV range requires 'lower' and 'upper'")
        return cls(lower=d["lower"], upper=d["upper"])

    def to_dict(self) -> Dict[str, Any]:
        return {"lower": list(self.lower), "upper": list(self.upper)}


def _as_triple(values: Sequence[int], name: str) -> HsvTriple:
    try:
        triple = tuple(int(v) for v in values)
    except (TypeError, ValueError):
        raise ConfigurationError(f"HSV {name} bound must be three integers, got {values!r}")
    if len(triple) != 3:
        raise ConfigurationError(f"HSV {name} bound must be three integers, got {values!r}")
    return triple
