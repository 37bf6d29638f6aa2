"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .color import HsvRange
from .errors import ConfigurationError


DEFAULT_RED_RANGE_1 = HsvRange(lower=(0, 100, 100), upper=(10, 255, 255))
DEFAULT_RED_RANGE_2 = HsvRange(lower=(160, 100, 100), upper=(180, 255, 255))
DEFAULT_BLUE_RANGE = HsvRange(lower=(100, 100, 100), upper=(130, 255, 255))

BLUR_MODES = ("none", "mean", "gaussian")


def _range_from(d: Dict[str, Any], key: str, default: HsvRange) -> HsvRange:
    value = d.get(key)
    return HsvRange.from_dict(value) if value else default


@dataclass(frozen=True)
class ColorConfig:
    """
    HSV ranges considered part of a light bar.

    Red straddles the hue wrap point and is split into a low-hue and a
    high-hue band; blue is one contiguous band.
    """
    red_range_1: HsvRange = DEFAULT_RED_RANGE_1
    red_range_2: HsvRange = DEFAULT_RED_RANGE_2
    blue_range: HsvRange = DEFAULT_BLUE_RANGE

    def ranges_by_color(self) -> Dict[str, List[HsvRange]]:
        return {
            "red": [self.red_range_1, self.red_range_2],
            "blue": [self.blue_range],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ColorConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            red_range_1=_range_from(d, "red_range_1", DEFAULT_RED_RANGE_1),
            red_range_2=_range_from(d, "red_range_2", DEFAULT_RED_RANGE_2),
            blue_range=_range_from(d, "blue_range", DEFAULT_BLUE_RANGE),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "red_range_1": self.red_range_1.to_dict(),
            "red_range_2": self.red_range_2.to_dict(),
            "blue_range": self.blue_range.to_dict(),
        }


@dataclass(frozen=True)
class PreprocessConfig:
    """Optional blur applied before color thresholding."""
    blur: str = "none"
    kernel_size: int = 5
    sigma: float = 1.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PreprocessConfig":
        return cls(
            blur=d.get("blur", "none"),
            kernel_size=d.get("kernel_size", 5),
            sigma=d.get("sigma", 1.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blur": self.blur,
            "kernel_size": self.kernel_size,
            "sigma": self.sigma,
        }


@dataclass(frozen=True)
class MorphologyConfig:
    """Square structuring element used for open/close."""
    kernel_size: int = 3

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MorphologyConfig":
        return cls(kernel_size=d.get("kernel_size", 3))

    def to_dict(self) -> Dict[str, Any]:
        return {"kernel_size": self.kernel_size}


@dataclass(frozen=True)
class ClassificationThresholds:
    """
    Acceptance policy for light-bar candidates.

    All bounds are strict. The defaults were tuned empirically for one
    camera and resolution, so treat them as a starting point.
    """
    area_min: float = 50.0
    area_max: float = 5000.0
    aspect_ratio_min: float = 1.5
    aspect_ratio_max: float = 8.0
    min_width: int = 3
    min_height: int = 10

    def __post_init__(self) -> None:
        for name in ("area_min", "area_max", "aspect_ratio_min", "aspect_ratio_max", "min_width", "min_height"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                raise ConfigurationError(f"classification.{name} must be a non-negative number, got {value!r}")
        if self.area_min >= self.area_max:
            raise ConfigurationError(
                f"classification.area_min ({self.area_min}) must be less than area_max ({self.area_max})"
            )
        if self.aspect_ratio_min >= self.aspect_ratio_max:
            raise ConfigurationError(
                f"classification.aspect_ratio_min ({self.aspect_ratio_min}) must be less than "
                f"aspect_ratio_max ({self.aspect_ratio_max})"
            )

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ClassificationThresholds":
        return cls(
            area_min=d.get("area_min", 50.0),
            area_max=d.get("area_max", 5000.0),
            aspect_ratio_min=d.get("aspect_ratio_min", 1.5),
            aspect_ratio_max=d.get("aspect_ratio_max", 8.0),
            min_width=d.get("min_width", 3),
            min_height=d.get("min_height", 10),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "area_min": self.area_min,
            "area_max": self.area_max,
            "aspect_ratio_min": self.aspect_ratio_min,
            "aspect_ratio_max": self.aspect_ratio_max,
            "min_width": self.min_width,
            "min_height": self.min_height,
        }


@dataclass(frozen=True)
class AnnotationConfig:
    """Drawing style for accepted candidates (colors are BGR)."""
    box_color: Tuple[int, int, int] = (0, 255, 0)
    box_thickness: int = 2
    font_scale: float = 0.4
    text_thickness: int = 1
    label_offset: int = 5

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnnotationConfig":
        return cls(
            box_color=tuple(d.get("box_color", (0, 255, 0))),
            box_thickness=d.get("box_thickness", 2),
            font_scale=d.get("font_scale", 0.4),
            text_thickness=d.get("text_thickness", 1),
            label_offset=d.get("label_offset", 5),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "box_color": list(self.box_color),
            "box_thickness": self.box_thickness,
            "font_scale": self.font_scale,
            "text_thickness": self.text_thickness,
            "label_offset": self.label_offset,
        }


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    colors: ColorConfig = field(default_factory=ColorConfig)
    preprocess: PreprocessConfig = field(default_factory=PreprocessConfig)
    morphology: MorphologyConfig = field(default_factory=MorphologyConfig)
    classification: ClassificationThresholds = field(default_factory=ClassificationThresholds)
    annotation: AnnotationConfig = field(default_factory=AnnotationConfig)
    log_path: Optional[str] = "logs/lightbar.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            colors=ColorConfig.from_dict(d.get("colors") or {}),
            preprocess=PreprocessConfig.from_dict(d.get("preprocess") or {}),
            morphology=MorphologyConfig.from_dict(d.get("morphology") or {}),
            classification=ClassificationThresholds.from_dict(d.get("classification") or {}),
            annotation=AnnotationConfig.from_dict(d.get("annotation") or {}),
            log_path=d.get("log_path", "logs/lightbar.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or passing to existing code)."""
        return {
            "colors": self.colors.to_dict(),
            "preprocess": self.preprocess.to_dict(),
            "morphology": self.morphology.to_dict(),
            "classification": self.classification.to_dict(),
            "annotation": self.annotation.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
