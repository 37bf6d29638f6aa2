"""
Candidate model for contours accepted as light bars.
"""

from __future__ import annotations

from dataclasses import dataclass

from .contour import BoundingRect, Contour


def truncate_ratio(value: float) -> str:
    """Render a ratio with its first meaningful digits, e.g. 5.0 -> "5.00"."""
    return f"{value:f}"[:4]


@dataclass(frozen=True)
class Candidate:
    """
    A contour that passed light-bar classification.

    Attributes:
        contour: The source contour.
        bbox: Bounding rectangle of the contour.
        area: Polygon area of the contour.
        aspect_ratio: bbox height divided by bbox width.
        contour_index: Position of the contour in extraction order.
    """
    contour: Contour
    bbox: BoundingRect
    area: float
    aspect_ratio: float
    contour_index: int = 0

    @classmethod
    def from_contour(cls, contour: Contour, aspect_ratio: float, contour_index: int = 0) -> "Candidate":
        return cls(
            contour=contour,
            bbox=contour.bbox,
            area=contour.area,
            aspect_ratio=aspect_ratio,
            contour_index=contour_index,
        )

    def label(self) -> str:
        """Short annotation text: area and aspect ratio."""
        return f"A:{int(self.area)} R:{truncate_ratio(self.aspect_ratio)}"

    def summary(self, rank: int) -> str:
        """Diagnostic record for the rank-th accepted candidate (1-based)."""
        return (
            f"Light bar {rank}: area={self.area:g}, "
            f"aspect_ratio={truncate_ratio(self.aspect_ratio)}, "
            f"origin=({self.bbox.x},{self.bbox.y})"
        )
