"""
Annotate stage for drawing accepted light bars.

Draws each candidate's bounding rectangle and a short area/aspect-ratio
label onto a copy of the source image. The source image is never modified.
"""

from __future__ import annotations

from typing import Optional, Sequence

import cv2
import numpy as np

from models.candidate import Candidate
from models.config import AnnotationConfig
from models.errors import InvalidInputError
from models.image import is_empty_image


class Annotator:
    """
    Pipeline stage that renders candidates for inspection.

    Example:
        annotator = Annotator(AnnotationConfig())
        annotated = annotator.annotate(image, candidates)
    """

    def __init__(self, config: Optional[AnnotationConfig] = None):
        self._config = config or AnnotationConfig()

    @property
    def config(self) -> AnnotationConfig:
        return self._config

    def annotate(self, image: np.ndarray, candidates: Sequence[Candidate]) -> np.ndarray:
        """
        Draw candidates in order on a copy of the image.

        Later candidates draw over earlier ones where boxes overlap.

        Returns:
            A new image; an unmodified copy when there are no candidates.
        """
        if is_empty_image(image):
            raise InvalidInputError("annotation received an empty image")

        frame = image.copy()
        cfg = self._config
        color = tuple(int(c) for c in cfg.box_color)

        for candidate in candidates:
            bbox = candidate.bbox
            # cv2.rectangle corners are inclusive
            cv2.rectangle(
                frame,
                (bbox.x, bbox.y),
                (bbox.x2 - 1, bbox.y2 - 1),
                color,
                cfg.box_thickness,
            )
            cv2.putText(
                frame,
                candidate.label(),
                (bbox.x, bbox.y - cfg.label_offset),
                cv2.FONT_HERSHEY_SIMPLEX,
                cfg.font_scale,
                color,
                cfg.text_thickness,
            )

        return frame
