"""
Light-bar candidate classifier.

Scores each extracted contour against geometric acceptance criteria and
keeps the ones that look like a light bar: a thin, tall region of moderate
area. The acceptance rule lives in `rejection_reason` so thresholds can be
tuned and tested without running the rest of the pipeline.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from models.candidate import Candidate
from models.config import ClassificationThresholds
from models.contour import BoundingRect, Contour


# Rejection reasons
REJECT_DEGENERATE = "degenerate"
REJECT_AREA = "area"
REJECT_ASPECT_RATIO = "aspect_ratio"
REJECT_WIDTH = "width"
REJECT_HEIGHT = "height"


def aspect_ratio(bbox: BoundingRect) -> Optional[float]:
    """Height divided by width, or None for a zero-width rectangle."""
    if bbox.width == 0:
        return None
    return bbox.height / bbox.width


class LightBarClassifier:
    """
    Stable filter from contours to light-bar candidates.

    Example:
        classifier = LightBarClassifier(ClassificationThresholds())
        candidates = classifier.classify(contours)
    """

    def __init__(
        self,
        thresholds: Optional[ClassificationThresholds] = None,
        on_candidate: Optional[Callable[[int, Candidate], None]] = None,
    ):
        """
        Initialize the classifier.

        Args:
            thresholds: Acceptance policy. Defaults to ClassificationThresholds().
            on_candidate: Optional callback receiving (rank, candidate) for
                each accepted candidate, rank starting at 1.
        """
        self.thresholds = thresholds or ClassificationThresholds()
        self._on_candidate = on_candidate

    def rejection_reason(self, contour: Contour) -> Optional[str]:
        """
        Return why a contour is not a light bar, or None if it is one.

        A zero-width or zero-height box is rejected as degenerate before the
        aspect ratio is computed. All bounds are strict.
        """
        t = self.thresholds
        bbox = contour.bbox

        if bbox.is_degenerate:
            return REJECT_DEGENERATE
        if not (t.area_min < contour.area < t.area_max):
            return REJECT_AREA
        ratio = aspect_ratio(bbox)
        if ratio is None or not (t.aspect_ratio_min < ratio < t.aspect_ratio_max):
            return REJECT_ASPECT_RATIO
        if not bbox.width > t.min_width:
            return REJECT_WIDTH
        if not bbox.height > t.min_height:
            return REJECT_HEIGHT
        return None

    def is_light_bar(self, contour: Contour) -> bool:
        return self.rejection_reason(contour) is None

    def classify(self, contours: Sequence[Contour]) -> List[Candidate]:
        """
        Keep the contours that qualify as light bars, in input order.

        Args:
            contours: Contours in extraction order.

        Returns:
            Candidates in the same relative order as their contours.
        """
        candidates: List[Candidate] = []

        for idx, contour in enumerate(contours):
            reason = self.rejection_reason(contour)
            if reason is not None:
                logging.debug(
                    f"Contour {idx} rejected ({reason}): area={contour.area:g}, "
                    f"bbox={contour.bbox.as_tuple()}"
                )
                continue

            candidate = Candidate.from_contour(
                contour,
                aspect_ratio=aspect_ratio(contour.bbox),
                contour_index=idx,
            )
            candidates.append(candidate)
            rank = len(candidates)
            logging.info(candidate.summary(rank))

            if self._on_candidate:
                try:
                    self._on_candidate(rank, candidate)
                except Exception as e:
                    logging.warning(f"Candidate callback error: {e}")

        logging.info(f"Selected {len(candidates)} light bars from {len(contours)} contours")
        return candidates
