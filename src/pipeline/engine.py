"""
Pipeline engine for the light-bar detector.

Runs one image through a fixed linear sequence of stages:

    Loaded -> Masked -> Refined -> Contoured -> Classified -> Annotated

Each stage fully consumes its predecessor's output. Any stage failure aborts
the run; no partial results are returned and nothing is retried.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import cv2
import numpy as np

from detection.classifier import LightBarClassifier
from detection.color_mask import ColorMaskBuilder
from detection.contours import extract_contours
from detection.preprocess import apply_blur
from detection.refine import MaskRefiner
from models.candidate import Candidate
from models.config import Config, PreprocessConfig
from models.contour import Contour
from models.errors import LightBarError
from models.mask import BinaryMask
from pipeline.stages.annotate import Annotator


class PipelineState(Enum):
    """Last state a run reached."""
    LOADED = "loaded"
    MASKED = "masked"
    REFINED = "refined"
    CONTOURED = "contoured"
    CLASSIFIED = "classified"
    ANNOTATED = "annotated"


# Stage names used in error reports and timings
STAGE_PREPROCESS = "preprocess"
STAGE_MASK = "mask"
STAGE_REFINE = "refine"
STAGE_CONTOURS = "contours"
STAGE_CLASSIFY = "classify"
STAGE_ANNOTATE = "annotate"


@dataclass
class PipelineResult:
    """
    Output of a single pipeline run.

    Attributes:
        raw_mask: Color mask before refinement.
        mask: Refined mask the contours were extracted from.
        contours: All extracted contours in extraction order.
        candidates: Accepted light bars in extraction order.
        annotated: Copy of the input with candidates drawn on it.
        state: Final pipeline state (ANNOTATED on success).
        timings: Seconds spent per stage.
    """
    raw_mask: BinaryMask
    mask: BinaryMask
    contours: List[Contour]
    candidates: List[Candidate]
    annotated: np.ndarray
    state: PipelineState = PipelineState.ANNOTATED
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def candidate_count(self) -> int:
        return len(self.candidates)


class LightBarPipeline:
    """
    One-shot synchronous light-bar detection.

    The pipeline holds only read-only configuration, so one instance can
    serve concurrent runs on different images.

    Example:
        pipeline = create_pipeline_from_config(config)
        result = pipeline.run(image)
        for candidate in result.candidates:
            print(candidate.bbox)
    """

    def __init__(
        self,
        mask_builder: Optional[ColorMaskBuilder] = None,
        refiner: Optional[MaskRefiner] = None,
        classifier: Optional[LightBarClassifier] = None,
        annotator: Optional[Annotator] = None,
        preprocess: Optional[PreprocessConfig] = None,
    ):
        self.mask_builder = mask_builder or ColorMaskBuilder()
        self.refiner = refiner or MaskRefiner()
        self.classifier = classifier or LightBarClassifier()
        self.annotator = annotator or Annotator()
        self.preprocess = preprocess or PreprocessConfig()

    def run(self, image: np.ndarray) -> PipelineResult:
        """
        Run all stages on one BGR image.

        Raises:
            LightBarError: With `stage` set to the stage that failed.
        """
        timings: Dict[str, float] = {}
        state = PipelineState.LOADED

        def _timed(stage: str, fn, *args):
            start = time.perf_counter()
            try:
                return fn(*args)
            except LightBarError as e:
                if e.stage is None:
                    e.stage = stage
                logging.error(f"Pipeline failed at stage '{stage}' (last state: {state.value}): {e.message}")
                raise
            except cv2.error as e:
                message = f"OpenCV error: {str(e).strip()}"
                logging.error(f"Pipeline failed at stage '{stage}' (last state: {state.value}): {message}")
                raise LightBarError(message, stage=stage) from e
            finally:
                timings[stage] = time.perf_counter() - start

        source = _timed(STAGE_PREPROCESS, apply_blur, image, self.preprocess)

        raw_mask = _timed(STAGE_MASK, self.mask_builder.build, source)
        state = PipelineState.MASKED

        mask = _timed(STAGE_REFINE, self.refiner.refine, raw_mask)
        state = PipelineState.REFINED

        contours = _timed(STAGE_CONTOURS, extract_contours, mask)
        state = PipelineState.CONTOURED
        logging.info(f"Found {len(contours)} contours")

        candidates = _timed(STAGE_CLASSIFY, self.classifier.classify, contours)
        state = PipelineState.CLASSIFIED

        annotated = _timed(STAGE_ANNOTATE, self.annotator.annotate, image, candidates)
        state = PipelineState.ANNOTATED

        logging.debug(
            "Stage timings: "
            + ", ".join(f"{name}={secs * 1000:.1f}ms" for name, secs in timings.items())
        )

        return PipelineResult(
            raw_mask=raw_mask,
            mask=mask,
            contours=contours,
            candidates=candidates,
            annotated=annotated,
            state=state,
            timings=timings,
        )


def create_pipeline_from_config(config: Union[Config, Dict[str, Any], None] = None) -> LightBarPipeline:
    """
    Factory function to create a LightBarPipeline from config.

    Args:
        config: A typed Config, a raw config dict (e.g. from load_config), or
                None for defaults.
    """
    if config is None:
        cfg = Config()
    elif isinstance(config, Config):
        cfg = config
    else:
        cfg = Config.from_dict(config)

    return LightBarPipeline(
        mask_builder=ColorMaskBuilder(cfg.colors),
        refiner=MaskRefiner(cfg.morphology.kernel_size),
        classifier=LightBarClassifier(cfg.classification),
        annotator=Annotator(cfg.annotation),
        preprocess=cfg.preprocess,
    )
