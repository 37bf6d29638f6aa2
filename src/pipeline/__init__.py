"""
Pipeline module for the light-bar detector.

The pipeline orchestrates the full processing flow:
- Optional blur
- Color masking and mask refinement
- Contour extraction and light-bar classification
- Annotation (via Annotator)
"""

from .engine import (
    LightBarPipeline,
    PipelineResult,
    PipelineState,
    create_pipeline_from_config,
)
from .stages.annotate import Annotator

__all__ = [
    "LightBarPipeline",
    "PipelineResult",
    "PipelineState",
    "create_pipeline_from_config",
    "Annotator",
]
