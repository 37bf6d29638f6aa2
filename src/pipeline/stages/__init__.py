"""
Pipeline stages for the light-bar detector.

Stages that produce output for inspection rather than decisions:
- annotate: Frame annotation
"""

from .annotate import Annotator

__all__ = ["Annotator"]
