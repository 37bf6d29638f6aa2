"""
Error types for the light-bar pipeline.

Every failure carries the name of the pipeline stage that raised it so a
failed run can be traced back to the threshold or input that caused it.
"""

from __future__ import annotations

from typing import Optional


class LightBarError(Exception):
    """Base exception for all light-bar pipeline errors."""

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class InvalidInputError(LightBarError):
    """Raised when an empty image or mask is passed into a stage."""
    pass


class DimensionMismatchError(LightBarError):
    """Raised when combining masks of different dimensions."""
    pass


class ConfigurationError(LightBarError):
    """Raised when configuration values are invalid."""
    pass
