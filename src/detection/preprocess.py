"""
Image preprocessing helpers: grayscale conversion and blur.
"""

from __future__ import annotations

import cv2
import numpy as np

from models.config import BLUR_MODES, PreprocessConfig
from models.errors import ConfigurationError, InvalidInputError
from models.image import is_empty_image


def _validate_kernel(kernel_size: int) -> None:
    if not isinstance(kernel_size, int) or kernel_size <= 0 or kernel_size % 2 == 0:
        raise ConfigurationError(f"kernel size must be a positive odd integer, got {kernel_size!r}")


def to_gray(image: np.ndarray) -> np.ndarray:
    """Convert a BGR image to single-channel grayscale."""
    if is_empty_image(image):
        raise InvalidInputError("grayscale conversion received an empty image")
    if image.ndim == 2:
        return image.copy()
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def mean_blur(image: np.ndarray, kernel_size: int = 5) -> np.ndarray:
    """Box-filter the image with a square kernel."""
    if is_empty_image(image):
        raise InvalidInputError("mean blur received an empty image")
    _validate_kernel(kernel_size)
    return cv2.blur(image, (kernel_size, kernel_size))


def gaussian_blur(image: np.ndarray, kernel_size: int = 5, sigma: float = 1.0) -> np.ndarray:
    """Gaussian-filter the image with a square kernel."""
    if is_empty_image(image):
        raise InvalidInputError("gaussian blur received an empty image")
    _validate_kernel(kernel_size)
    return cv2.GaussianBlur(image, (kernel_size, kernel_size), sigma)


def apply_blur(image: np.ndarray, config: PreprocessConfig) -> np.ndarray:
    """
    Apply the blur selected in config.

    "none" returns the image itself; the blur modes return a new array.
    """
    if config.blur not in BLUR_MODES:
        raise ConfigurationError(f"preprocess.blur must be one of: {', '.join(BLUR_MODES)}")
    if config.blur == "mean":
        return mean_blur(image, config.kernel_size)
    if config.blur == "gaussian":
        return gaussian_blur(image, config.kernel_size, config.sigma)
    return image
