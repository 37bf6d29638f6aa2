"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


# BGR colors that land inside / outside the default HSV ranges
RED_BGR = (0, 0, 255)            # hue 0
MAGENTA_RED_BGR = (128, 0, 255)  # hue ~165, high red band
BLUE_BGR = (255, 0, 0)           # hue 120
GREEN_BGR = (0, 255, 0)          # hue 60, outside every range
GRAY_BGR = (128, 128, 128)       # zero saturation


def make_image(width=100, height=100, background=GRAY_BGR):
    """Uniform BGR image."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :] = background
    return image


def fill_rect(image, x, y, w, h, color):
    """Paint a solid w x h rectangle with top-left corner (x, y)."""
    image[y:y + h, x:x + w] = color
    return image


@pytest.fixture
def background_image():
    return make_image()


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
colors:
  red_range_1: {lower: [0, 100, 100], upper: [10, 255, 255]}
  red_range_2: {lower: [160, 100, 100], upper: [180, 255, 255]}
  blue_range: {lower: [100, 100, 100], upper: [130, 255, 255]}

morphology:
  kernel_size: 3

classification:
  area_min: 50
  area_max: 5000
  aspect_ratio_min: 1.5
  aspect_ratio_max: 8.0
  min_width: 3
  min_height: 10

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "colors": {
            "red_range_1": {"lower": [0, 100, 100], "upper": [10, 255, 255]},
            "red_range_2": {"lower": [160, 100, 100], "upper": [180, 255, 255]},
            "blue_range": {"lower": [100, 100, 100], "upper": [130, 255, 255]},
        },
        "preprocess": {
            "blur": "none",
            "kernel_size": 5,
            "sigma": 1.0,
        },
        "morphology": {
            "kernel_size": 3,
        },
        "classification": {
            "area_min": 50,
            "area_max": 5000,
            "aspect_ratio_min": 1.5,
            "aspect_ratio_max": 8.0,
            "min_width": 3,
            "min_height": 10,
        },
        "annotation": {
            "box_color": [0, 255, 0],
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }
