"""
Command-line driver for the light-bar detector.

Loads an image, runs the light-bar pipeline on it and writes the refined
mask and the annotated result to an output directory.

Usage:
    python src/main.py hero.png --config config/config.yaml --output-dir output

Arguments:
    image: Path to the input image
    --config: Path to configuration file
    --output-dir: Directory for result images
    --save-intermediates: Also write grayscale and blurred images
    --log-level: Override the configured log level
"""

import os
import sys
import argparse
import logging
import yaml
import cv2
import numpy as np
from typing import Dict, Any, List, Optional, Tuple

from models.config import BLUR_MODES, Config
from models.errors import LightBarError, InvalidInputError
from models.image import ImageInfo
from detection.preprocess import to_gray, mean_blur, gaussian_blur
from ops.logging import setup_logging
from pipeline.engine import create_pipeline_from_config

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        base_path = os.path.join(os.path.dirname(config_path), "default.yaml")
        base_cfg: Dict[str, Any] = {}
        if os.path.exists(base_path):
            with open(base_path, "r") as f:
                base_cfg = yaml.safe_load(f) or {}

        local_overrides_path = os.path.join(os.path.dirname(config_path), "config.yaml")
        local_cfg: Dict[str, Any] = {}
        if os.path.exists(local_overrides_path):
            with open(local_overrides_path, "r") as f:
                local_cfg = yaml.safe_load(f) or {}

        merged = _deep_merge(base_cfg, local_cfg)

        # Finally apply explicit config_path if it's not one of the layered files.
        # `--config config/default.yaml` would otherwise re-apply the defaults over
        # local overrides and silently discard them.
        explicit = os.path.abspath(config_path)
        if (
            os.path.exists(config_path)
            and explicit != os.path.abspath(local_overrides_path)
            and explicit != os.path.abspath(base_path)
        ):
            with open(config_path, "r") as f:
                explicit_cfg = yaml.safe_load(f) or {}
            merged = _deep_merge(merged, explicit_cfg)

        return merged
    except Exception as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_hsv_range(name: str, rng: Any) -> Optional[str]:
    if not isinstance(rng, dict) or 'lower' not in rng or 'upper' not in rng:
        return f"colors.{name} must have lower and upper bounds"
    for bound in ('lower', 'upper'):
        values = rng[bound]
        if not isinstance(values, list) or len(values) != 3 or not all(isinstance(v, int) for v in values):
            return f"colors.{name}.{bound} must be a list of three integers [h, s, v]"
    h_lo, s_lo, v_lo = rng['lower']
    h_hi, s_hi, v_hi = rng['upper']
    if not (0 <= h_lo <= h_hi <= 180):
        return f"colors.{name} hue bounds must satisfy 0 <= lower <= upper <= 180"
    if not (0 <= s_lo <= s_hi <= 255) or not (0 <= v_lo <= v_hi <= 255):
        return f"colors.{name} saturation/value bounds must satisfy 0 <= lower <= upper <= 255"
    return None


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration file structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    # Required top-level sections
    required_sections = ['colors', 'morphology', 'classification', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Validate color ranges
    colors = config.get('colors') or {}
    for name in ('red_range_1', 'red_range_2', 'blue_range'):
        if name not in colors:
            return False, f"Missing colors.{name}"
        error = _validate_hsv_range(name, colors[name])
        if error:
            return False, error

    # Optional preprocessing
    preprocess = config.get('preprocess') or {}
    if preprocess:
        if preprocess.get('blur', 'none') not in BLUR_MODES:
            return False, f"preprocess.blur must be one of: {', '.join(BLUR_MODES)}"
        ksize = preprocess.get('kernel_size', 5)
        if not isinstance(ksize, int) or ksize <= 0 or ksize % 2 == 0:
            return False, "preprocess.kernel_size must be a positive odd integer"
        if 'sigma' in preprocess and (not _is_number(preprocess['sigma']) or preprocess['sigma'] < 0):
            return False, "preprocess.sigma must be a non-negative number"

    # Validate morphology
    morphology = config.get('morphology') or {}
    ksize = morphology.get('kernel_size', 3)
    if not isinstance(ksize, int) or ksize <= 0:
        return False, "morphology.kernel_size must be a positive integer"

    # Validate classification thresholds
    classification = config.get('classification') or {}
    for key in ('area_min', 'area_max', 'aspect_ratio_min', 'aspect_ratio_max', 'min_width', 'min_height'):
        if key in classification and (not _is_number(classification[key]) or classification[key] < 0):
            return False, f"classification.{key} must be a non-negative number"
    if classification.get('area_min', 50) >= classification.get('area_max', 5000):
        return False, "classification.area_min must be less than classification.area_max"
    if classification.get('aspect_ratio_min', 1.5) >= classification.get('aspect_ratio_max', 8.0):
        return False, "classification.aspect_ratio_min must be less than classification.aspect_ratio_max"

    # Optional annotation style
    annotation = config.get('annotation') or {}
    if 'box_color' in annotation:
        color = annotation['box_color']
        if not isinstance(color, list) or len(color) != 3 or not all(isinstance(c, int) and 0 <= c <= 255 for c in color):
            return False, "annotation.box_color must be a list of three integers [b, g, r] in 0-255"

    # Validate log settings
    if config['log_level'] not in VALID_LOG_LEVELS:
        return False, f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"
    if 'log_path' in config and config['log_path'] is not None and not isinstance(config['log_path'], str):
        return False, "log_path must be a string"

    return True, None


def load_image(path: str) -> np.ndarray:
    """
    Decode an image file as BGR.

    Raises:
        InvalidInputError: If the file is missing or cannot be decoded.
    """
    image = cv2.imread(path)
    if image is None or image.size == 0:
        raise InvalidInputError(
            f"failed to load image: {path} (path may be invalid or format unsupported)",
            stage="load",
        )
    return image


def write_image(path: str, image: np.ndarray) -> None:
    if not cv2.imwrite(path, image):
        raise IOError(f"Failed to write image: {path}")
    logging.info(f"Saved {path}")


def log_image_info(info: ImageInfo) -> None:
    logging.info(f"Image: {info.source}")
    logging.info(f"  Size: {info.width} x {info.height}")
    logging.info(f"  Channels: {info.channels}")
    logging.info(f"  Total pixels: {info.pixel_count}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main application function."""
    # Parse command-line arguments
    parser = argparse.ArgumentParser(description='Light-bar candidate detector')
    parser.add_argument('image', type=str,
                        help='Path to input image')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--output-dir', type=str, default='output',
                        help='Directory for result images')
    parser.add_argument('--save-intermediates', action='store_true',
                        help='Also save grayscale and blurred images')
    parser.add_argument('--log-level', type=str, choices=VALID_LOG_LEVELS,
                        help='Override configured log level')
    args = parser.parse_args(argv)

    # Load configuration
    config = load_config(args.config)
    if args.log_level:
        config['log_level'] = args.log_level

    # Validate configuration
    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        return 1

    # Setup logging
    setup_logging(config.get('log_path'), config['log_level'])

    if not os.path.exists(args.output_dir):
        os.makedirs(args.output_dir)

    logging.info("Starting light-bar detection")

    try:
        typed_config = Config.from_dict(config)
        pipeline = create_pipeline_from_config(typed_config)

        image = load_image(args.image)
        log_image_info(ImageInfo.from_numpy(image, source=args.image))

        if args.save_intermediates:
            pre = typed_config.preprocess
            write_image(os.path.join(args.output_dir, 'gray.png'), to_gray(image))
            if pre.blur == 'gaussian':
                blurred = gaussian_blur(image, pre.kernel_size, pre.sigma)
            else:
                blurred = mean_blur(image, pre.kernel_size)
            write_image(os.path.join(args.output_dir, 'blur.png'), blurred)

        result = pipeline.run(image)

        write_image(os.path.join(args.output_dir, 'lightbar_mask.png'), result.mask.data)
        write_image(os.path.join(args.output_dir, 'lightbar_result.png'), result.annotated)

        logging.info(f"Detected {result.candidate_count} light bars")
        for rank, candidate in enumerate(result.candidates, start=1):
            print(candidate.summary(rank))
    except LightBarError as e:
        logging.error(f"Light-bar detection failed: {e}")
        return 1
    except IOError as e:
        logging.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
