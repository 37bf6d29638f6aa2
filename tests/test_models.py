"""
Smoke tests for typed models and adapters.
"""

import numpy as np
import pytest

from models.candidate import Candidate, truncate_ratio
from models.color import HsvRange
from models.config import (
    Config,
    ColorConfig,
    ClassificationThresholds,
    AnnotationConfig,
    PreprocessConfig,
)
from models.contour import BoundingRect, Contour
from models.errors import (
    ConfigurationError,
    DimensionMismatchError,
    InvalidInputError,
    LightBarError,
)
from models.image import ImageInfo, is_empty_image
from models.mask import BinaryMask, union_all


def _blank_mask(height, width):
    return BinaryMask(data=np.zeros((height, width), dtype=np.uint8))


def _random_mask(seed, shape=(20, 30)):
    rng = np.random.default_rng(seed)
    return BinaryMask.from_array(rng.integers(0, 2, size=shape))


class TestHsvRange:
    def test_valid_range(self):
        rng = HsvRange(lower=(0, 100, 100), upper=(10, 255, 255))
        assert rng.lower == (0, 100, 100)
        assert rng.upper_array().dtype == np.uint8

    def test_lists_are_normalized_to_tuples(self):
        rng = HsvRange(lower=[100, 100, 100], upper=[130, 255, 255])
        assert rng.lower == (100, 100, 100)
        assert rng.upper == (130, 255, 255)

    def test_lower_above_upper_fails(self):
        with pytest.raises(ConfigurationError):
            HsvRange(lower=(20, 100, 100), upper=(10, 255, 255))

    def test_hue_out_of_range_fails(self):
        with pytest.raises(ConfigurationError):
            HsvRange(lower=(0, 0, 0), upper=(200, 255, 255))

    def test_wrong_length_fails(self):
        with pytest.raises(ConfigurationError):
            HsvRange(lower=(0, 0), upper=(10, 255, 255))

    def test_dict_roundtrip(self):
        rng = HsvRange.from_dict({"lower": [0, 1, 2], "upper": [3, 4, 5]})
        assert rng.to_dict() == {"lower": [0, 1, 2], "upper": [3, 4, 5]}

    def test_from_dict_requires_bounds(self):
        with pytest.raises(ConfigurationError):
            HsvRange.from_dict({"lower": [0, 1, 2]})


class TestBinaryMask:
    def test_from_array_normalizes_values(self):
        mask = BinaryMask.from_array(np.array([[0, 1], [7, 0]]))
        np.testing.assert_array_equal(mask.data, np.array([[0, 255], [255, 0]], dtype=np.uint8))
        assert mask.foreground_count == 2
        assert mask.shape == (2, 2)

    def test_from_array_rejects_3d(self):
        with pytest.raises(InvalidInputError):
            BinaryMask.from_array(np.zeros((2, 2, 3)))

    def test_is_empty(self):
        assert not _blank_mask(10, 20).is_empty
        assert _blank_mask(10, 20).width == 20
        assert _blank_mask(0, 20).is_empty

    def test_union(self):
        a = BinaryMask.from_array(np.array([[1, 0], [0, 0]]))
        b = BinaryMask.from_array(np.array([[0, 0], [0, 1]]))
        assert (a | b).foreground_count == 2

    def test_union_is_commutative(self):
        a, b = _random_mask(1), _random_mask(2)
        assert a.union(b).equals(b.union(a))

    def test_union_is_associative(self):
        a, b, c = _random_mask(1), _random_mask(2), _random_mask(3)
        assert a.union(b).union(c).equals(a.union(b.union(c)))

    def test_union_does_not_mutate_inputs(self):
        a, b = _random_mask(4), _random_mask(5)
        before = a.data.copy()
        a.union(b)
        np.testing.assert_array_equal(a.data, before)

    def test_union_dimension_mismatch(self):
        a = _blank_mask(10, 10)
        b = _blank_mask(10, 11)
        with pytest.raises(DimensionMismatchError):
            a.union(b)
        with pytest.raises(DimensionMismatchError):
            b | a

    def test_union_all(self):
        masks = [_random_mask(i) for i in range(4)]
        combined = union_all(masks)
        expected = np.bitwise_or.reduce([m.data for m in masks])
        np.testing.assert_array_equal(combined.data, expected)

    def test_union_all_empty_list(self):
        with pytest.raises(InvalidInputError):
            union_all([])


class TestBoundingRect:
    def test_properties(self):
        rect = BoundingRect(x=10, y=20, width=6, height=30)
        assert rect.x2 == 16
        assert rect.y2 == 50
        assert rect.top_left == (10, 20)
        assert rect.area == 180
        assert rect.as_tuple() == (10, 20, 6, 30)
        assert not rect.is_degenerate

    def test_degenerate(self):
        assert BoundingRect(0, 0, 0, 10).is_degenerate
        assert BoundingRect(0, 0, 10, 0).is_degenerate


class TestContour:
    def test_from_points_rectangle(self):
        # Boundary of a filled 6 x 30 block as cv2.findContours reports it
        contour = Contour.from_points([(10, 20), (10, 49), (15, 49), (15, 20)])
        assert contour.bbox == BoundingRect(10, 20, 6, 30)
        assert contour.area == pytest.approx(145.0)
        assert contour.points.shape == (4, 1, 2)
        assert contour.num_points == 4

    def test_area_is_polygon_not_bbox(self):
        triangle = Contour.from_points([(0, 0), (10, 0), (0, 10)])
        assert triangle.area == pytest.approx(50.0)
        assert triangle.bbox.area == 121

    def test_empty_points(self):
        contour = Contour.from_points(np.zeros((0, 1, 2), dtype=np.int32))
        assert contour.area == 0.0
        assert contour.bbox.is_degenerate

    def test_two_point_contour_has_zero_area(self):
        contour = Contour.from_points([(5, 5), (5, 30)])
        assert contour.area == 0.0


class TestCandidate:
    def _candidate(self, area=145.0, ratio=5.0):
        contour = Contour(
            points=np.zeros((0, 1, 2), dtype=np.int32),
            bbox=BoundingRect(47, 35, 6, 30),
            area=area,
        )
        return Candidate.from_contour(contour, aspect_ratio=ratio, contour_index=3)

    def test_truncate_ratio(self):
        assert truncate_ratio(5.0) == "5.00"
        assert truncate_ratio(1.6666) == "1.66"
        assert truncate_ratio(7.9) == "7.90"

    def test_from_contour(self):
        candidate = self._candidate()
        assert candidate.bbox == BoundingRect(47, 35, 6, 30)
        assert candidate.area == 145.0
        assert candidate.contour_index == 3

    def test_label(self):
        assert self._candidate(area=145.7).label() == "A:145 R:5.00"

    def test_summary(self):
        summary = self._candidate().summary(2)
        assert summary.startswith("Light bar 2:")
        assert "area=145" in summary
        assert "aspect_ratio=5.00" in summary
        assert "origin=(47,35)" in summary


class TestImageInfo:
    def test_from_numpy(self):
        info = ImageInfo.from_numpy(np.zeros((480, 640, 3), dtype=np.uint8), source="hero.png")
        assert info.size == (640, 480)
        assert info.channels == 3
        assert info.pixel_count == 307200
        assert info.source == "hero.png"

    def test_grayscale_channels(self):
        assert ImageInfo.from_numpy(np.zeros((4, 5), dtype=np.uint8)).channels == 1

    def test_is_empty_image(self):
        assert is_empty_image(None)
        assert is_empty_image(np.zeros((0, 10, 3), dtype=np.uint8))
        assert not is_empty_image(np.zeros((1, 1, 3), dtype=np.uint8))


class TestErrors:
    def test_stage_prefix(self):
        err = InvalidInputError("mask construction received an empty image", stage="mask")
        assert str(err) == "[mask] mask construction received an empty image"
        assert isinstance(err, LightBarError)

    def test_without_stage(self):
        assert str(DimensionMismatchError("boom")) == "boom"


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.classification.area_min == 50
        assert config.classification.area_max == 5000
        assert config.classification.aspect_ratio_min == 1.5
        assert config.classification.aspect_ratio_max == 8.0
        assert config.classification.min_width == 3
        assert config.classification.min_height == 10
        assert config.morphology.kernel_size == 3
        assert config.colors.red_range_1.upper == (10, 255, 255)
        assert config.colors.red_range_2.lower == (160, 100, 100)
        assert config.colors.blue_range.lower == (100, 100, 100)

    def test_ranges_by_color(self):
        ranges = ColorConfig().ranges_by_color()
        assert len(ranges["red"]) == 2
        assert len(ranges["blue"]) == 1

    def test_from_dict(self, valid_config):
        valid_config["classification"]["area_min"] = 80
        valid_config["preprocess"]["blur"] = "gaussian"
        config = Config.from_dict(valid_config)
        assert config.classification.area_min == 80
        assert config.preprocess.blur == "gaussian"
        assert config.annotation.box_color == (0, 255, 0)

    def test_from_empty_dict_uses_defaults(self):
        config = Config.from_dict({})
        assert config.classification == ClassificationThresholds()
        assert config.preprocess == PreprocessConfig()
        assert config.annotation == AnnotationConfig()

    def test_roundtrip(self, valid_config):
        config = Config.from_dict(valid_config)
        again = Config.from_dict(config.to_dict())
        assert again.classification == config.classification
        assert again.colors == config.colors
        assert again.annotation == config.annotation

    def test_thresholds_reject_inverted_area(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ClassificationThresholds(area_min=6000, area_max=100)
        assert "area_min" in str(exc_info.value)

    def test_thresholds_reject_inverted_aspect_ratio(self):
        with pytest.raises(ConfigurationError):
            ClassificationThresholds(aspect_ratio_min=8.0, aspect_ratio_max=1.5)

    @pytest.mark.parametrize("field_name,value", [
        ("area_min", "50"),
        ("min_width", -1),
        ("min_height", None),
        ("aspect_ratio_max", True),
    ])
    def test_thresholds_reject_bad_values(self, field_name, value):
        with pytest.raises(ConfigurationError) as exc_info:
            ClassificationThresholds.from_dict({field_name: value})
        assert field_name in str(exc_info.value)

    def test_thresholds_are_frozen(self):
        thresholds = ClassificationThresholds()
        with pytest.raises(Exception):
            thresholds.area_min = 10
