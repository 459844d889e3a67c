"""
Stage logic with a scripted backend: which angle gets applied, which contour gets picked.
"""
import numpy as np
import pytest

from mrzcrop.mrz.image import MrzRegionLocator, RotationNormalizer, TextAlignmentCorrector, normalize_height
from mrzcrop.util.geometry import BoundingBox, LineSegment


def test_normalize_height_keeps_aspect_ratio(fake_backend):
    backend = fake_backend()
    out = normalize_height(backend, np.zeros((600, 850), np.uint8))
    assert backend.resized_to == [(1700, 1200)]
    assert out.shape == (1200, 1700)


def test_normalize_height_truncates_width(fake_backend):
    backend = fake_backend()
    normalize_height(backend, np.zeros((700, 1000), np.uint8))
    assert backend.resized_to == [(1714, 1200)]


def test_rotation_normalizer_swaps_width_and_height(fake_backend):
    img = np.arange(12, dtype=np.uint8).reshape(3, 4)
    out = RotationNormalizer(fake_backend())(img)
    assert out.shape == (4, 3)


class TestTextAlignmentCorrector:

    def test_rotates_by_dominant_angle(self, fake_backend):
        segments = [LineSegment(0, 0, 500, 46), LineSegment(0, 10, 500, 57), LineSegment(0, 0, 0, 300)]
        backend = fake_backend(segments=segments)
        img_aligned, angle, found_segments = TextAlignmentCorrector(backend)(np.zeros((600, 800), np.uint8))
        assert 5.0 < angle < 6.0
        assert backend.rotated_by == [angle]
        assert found_segments == segments
        assert img_aligned.shape == (1200, 1600)

    def test_negative_skew_is_applied_as_positive_rotation(self, fake_backend):
        segments = [LineSegment(0, 100, 500, 12), LineSegment(0, 200, 500, 113)]
        backend = fake_backend(segments=segments)
        _, angle, _ = TextAlignmentCorrector(backend)(np.zeros((600, 800), np.uint8))
        assert 349.0 < angle < 351.0

    def test_no_segments_means_no_rotation(self, fake_backend):
        backend = fake_backend()
        _, angle, segments = TextAlignmentCorrector(backend)(np.zeros((600, 800), np.uint8))
        assert angle == 0.0
        assert segments == []
        assert backend.rotated_by == [0.0]


class TestMrzRegionLocator:

    def test_first_wide_contour_wins(self, fake_backend):
        # Known heuristic: the first qualifying contour is taken even if a wider one follows
        contours = [BoundingBox(10, 10, 40, 10), BoundingBox(110, 510, 600, 100), BoundingBox(0, 0, 1000, 20)]
        backend = fake_backend(contours=contours)
        img_working, box, roi = MrzRegionLocator(backend)(np.zeros((600, 800), np.uint8))
        assert box == BoundingBox(89, 492, 642, 136)
        assert roi.shape == (136, 642)
        assert img_working.shape == (1200, 1600)

    def test_aspect_must_exceed_threshold(self, fake_backend):
        backend = fake_backend(contours=[BoundingBox(0, 0, 500, 100)])
        _, box, roi = MrzRegionLocator(backend)(np.zeros((600, 800), np.uint8))
        assert box is None and roi is None

    def test_threshold_and_padding_are_configurable(self, fake_backend):
        backend = fake_backend(contours=[BoundingBox(110, 510, 400, 100)])
        locator = MrzRegionLocator(backend, min_aspect=3.0, pad_ratio=0.0)
        _, box, roi = locator(np.zeros((600, 800), np.uint8))
        assert box == BoundingBox(110, 510, 400, 100)
        assert roi.shape == (100, 400)

    def test_nothing_found(self, fake_backend):
        backend = fake_backend(contours=[])
        img_working, box, roi = MrzRegionLocator(backend)(np.zeros((600, 800), np.uint8))
        assert box is None and roi is None
        assert img_working.shape == (1200, 1600)

    @pytest.mark.parametrize('box, qualifies', [
        (BoundingBox(0, 0, 51, 10), True),
        (BoundingBox(0, 0, 50, 10), False),
        (BoundingBox(0, 0, 50, 0), False),
    ])
    def test_find_box(self, fake_backend, box, qualifies):
        locator = MrzRegionLocator(fake_backend())
        assert locator.find_box([box]) == (box if qualifies else None)
