"""
Synthetic document images and a scripted vision backend shared by the tests.
"""
import cv2
import numpy as np
import pytest

from mrzcrop.vision.base import VisionBackend

# Two MRZ lines of 80 glyph-like bars each, on a white 1600x1200 page
GLYPHS_PER_LINE = 80
GLYPH_WIDTH = 6
GLYPH_HEIGHT = 28
GLYPH_PITCH = 12
LINE_TOPS = (820, 868)
MRZ_LEFT = 320
MRZ_TOP = LINE_TOPS[0]
MRZ_RIGHT = MRZ_LEFT + (GLYPHS_PER_LINE - 1) * GLYPH_PITCH + GLYPH_WIDTH
MRZ_BOTTOM = LINE_TOPS[-1] + GLYPH_HEIGHT


def draw_mrz(rows=1200, cols=1600):
    img = np.full((rows, cols, 3), 255, dtype=np.uint8)
    for top in LINE_TOPS:
        for i in range(GLYPHS_PER_LINE):
            x = MRZ_LEFT + i * GLYPH_PITCH
            img[top:top + GLYPH_HEIGHT, x:x + GLYPH_WIDTH] = 0
    return img


def tilt(img, angle):
    """Rotates the page so that horizontal text runs at `angle` degrees (atan2 convention, y down)."""
    h, w = img.shape[:2]
    M = cv2.getRotationMatrix2D((w / 2, h / 2), -angle, 1)
    return cv2.warpAffine(img, M, (w, h), flags=cv2.INTER_LINEAR,
                          borderMode=cv2.BORDER_CONSTANT, borderValue=(255, 255, 255))


@pytest.fixture
def mrz_image():
    return draw_mrz()


@pytest.fixture
def blank_image():
    return np.full((900, 1200, 3), 255, dtype=np.uint8)


class FakeBackend(VisionBackend):
    """
    Passes images through unchanged and returns scripted Hough segments and contours.
    Contours are given directly as BoundingBox objects.
    """

    name = 'fake'

    def __init__(self, segments=(), contours=()):
        self.segments = list(segments)
        self.contours = list(contours)
        self.resized_to = []
        self.rotated_by = []

    def rotate90(self, img):
        return np.rot90(img, k=-1).copy()

    def resize(self, img, width, height):
        self.resized_to.append((width, height))
        return np.zeros((height, width), dtype=np.uint8)

    def to_gray(self, img):
        return img if img.ndim == 2 else img[..., 0].copy()

    def gaussian_blur(self, img, ksize):
        return img

    def blackhat(self, img, ksize):
        return img

    def gradient_x(self, img):
        return img

    def close(self, img, ksize):
        return img

    def otsu_threshold(self, img):
        return img

    def erode(self, img, ksize, iterations):
        return img

    def canny(self, img, low, high):
        return img

    def hough_segments(self, edges, rho, theta, threshold, min_line_length, max_line_gap):
        return list(self.segments)

    def external_contours(self, mask):
        return list(self.contours)

    def bounding_rect(self, contour):
        return contour

    def rotate(self, img, angle):
        self.rotated_by.append(angle)
        return img


@pytest.fixture
def fake_backend():
    return FakeBackend
