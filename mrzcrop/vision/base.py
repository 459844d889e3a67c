'''
mrzcrop::vision: Image-processing backends.
The set of vision operations the MRZ pipeline needs.

Author: mrzcrop contributors
License: MIT
'''
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

import numpy as np

from ..util.geometry import BoundingBox, LineSegment
from ..util.types import Image

# Kernel sizes are (width, height), as in OpenCV
KernelSize = Tuple[int, int]


class VisionBackend(ABC):
    """
    Capability interface for the image operations used by the MRZ pipeline.

    All methods take and return uint8 numpy arrays and never modify their input. Colour images are
    expected in the backend's native channel order.
    """

    name = None

    @abstractmethod
    def rotate90(self, img: Image) -> Image:
        """Rotates by -90 degrees (clockwise on screen) about the centre; width and height are exchanged."""

    @abstractmethod
    def resize(self, img: Image, width: int, height: int) -> Image:
        """Area-averaging resize to exactly `width` x `height`."""

    @abstractmethod
    def to_gray(self, img: Image) -> Image:
        """Single-channel intensity image. Gray input is returned as a copy."""

    @abstractmethod
    def gaussian_blur(self, img: Image, ksize: KernelSize) -> Image:
        pass

    @abstractmethod
    def blackhat(self, img: Image, ksize: KernelSize) -> Image:
        """Closing minus the image with a rectangular element; dark details on light background turn bright."""

    @abstractmethod
    def gradient_x(self, img: Image) -> Image:
        """|d/dx| with the [-1, 0, 1] kernel, saturated to 8 bits."""

    @abstractmethod
    def close(self, img: Image, ksize: KernelSize) -> Image:
        """Morphological closing with a rectangular element."""

    @abstractmethod
    def otsu_threshold(self, img: Image) -> Image:
        """Binary 0/255 image using Otsu's global threshold."""

    @abstractmethod
    def erode(self, img: Image, ksize: KernelSize, iterations: int) -> Image:
        pass

    @abstractmethod
    def canny(self, img: Image, low: float, high: float) -> Image:
        """Binary 0/255 edge map."""

    @abstractmethod
    def hough_segments(self, edges: Image, rho: float, theta: float, threshold: int,
                       min_line_length: int, max_line_gap: int) -> List[LineSegment]:
        """
        Probabilistic Hough transform.

        :param rho: distance resolution in pixels
        :param theta: angle resolution in degrees
        """

    @abstractmethod
    def external_contours(self, mask: Image) -> Sequence[np.ndarray]:
        """Outer contours of the foreground of a binary image, each as an (N, 2) array of (x, y) points."""

    @abstractmethod
    def bounding_rect(self, contour: np.ndarray) -> BoundingBox:
        """Smallest upright box containing every point of the contour."""

    @abstractmethod
    def rotate(self, img: Image, angle: float) -> Image:
        """
        Rotates by `angle` degrees (positive is counter-clockwise on screen) about the image centre,
        keeping the size; uncovered pixels are black (and transparent for RGBA).
        """

    def crop(self, img: Image, box: BoundingBox) -> Image:
        """Copies out the region under `box`. Parts of the box outside the image are dropped."""
        return img[box.y:box.y + box.height, box.x:box.x + box.width].copy()

    def __repr__(self):
        return '%s()' % type(self).__name__
