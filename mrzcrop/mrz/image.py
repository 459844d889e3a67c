'''
mrzcrop::MRZ: Machine-readable zone location and cropping.
Image processing for MRZ region extraction.

Author: mrzcrop contributors
License: MIT
'''
import logging

from .skew import dominant_angle

logger = logging.getLogger(__name__)

WORKING_HEIGHT = 1200


def normalize_height(backend, img, height=WORKING_HEIGHT):
    """Resizes `img` to the given height, keeping the aspect ratio (the new width is truncated)."""
    rows, cols = img.shape[:2]
    width = int(cols * height / float(rows))
    logger.debug("Resizing %dx%d to %dx%d", cols, rows, width, height)
    return backend.resize(img, width, height)


def text_blobs(backend, gray, rect_kernel=(16, 10), sq_kernel=(31, 31), erode_iterations=4):
    """
    Turns a smoothed gray image into a binary mask where each block of text lines is one solid blob.

    Horizontal gradients respond to the vertical glyph strokes; closing with `rect_kernel` joins strokes
    into lines, Otsu binarizes, closing with `sq_kernel` joins neighbouring lines and the final erosion
    removes thin leftovers.
    """
    grad = backend.gradient_x(gray)
    closed = backend.close(grad, rect_kernel)
    binary = backend.otsu_threshold(closed)
    binary = backend.close(binary, sq_kernel)
    return backend.erode(binary, (3, 3), erode_iterations)


class RotationNormalizer(object):
    """Turns a portrait capture `img` into landscape `img_oriented` by rotating it -90 degrees."""

    __depends__ = ['img']
    __provides__ = ['img_oriented']

    def __init__(self, backend):
        self.backend = backend

    def __call__(self, img):
        return self.backend.rotate90(img)


class TextAlignmentCorrector(object):
    """
    Resizes `img_oriented` to a fixed height and rotates it so that the dominant text direction is horizontal.
    Outputs `img_aligned`, the rotation applied (`skew_angle`, degrees) and the Hough segments it voted on
    (`line_segments`).
    """

    __depends__ = ['img_oriented']
    __provides__ = ['img_aligned', 'skew_angle', 'line_segments']

    def __init__(self, backend, height=WORKING_HEIGHT, rect_kernel=(16, 10), sq_kernel=(31, 31),
                 erode_iterations=4, canny_thresholds=(50, 200), hough_threshold=10,
                 min_line_length=100, max_line_gap=10):
        self.backend = backend
        self.height = height
        self.rect_kernel = rect_kernel
        self.sq_kernel = sq_kernel
        self.erode_iterations = erode_iterations
        self.canny_thresholds = canny_thresholds
        self.hough_threshold = hough_threshold
        self.min_line_length = min_line_length
        self.max_line_gap = max_line_gap

    def __call__(self, img_oriented):
        img = normalize_height(self.backend, img_oriented, self.height)
        gray = self.backend.gaussian_blur(self.backend.to_gray(img), (3, 3))
        blobs = text_blobs(self.backend, gray, self.rect_kernel, self.sq_kernel, self.erode_iterations)
        edges = self.backend.canny(blobs, *self.canny_thresholds)
        segments = self.backend.hough_segments(edges, 1, 1, self.hough_threshold,
                                               self.min_line_length, self.max_line_gap)
        logger.debug("Found %d line segments", len(segments))
        angle = dominant_angle([s.angle for s in segments])
        return self.backend.rotate(img, angle), angle, segments


class MrzRegionLocator(object):
    """
    Finds the MRZ in `img_aligned` and crops it out.

    Follows Adrian Rosebrock's blackhat method
    (http://www.pyimagesearch.com/2015/11/30/detecting-machine-readable-zones-in-passport-images/):
    the first blob of the text mask whose bounding box is wider than `min_aspect` times its height is
    taken as the MRZ. Outputs the image the search ran on (`img_working`), the padded box (`mrz_box`) and
    the crop (`roi`); the last two are None when nothing qualifies.
    """

    __depends__ = ['img_aligned']
    __provides__ = ['img_working', 'mrz_box', 'roi']

    def __init__(self, backend, height=WORKING_HEIGHT, rect_kernel=(16, 10), sq_kernel=(31, 31),
                 erode_iterations=4, min_aspect=5.0, pad_ratio=0.03):
        self.backend = backend
        self.height = height
        self.rect_kernel = rect_kernel
        self.sq_kernel = sq_kernel
        self.erode_iterations = erode_iterations
        self.min_aspect = min_aspect
        self.pad_ratio = pad_ratio

    def __call__(self, img_aligned):
        img_working = normalize_height(self.backend, img_aligned, self.height)
        gray = self.backend.gaussian_blur(self.backend.to_gray(img_working), (3, 3))
        blackhat = self.backend.blackhat(gray, self.rect_kernel)
        blobs = text_blobs(self.backend, blackhat, self.rect_kernel, self.sq_kernel, self.erode_iterations)

        box = self.find_box(self.backend.external_contours(blobs))
        if box is None:
            logger.debug("No MRZ-like region found")
            return img_working, None, None
        box = box.padded(self.pad_ratio)
        logger.debug("MRZ region after padding: %r", box)
        return img_working, box, self.backend.crop(img_working, box)

    def find_box(self, contours):
        """Bounding box of the first contour (in the order given) that is wide enough, or None."""
        logger.debug("Examining %d contours", len(contours))
        for c in contours:
            box = self.backend.bounding_rect(c)
            if box.aspect > self.min_aspect:
                logger.debug("MRZ candidate %r, aspect %.2f", box, box.aspect)
                return box
        return None
