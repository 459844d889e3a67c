'''
mrzcrop::vision: Image-processing backends.
scikit-image implementation. Colour images are expected in RGB(A) order, as skimage.io.imread returns them.

Author: mrzcrop contributors
License: MIT
'''
import numpy as np
from skimage import color, feature, filters, measure, morphology, transform, util

from ..util.geometry import BoundingBox, LineSegment
from .base import VisionBackend


def _to_ubyte(img):
    """Rounds a float array holding 0..255 values back to uint8."""
    return np.clip(np.rint(img), 0, 255).astype(np.uint8)


def _footprint(ksize):
    return np.ones((ksize[1], ksize[0]), dtype=np.uint8)


class ScikitImageBackend(VisionBackend):
    name = 'skimage'

    def __init__(self, seed=0):
        # probabilistic_hough_line samples pixels at random; a fixed seed keeps runs repeatable
        self.seed = seed

    def rotate90(self, img):
        return np.ascontiguousarray(np.rot90(img, k=-1))

    def resize(self, img, width, height):
        out_shape = (height, width) + img.shape[2:]
        downscaling = height < img.shape[0] or width < img.shape[1]
        resized = transform.resize(img, out_shape, order=1, mode='edge', preserve_range=True,
                                   anti_aliasing=downscaling)
        return _to_ubyte(resized)

    def to_gray(self, img):
        if img.ndim == 2:
            return img.copy()
        if img.shape[2] == 4:
            img = color.rgba2rgb(img)
        return util.img_as_ubyte(color.rgb2gray(img))

    def gaussian_blur(self, img, ksize):
        # Same sigma OpenCV derives for a zero sigma argument; truncate keeps the kernel at ksize
        sigma = 0.3 * ((ksize[0] - 1) * 0.5 - 1) + 0.8
        radius = (ksize[0] - 1) // 2
        blurred = filters.gaussian(img, sigma=sigma, truncate=radius / sigma, preserve_range=True)
        return _to_ubyte(blurred)

    def blackhat(self, img, ksize):
        return morphology.black_tophat(img, _footprint(ksize))

    def gradient_x(self, img):
        padded = np.pad(img.astype(np.int16), ((0, 0), (1, 1)), mode='reflect')
        grad = padded[:, 2:] - padded[:, :-2]
        return np.clip(np.abs(grad), 0, 255).astype(np.uint8)

    def close(self, img, ksize):
        return morphology.closing(img, _footprint(ksize))

    def otsu_threshold(self, img):
        threshold = filters.threshold_otsu(img)
        return np.where(img > threshold, 255, 0).astype(np.uint8)

    def erode(self, img, ksize, iterations):
        footprint = _footprint(ksize)
        for _ in range(iterations):
            img = morphology.erosion(img, footprint)
        return img

    def canny(self, img, low, high):
        # Thresholds are given on the 0..255 scale of the uint8 input
        edges = feature.canny(img, sigma=1.0, low_threshold=low, high_threshold=high)
        return np.where(edges, 255, 0).astype(np.uint8)

    def hough_segments(self, edges, rho, theta, threshold, min_line_length, max_line_gap):
        # rho is fixed to one pixel by scikit-image
        thetas = np.deg2rad(np.arange(-90.0, 90.0, theta))
        lines = transform.probabilistic_hough_line(edges > 0, threshold=threshold, line_length=min_line_length,
                                                   line_gap=max_line_gap, theta=thetas, rng=self.seed)
        segments = []
        for p0, p1 in lines:
            # Report segments left to right, the way OpenCV does for near-horizontal lines
            if tuple(p1) < tuple(p0):
                p0, p1 = p1, p0
            segments.append(LineSegment(int(p0[0]), int(p0[1]), int(p1[0]), int(p1[1])))
        return segments

    def external_contours(self, mask):
        contours = []
        labels = measure.label(mask > 0, connectivity=2)
        for region in measure.regionprops(labels):
            min_row, min_col = region.bbox[:2]
            # Pad so that components touching the border still get a closed outline
            outlines = measure.find_contours(np.pad(region.image, 1).astype(np.uint8), 0.5)
            outline = max(outlines, key=len)
            # (row, col) -> (x, y), undoing the padding
            points = outline[:, ::-1] + (min_col - 1, min_row - 1)
            contours.append(points)
        return contours

    def bounding_rect(self, contour):
        # Outlines run half a pixel outside the foreground pixels
        x0, y0 = np.ceil(contour.min(axis=0)).astype(int)
        x1, y1 = np.floor(contour.max(axis=0)).astype(int)
        return BoundingBox(x0, y0, x1 - x0 + 1, y1 - y0 + 1)

    def rotate(self, img, angle):
        h, w = img.shape[:2]
        rotated = transform.rotate(img, angle, resize=False, center=(w / 2, h / 2), order=1,
                                   mode='constant', cval=0, preserve_range=True)
        return _to_ubyte(rotated)
