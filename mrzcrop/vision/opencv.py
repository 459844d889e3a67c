'''
mrzcrop::vision: Image-processing backends.
OpenCV implementation. Colour images are expected in BGR(A) order, as cv2.imread returns them.

Author: mrzcrop contributors
License: MIT
'''
import math

import cv2
import numpy as np

from ..util.geometry import BoundingBox, LineSegment
from .base import VisionBackend


class OpenCVBackend(VisionBackend):
    name = 'opencv'

    def rotate90(self, img):
        return cv2.rotate(np.ascontiguousarray(img), cv2.ROTATE_90_CLOCKWISE)

    def resize(self, img, width, height):
        return cv2.resize(np.ascontiguousarray(img), (width, height), interpolation=cv2.INTER_AREA)

    def to_gray(self, img):
        if img.ndim == 2:
            return img.copy()
        if img.shape[2] == 4:
            return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
        return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)

    def gaussian_blur(self, img, ksize):
        return cv2.GaussianBlur(img, tuple(ksize), 0)

    def blackhat(self, img, ksize):
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, tuple(ksize))
        return cv2.morphologyEx(img, cv2.MORPH_BLACKHAT, kernel)

    def gradient_x(self, img):
        # Signed output so that falling edges are kept before taking the absolute value
        grad = cv2.Sobel(img, cv2.CV_16S, 1, 0, ksize=1)
        return cv2.convertScaleAbs(grad)

    def close(self, img, ksize):
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, tuple(ksize))
        return cv2.morphologyEx(img, cv2.MORPH_CLOSE, kernel)

    def otsu_threshold(self, img):
        _, binary = cv2.threshold(img, 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU)
        return binary

    def erode(self, img, ksize, iterations):
        kernel = np.ones((ksize[1], ksize[0]), np.uint8)
        return cv2.erode(img, kernel, iterations=iterations)

    def canny(self, img, low, high):
        return cv2.Canny(img, low, high)

    def hough_segments(self, edges, rho, theta, threshold, min_line_length, max_line_gap):
        lines = cv2.HoughLinesP(edges, rho, math.radians(theta), threshold,
                                minLineLength=min_line_length, maxLineGap=max_line_gap)
        if lines is None:
            return []
        return [LineSegment(*(int(v) for v in l)) for l in lines.reshape(-1, 4)]

    def external_contours(self, mask):
        cnts = cv2.findContours(mask.copy(), cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        # OpenCV 3 returns (image, contours, hierarchy), OpenCV 4 returns (contours, hierarchy)
        cnts = cnts[0] if len(cnts) == 2 else cnts[1]
        return [c.reshape(-1, 2) for c in cnts]

    def bounding_rect(self, contour):
        return BoundingBox(*cv2.boundingRect(contour.reshape(-1, 1, 2).astype(np.int32)))

    def rotate(self, img, angle):
        h, w = img.shape[:2]
        M = cv2.getRotationMatrix2D((w / 2, h / 2), angle, 1)
        return cv2.warpAffine(img, M, (w, h), flags=cv2.INTER_LINEAR,
                              borderMode=cv2.BORDER_CONSTANT, borderValue=0)
