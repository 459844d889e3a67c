'''
mrzcrop::util: Generic utilities.
Axis-aligned boxes and line segments in image (x right, y down) coordinates.

Author: mrzcrop contributors
License: MIT
'''
import math


class LineSegment(object):
    """A segment between two pixel positions, as reported by a probabilistic Hough transform."""

    def __init__(self, x1, y1, x2, y2):
        self.x1 = x1
        self.y1 = y1
        self.x2 = x2
        self.y2 = y2

    @property
    def angle(self):
        """Direction of the segment in degrees, atan2(dy, dx). Positive angles go down to the right."""
        return math.degrees(math.atan2(self.y2 - self.y1, self.x2 - self.x1))

    def __eq__(self, other):
        return isinstance(other, LineSegment) and self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def as_tuple(self):
        return (self.x1, self.y1, self.x2, self.y2)

    def __repr__(self):
        return 'LineSegment(%r, %r, %r, %r)' % self.as_tuple()


class BoundingBox(object):
    """
    Upright box with the top-left corner at (x, y).

    >>> b = BoundingBox(100, 200, 510, 50)
    >>> b.aspect
    10.2
    >>> b.padded(0.03)
    BoundingBox(82, 193, 546, 64)
    >>> BoundingBox(-5, -1, 10, 3).clamped()
    BoundingBox(0, 0, 10, 3)
    """

    def __init__(self, x, y, width, height):
        self.x = int(x)
        self.y = int(y)
        self.width = int(width)
        self.height = int(height)

    @property
    def aspect(self):
        """Width over height. Degenerate boxes (zero height) report 0 so they never look MRZ-like."""
        if self.height == 0:
            return 0.0
        return self.width / float(self.height)

    def clamped(self):
        """Returns a copy with all four fields clamped to be non-negative."""
        return BoundingBox(max(self.x, 0), max(self.y, 0), max(self.width, 0), max(self.height, 0))

    def padded(self, ratio):
        """
        Grows the box on every side and clamps the result.

        Note that the padding is a fraction of the far edge coordinate (x + width, y + height), not of the
        box size, so boxes further right or down get more padding.
        """
        pad_x = int(math.floor((self.x + self.width) * ratio))
        pad_y = int(math.floor((self.y + self.height) * ratio))
        return BoundingBox(self.x - pad_x, self.y - pad_y,
                           self.width + 2 * pad_x, self.height + 2 * pad_y).clamped()

    def as_tuple(self):
        return (self.x, self.y, self.width, self.height)

    def __eq__(self, other):
        return isinstance(other, BoundingBox) and self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return 'BoundingBox(%d, %d, %d, %d)' % self.as_tuple()
