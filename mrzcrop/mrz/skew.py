'''
mrzcrop::MRZ: Machine-readable zone location and cropping.
Dominant text angle estimation from Hough line angles.

Author: mrzcrop contributors
License: MIT
'''
import logging

logger = logging.getLogger(__name__)

# Angles this close to a whole degree are dropped from the vote (page borders, image edges, etc.)
INTEGER_TOLERANCE = 0.001


def angle_histogram(angles, tol=INTEGER_TOLERANCE):
    """
    Counts angles per whole degree (truncated towards zero), skipping angles that are within `tol`
    of their truncation. Buckets are ordered by first occurrence in ascending angle order.

    >>> angle_histogram([4.5, -3.2, 4.9, 0.0, 90.0, 4.0001])
    {-3: 1, 4: 2}
    """
    counts = {}
    for a in sorted(angles):
        bucket = int(a)
        if abs(abs(bucket) - abs(a)) > tol:
            counts[bucket] = counts.get(bucket, 0) + 1
    return counts


def dominant_angle(angles, tol=INTEGER_TOLERANCE):
    """
    Picks the rotation (in degrees, within [0, 360)) that makes the most common line direction horizontal.

    The winning bucket is the most populated one of `angle_histogram` (ties go to the first bucket).
    The angle returned is the smallest raw angle that truncates to that bucket, shifted by 360 if it is
    negative. When no angle qualifies, 0 is returned and the image is left as it is.
    """
    angles = sorted(angles)
    counts = angle_histogram(angles, tol)
    if not counts:
        logger.debug("No usable line angles among %d, not rotating", len(angles))
        return 0.0
    best = max(counts, key=counts.get)
    angle = next(a for a in angles if int(a) == best)
    logger.debug("Angle histogram %s, bucket %d wins with angle %.3f", counts, best, angle)
    if angle < 0:
        angle += 360
    return angle
