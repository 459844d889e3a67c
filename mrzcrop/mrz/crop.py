'''
mrzcrop::MRZ: Machine-readable zone location and cropping.
Pipeline for cutting the MRZ band out of a document photo.

Author: mrzcrop contributors
License: MIT
'''
import logging

import numpy as np

from ..util.pipeline import Pipeline
from ..vision import get_backend
from .image import RotationNormalizer, TextAlignmentCorrector, MrzRegionLocator

logger = logging.getLogger(__name__)


class ImageSource(object):
    """Provides the input image as `img`, as a private copy so the caller's array is never touched."""

    __depends__ = []
    __provides__ = ['img']

    def __init__(self, img):
        self.img = img

    def __call__(self):
        return np.array(self.img, dtype=np.uint8, copy=True, order='C')


class MrzCropPipeline(Pipeline):
    """
    Rotation (optional) -> skew correction -> MRZ location and cropping.

    Besides `result`, the intermediate values `img_oriented`, `img_aligned`, `skew_angle`,
    `line_segments`, `img_working` and `mrz_box` can be read with `pipeline[name]`.
    """

    def __init__(self, img, rotate=False, backend=None, height=1200, rect_kernel=(16, 10),
                 sq_kernel=(31, 31), erode_iterations=4, min_aspect=5.0, pad_ratio=0.03):
        super(MrzCropPipeline, self).__init__()
        self.backend = get_backend(backend)
        self.add_component('source', ImageSource(img))
        if rotate:
            self.add_component('rotator', RotationNormalizer(self.backend))
        else:
            self.add_component('rotator', lambda img: img, provides=['img_oriented'], depends=['img'])
        self.add_component('aligner', TextAlignmentCorrector(self.backend, height=height, rect_kernel=rect_kernel,
                                                             sq_kernel=sq_kernel, erode_iterations=erode_iterations))
        self.add_component('locator', MrzRegionLocator(self.backend, height=height, rect_kernel=rect_kernel,
                                                       sq_kernel=sq_kernel, erode_iterations=erode_iterations,
                                                       min_aspect=min_aspect, pad_ratio=pad_ratio))

    @property
    def found(self):
        return self['roi'] is not None

    @property
    def result(self):
        """(True, cropped MRZ) on success, (False, the aligned and resized image) otherwise."""
        if self.found:
            return True, self['roi']
        return False, self['img_working']


def extract_mrz_region(img, rotate=False, backend=None, **params):
    """The main interface function to this module, encapsulating the cropping pipeline.
       Given a document photo, returns a pair (found, image): the cropped MRZ band when found is True,
       otherwise the deskewed image the search ran on.

    :param img: the photo as a uint8 numpy array (gray, or colour in the backend's channel order).
    :param rotate: when True the photo is first rotated by -90 degrees (for portrait captures).
    :param backend: vision backend name ('opencv', 'skimage') or a VisionBackend instance.
    :param params: tuning parameters passed on to MrzCropPipeline (min_aspect, pad_ratio, ...).
    """
    p = MrzCropPipeline(img, rotate=rotate, backend=backend, **params)
    found, image = p.result
    logger.info("MRZ %s (backend %s, rotate=%s, skew %.2f)", 'found' if found else 'not found',
                p.backend.name, rotate, p['skew_angle'])
    return found, image
