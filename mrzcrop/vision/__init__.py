'''
mrzcrop::vision: Image-processing backends.

Author: mrzcrop contributors
License: MIT
'''
from .base import VisionBackend

DEFAULT_BACKEND = 'opencv'


def get_backend(backend=None):
    """
    Resolves a backend specification to a VisionBackend instance.

    :param backend: None (the default backend), a backend name ('opencv' or 'skimage'),
                    or a ready VisionBackend instance, which is returned as is.
    """
    if isinstance(backend, VisionBackend):
        return backend
    name = DEFAULT_BACKEND if backend is None else backend
    # Imported on demand so that only the selected library has to be installed
    if name == 'opencv':
        from .opencv import OpenCVBackend
        return OpenCVBackend()
    elif name in ('skimage', 'scikit-image'):
        from .scikit_image import ScikitImageBackend
        return ScikitImageBackend()
    raise ValueError("Unknown vision backend: %r" % (backend,))
