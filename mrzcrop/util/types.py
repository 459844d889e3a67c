import numpy as np
from numpy.typing import NDArray

# Raster buffer passed between stages: (rows, cols) or (rows, cols, channels), uint8
Image = NDArray[np.uint8]
