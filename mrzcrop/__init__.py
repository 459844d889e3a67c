'''
mrzcrop: Locating and cropping the machine-readable zone of identification documents.

Author: mrzcrop contributors
License: MIT
'''

__version__ = "1.0.0"

from mrzcrop.mrz.crop import extract_mrz_region
