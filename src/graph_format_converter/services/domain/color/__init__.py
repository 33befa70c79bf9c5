"""
Color Normalization Domain

Converts the color representations used by the supported formats to and
from a single RGB triple.
"""

from .normalizer import from_channels, normalize, to_rgb_string

__all__ = ["normalize", "from_channels", "to_rgb_string"]
