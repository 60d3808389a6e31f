"""
Filter module - per-pixel tonal and color adjustments.

Example:
    >>> from tonekit.filters import FilterPipeline
    >>> from tonekit.config import FilterParameters
    >>> filtered = FilterPipeline().apply(original, FilterParameters(exposure=20))
"""

from tonekit.filters.apply import BACKENDS, adjust_pixels_numpy, apply_filters
from tonekit.filters.pipeline import FilterPipeline

__all__ = [
    "FilterPipeline",
    "apply_filters",
    "adjust_pixels_numpy",
    "BACKENDS",
]
