"""
tonekit - raster image tonal and color adjustment.

Features:
- Per-pixel adjustment pipeline: exposure, contrast, temperature, tint,
  saturation, highlights/shadows, sepia
- Numba-compiled kernel with a byte-identical NumPy reference backend
- View compositor for original / filtered / side-by-side split previews
- Editing session with debounced re-filtering and last-write-wins results
- Pillow-based decode and PNG/JPEG/WEBP export, JSON presets, persisted theme

Example - Core:
    >>> from tonekit import FilterParameters, FilterPipeline, PixelBuffer, present, ViewMode
    >>>
    >>> original = PixelBuffer.from_array(rgba_array)
    >>> filtered = FilterPipeline().apply(original, FilterParameters(exposure=20, sepia=40))
    >>> view = present(original, filtered, ViewMode.SPLIT, "dark")

Example - Editor:
    >>> from tonekit import EditorController
    >>>
    >>> editor = EditorController()
    >>> editor.load_image("photo.jpg")
    >>> editor.set_parameter("contrast", 25)
    >>> editor.flush()
    >>> editor.export("photo_edited.png")
"""

__version__ = "0.1.0"

from tonekit.buffer import PixelBuffer
from tonekit.config import (
    CONFIG,
    PRESETS,
    ControlSpec,
    FilterParameters,
    get_preset,
    load_params_json,
    params_from_dict,
    params_to_dict,
    save_params_json,
)
from tonekit.errors import (
    DimensionMismatchError,
    ImageDecodeError,
    ImageEncodeError,
    InvalidInputError,
    TonekitError,
)
from tonekit.filters import FilterPipeline, apply_filters
from tonekit.io import encode_image, load_image, save_image
from tonekit.scheduling import Debouncer, debounce
from tonekit.session import EditorController, ImageSession
from tonekit.theme import ThemeStore
from tonekit.view import Composite, SplitOverlay, Theme, ViewCompositor, ViewMode, present

__all__ = [
    # Version
    "__version__",
    # Data structures
    "PixelBuffer",
    "FilterParameters",
    "ImageSession",
    # Config
    "CONFIG",
    "ControlSpec",
    "PRESETS",
    "get_preset",
    "params_from_dict",
    "params_to_dict",
    "load_params_json",
    "save_params_json",
    # Core
    "FilterPipeline",
    "apply_filters",
    "ViewCompositor",
    "ViewMode",
    "Theme",
    "Composite",
    "SplitOverlay",
    "present",
    # Collaborators
    "EditorController",
    "ThemeStore",
    "Debouncer",
    "debounce",
    "load_image",
    "encode_image",
    "save_image",
    # Errors
    "TonekitError",
    "InvalidInputError",
    "DimensionMismatchError",
    "ImageDecodeError",
    "ImageEncodeError",
]
