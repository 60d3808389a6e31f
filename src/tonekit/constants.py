"""Numeric constants shared by the filter pipeline and the view compositor."""

from __future__ import annotations

# =============================================================================
# Pixel Format
# =============================================================================

CHANNELS = 4  # RGBA
CHANNEL_MIN = 0.0
CHANNEL_MAX = 255.0
CONTRAST_MIDPOINT = 128.0

# Divisor for the (r + g + b) brightness estimate
BRIGHTNESS_SCALE = 765.0

# =============================================================================
# Color Math
# =============================================================================

LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114

# Warm pushes red harder than it pulls blue; cool does the opposite
TEMPERATURE_WARM_RED = 0.6
TEMPERATURE_WARM_BLUE = 0.4
TEMPERATURE_COOL_RED = 0.4
TEMPERATURE_COOL_BLUE = 0.6

TINT_GREEN = 0.5

# Rows: output r, g, b. Columns: input r, g, b.
SEPIA_MATRIX = (
    (0.393, 0.769, 0.189),
    (0.349, 0.686, 0.168),
    (0.272, 0.534, 0.131),
)

# Slider value -> unit interval
PERCENT = 100.0

# =============================================================================
# Split View Overlay
# =============================================================================

SPLIT_DASH_ON = 4
SPLIT_DASH_OFF = 2
SPLIT_LINE_ALPHA = 0.6
SPLIT_LINE_DARK_RGB = (255, 255, 255)
SPLIT_LINE_LIGHT_RGB = (0, 0, 0)

# =============================================================================
# Collaborators
# =============================================================================

DEFAULT_DEBOUNCE_DELAY = 0.150  # seconds
DEFAULT_EXPORT_QUALITY = 0.92
