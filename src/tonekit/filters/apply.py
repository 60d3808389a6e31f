"""Apply FilterParameters to a PixelBuffer.

Two interchangeable backends produce byte-identical output:

- ``"numba"``: compiled parallel per-pixel kernel (default)
- ``"numpy"``: vectorized over whole channel planes

Processing order (all in float64, one clamp at the end):
exposure, contrast, temperature, tint, saturation, highlights/shadows, sepia.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from tonekit.buffer import PixelBuffer
from tonekit.config.values import FilterParameters
from tonekit.constants import (
    BRIGHTNESS_SCALE,
    CHANNEL_MAX,
    CHANNEL_MIN,
    CHANNELS,
    CONTRAST_MIDPOINT,
    LUMA_B,
    LUMA_G,
    LUMA_R,
    SEPIA_MATRIX,
    TEMPERATURE_COOL_BLUE,
    TEMPERATURE_COOL_RED,
    TEMPERATURE_WARM_BLUE,
    TEMPERATURE_WARM_RED,
    TINT_GREEN,
)
from tonekit.errors import InvalidInputError

BACKENDS = ("numba", "numpy")


def adjust_pixels_numpy(
    src: NDArray[np.uint8], out: NDArray[np.uint8], params: FilterParameters
) -> None:
    """Apply all adjustments to a flat RGBA pixel array with NumPy.

    :param src: Input pixels [N, 4], not modified
    :param out: Output pixels [N, 4], may not alias src
    :param params: Slider values
    """
    r = src[:, 0].astype(np.float64)
    g = src[:, 1].astype(np.float64)
    b = src[:, 2].astype(np.float64)

    # Exposure
    r += params.exposure
    g += params.exposure
    b += params.exposure

    # Contrast
    factor = params.contrast_factor
    r = factor * (r - CONTRAST_MIDPOINT) + CONTRAST_MIDPOINT
    g = factor * (g - CONTRAST_MIDPOINT) + CONTRAST_MIDPOINT
    b = factor * (b - CONTRAST_MIDPOINT) + CONTRAST_MIDPOINT

    # Temperature
    temperature = float(params.temperature)
    if temperature > 0.0:
        r += temperature * TEMPERATURE_WARM_RED
        b -= temperature * TEMPERATURE_WARM_BLUE
    else:
        r += temperature * TEMPERATURE_COOL_RED
        b -= temperature * TEMPERATURE_COOL_BLUE

    # Tint
    g -= float(params.tint) * TINT_GREEN

    # Saturation around luma
    sat_factor = 1.0 + params.saturation_unit
    gray = LUMA_R * r + LUMA_G * g + LUMA_B * b
    r = gray + (r - gray) * sat_factor
    g = gray + (g - gray) * sat_factor
    b = gray + (b - gray) * sat_factor

    # Highlights / shadows
    brightness = np.clip((r + g + b) / BRIGHTNESS_SCALE, 0.0, 1.0)
    highlights = params.highlights_unit
    if highlights != 0.0:
        amount = highlights * brightness * CHANNEL_MAX
        r += amount
        g += amount
        b += amount
    shadows = params.shadows_unit
    if shadows != 0.0:
        amount = shadows * (1.0 - brightness) * CHANNEL_MAX
        r += amount
        g += amount
        b += amount

    # Sepia
    sepia = params.sepia_unit
    if sepia > 0.0:
        (sr_r, sr_g, sr_b), (sg_r, sg_g, sg_b), (sb_r, sb_g, sb_b) = SEPIA_MATRIX
        sr = sr_r * r + sr_g * g + sr_b * b
        sg = sg_r * r + sg_g * g + sg_b * b
        sb = sb_r * r + sb_g * g + sb_b * b
        keep = 1.0 - sepia
        r = keep * r + sepia * sr
        g = keep * g + sepia * sg
        b = keep * b + sepia * sb

    out[:, 0] = np.rint(np.clip(r, CHANNEL_MIN, CHANNEL_MAX))
    out[:, 1] = np.rint(np.clip(g, CHANNEL_MIN, CHANNEL_MAX))
    out[:, 2] = np.rint(np.clip(b, CHANNEL_MIN, CHANNEL_MAX))
    out[:, 3] = src[:, 3]


def _run_numba(src: NDArray[np.uint8], out: NDArray[np.uint8], params: FilterParameters) -> None:
    from tonekit.filters.kernels import adjust_pixels_numba

    adjust_pixels_numba(
        src,
        out,
        float(params.exposure),
        float(params.contrast_factor),
        float(params.temperature),
        float(params.tint),
        float(1.0 + params.saturation_unit),
        float(params.highlights_unit),
        float(params.shadows_unit),
        float(params.sepia_unit),
    )


def apply_filters(
    original: PixelBuffer,
    params: FilterParameters,
    out: PixelBuffer | None = None,
    backend: str = "numba",
) -> PixelBuffer:
    """Apply adjustments to ``original`` and return the filtered buffer.

    ``original`` is never modified. The result has the same dimensions and
    the same alpha channel. Parameter ranges are not checked.

    :param original: Source pixels
    :param params: Slider values
    :param out: Optional destination with the same dimensions; must not share memory with ``original``
    :param backend: "numba" or "numpy"
    :returns: ``out`` if given, else a new PixelBuffer
    :raises InvalidInputError: If ``original`` is None or ``out`` aliases it
    :raises DimensionMismatchError: If ``out`` has different dimensions
    :raises ValueError: If ``backend`` is unknown

    Example:
        >>> filtered = apply_filters(buf, FilterParameters(exposure=50))
    """
    if original is None:
        raise InvalidInputError("No image loaded: apply_filters() needs an original buffer")
    if backend not in BACKENDS:
        raise ValueError(f'Unknown backend "{backend}". Valid backends: {list(BACKENDS)}')

    if out is None:
        out = PixelBuffer.empty(original.width, original.height)
    else:
        original.require_dimensions(out, "output buffer")
        if np.shares_memory(out.data, original.data):
            raise InvalidInputError("Output buffer must not share memory with the original")

    if original.is_empty():
        return out

    src = original.data.reshape(-1, CHANNELS)
    dst = out.data.reshape(-1, CHANNELS)

    if backend == "numba":
        _run_numba(src, dst, params)
    else:
        adjust_pixels_numpy(src, dst, params)

    return out
