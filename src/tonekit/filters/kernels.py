"""Numba-compiled per-pixel adjustment kernel.

One pass over the pixels applies every adjustment in order with float64
intermediates and a single clamp at the end.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from tonekit.constants import (
    BRIGHTNESS_SCALE,
    CHANNEL_MAX,
    CHANNEL_MIN,
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

# Numba freezes module globals at compile time; unpack to scalars
SR_R, SR_G, SR_B = SEPIA_MATRIX[0]
SG_R, SG_G, SG_B = SEPIA_MATRIX[1]
SB_R, SB_G, SB_B = SEPIA_MATRIX[2]


@njit(inline="always")
def _clamp_round(v: float) -> np.uint8:
    if v < CHANNEL_MIN:
        v = CHANNEL_MIN
    elif v > CHANNEL_MAX:
        v = CHANNEL_MAX
    return np.uint8(np.rint(v))


# No fastmath: output must match the NumPy backend bit for bit
@njit(parallel=True, cache=True, nogil=True)
def adjust_pixels_numba(
    src: NDArray[np.uint8],
    out: NDArray[np.uint8],
    exposure: float,
    contrast_factor: float,
    temperature: float,
    tint: float,
    sat_factor: float,
    highlights: float,
    shadows: float,
    sepia: float,
) -> None:
    """Apply all adjustments to a flat RGBA pixel array.

    :param src: Input pixels [N, 4], not modified
    :param out: Output pixels [N, 4], may not alias src
    :param exposure: Additive offset
    :param contrast_factor: Contrast multiplier around 128
    :param temperature: Raw temperature slider value
    :param tint: Raw tint slider value
    :param sat_factor: 1 + saturation unit
    :param highlights: Highlight unit in [-1, 1]
    :param shadows: Shadow unit in [-1, 1]
    :param sepia: Sepia blend in [0, 1]
    """
    N = src.shape[0]

    if temperature > 0.0:
        temp_r = temperature * TEMPERATURE_WARM_RED
        temp_b = temperature * TEMPERATURE_WARM_BLUE
    else:
        temp_r = temperature * TEMPERATURE_COOL_RED
        temp_b = temperature * TEMPERATURE_COOL_BLUE
    tint_g = tint * TINT_GREEN

    for i in prange(N):
        r = np.float64(src[i, 0])
        g = np.float64(src[i, 1])
        b = np.float64(src[i, 2])

        # Exposure
        r += exposure
        g += exposure
        b += exposure

        # Contrast
        r = contrast_factor * (r - CONTRAST_MIDPOINT) + CONTRAST_MIDPOINT
        g = contrast_factor * (g - CONTRAST_MIDPOINT) + CONTRAST_MIDPOINT
        b = contrast_factor * (b - CONTRAST_MIDPOINT) + CONTRAST_MIDPOINT

        # Temperature, tint
        r += temp_r
        b -= temp_b
        g -= tint_g

        # Saturation around luma
        gray = LUMA_R * r + LUMA_G * g + LUMA_B * b
        r = gray + (r - gray) * sat_factor
        g = gray + (g - gray) * sat_factor
        b = gray + (b - gray) * sat_factor

        # Highlights / shadows
        brightness = (r + g + b) / BRIGHTNESS_SCALE
        if brightness < 0.0:
            brightness = 0.0
        elif brightness > 1.0:
            brightness = 1.0
        if highlights != 0.0:
            amount = highlights * brightness * CHANNEL_MAX
            r += amount
            g += amount
            b += amount
        if shadows != 0.0:
            amount = shadows * (1.0 - brightness) * CHANNEL_MAX
            r += amount
            g += amount
            b += amount

        # Sepia
        if sepia > 0.0:
            sr = SR_R * r + SR_G * g + SR_B * b
            sg = SG_R * r + SG_G * g + SG_B * b
            sb = SB_R * r + SB_G * g + SB_B * b
            keep = 1.0 - sepia
            r = keep * r + sepia * sr
            g = keep * g + sepia * sg
            b = keep * b + sepia * sb

        out[i, 0] = _clamp_round(r)
        out[i, 1] = _clamp_round(g)
        out[i, 2] = _clamp_round(b)
        out[i, 3] = src[i, 3]
