"""View compositor: original, filtered and side-by-side split presentation.

Split layout for a W-pixel-wide image::

    columns [0, W//2)   <- original
    columns [W//2, W)   <- filtered (gets the extra column when W is odd)
    column  W//2        <- dashed divider, 4 px on / 2 px off, alpha 0.6
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from tonekit.buffer import PixelBuffer
from tonekit.constants import (
    SPLIT_DASH_OFF,
    SPLIT_DASH_ON,
    SPLIT_LINE_ALPHA,
    SPLIT_LINE_DARK_RGB,
    SPLIT_LINE_LIGHT_RGB,
)
from tonekit.errors import InvalidInputError

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    ORIGINAL = "original"
    FILTERED = "filtered"
    SPLIT = "split"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class SplitOverlay:
    """Divider drawn over a split frame.

    Attributes:
        x: Column of the divider (always width // 2)
        rgb: Line color
        alpha: Line opacity in [0, 1]
        dash: (on, off) run lengths in pixels, starting "on" at row 0
        left_width: Columns taken from the original
        right_width: Columns taken from the filtered image
    """

    x: int
    rgb: tuple[int, int, int]
    alpha: float
    dash: tuple[int, int]
    left_width: int
    right_width: int

    @classmethod
    def for_width(cls, width: int, theme: Theme) -> SplitOverlay:
        x = width // 2
        rgb = SPLIT_LINE_DARK_RGB if Theme(theme) is Theme.DARK else SPLIT_LINE_LIGHT_RGB
        return cls(
            x=x,
            rgb=rgb,
            alpha=SPLIT_LINE_ALPHA,
            dash=(SPLIT_DASH_ON, SPLIT_DASH_OFF),
            left_width=x,
            right_width=width - x,
        )

    def dash_rows(self, height: int) -> np.ndarray:
        """Boolean mask of the rows the dash covers."""
        on, off = self.dash
        return (np.arange(height) % (on + off)) < on


@dataclass(frozen=True)
class Composite:
    """What to show for one view mode.

    ``frame`` is the buffer to display. For ORIGINAL and FILTERED it is the
    corresponding input buffer itself; for SPLIT it is a new buffer with the
    divider already painted, and ``overlay`` describes that divider.
    """

    mode: ViewMode
    frame: PixelBuffer
    overlay: SplitOverlay | None = None


def _paint_divider(frame: PixelBuffer, overlay: SplitOverlay) -> None:
    """Composite the dashed divider onto ``frame`` in place (source-over)."""
    if frame.width == 0 or frame.height == 0:
        return

    rows = overlay.dash_rows(frame.height)
    column = frame.data[rows, overlay.x].astype(np.float64)  # [n, 4]

    src_a = overlay.alpha
    dst_a = column[:, 3] / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)

    src_rgb = np.asarray(overlay.rgb, dtype=np.float64)
    dst_rgb = column[:, :3]
    out_rgb = (src_rgb * src_a + dst_rgb * (dst_a * (1.0 - src_a))[:, None]) / out_a[:, None]

    column[:, :3] = out_rgb
    column[:, 3] = out_a * 255.0
    frame.data[rows, overlay.x] = np.rint(np.clip(column, 0.0, 255.0)).astype(np.uint8)


class ViewCompositor:
    """Builds the presentation for a view mode.

    Stateless: calling ``present`` twice with the same arguments gives equal
    results.
    """

    def present(
        self,
        original: PixelBuffer,
        filtered: PixelBuffer,
        mode: ViewMode | str,
        theme: Theme | str = Theme.LIGHT,
    ) -> Composite:
        """Compose the view.

        :param original: Unmodified image
        :param filtered: Output of the filter pipeline
        :param mode: ORIGINAL, FILTERED or SPLIT
        :param theme: Picks the divider color in SPLIT mode
        :returns: Composite
        :raises InvalidInputError: If a buffer is missing
        :raises DimensionMismatchError: If SPLIT buffers differ in size
        :raises ValueError: If mode or theme is unknown
        """
        if original is None or filtered is None:
            raise InvalidInputError("No image loaded: present() needs both buffers")
        mode = ViewMode(mode)
        theme = Theme(theme)

        if mode is ViewMode.ORIGINAL:
            return Composite(mode, original)
        if mode is ViewMode.FILTERED:
            return Composite(mode, filtered)
        return self.split(original, filtered, theme)

    def split(self, original: PixelBuffer, filtered: PixelBuffer, theme: Theme) -> Composite:
        """Left half from ``original``, right half from ``filtered``, dashed divider between."""
        original.require_dimensions(filtered, "filtered buffer")

        overlay = SplitOverlay.for_width(original.width, theme)
        data = np.empty_like(original.data)
        data[:, : overlay.x] = original.data[:, : overlay.x]
        data[:, overlay.x :] = filtered.data[:, overlay.x :]
        frame = PixelBuffer(original.width, original.height, data)

        _paint_divider(frame, overlay)
        logger.debug(
            "[ViewCompositor] Split %s at x=%d (%d|%d, theme=%s)",
            frame,
            overlay.x,
            overlay.left_width,
            overlay.right_width,
            theme.value,
        )
        return Composite(ViewMode.SPLIT, frame, overlay)


_DEFAULT_COMPOSITOR = ViewCompositor()


def present(
    original: PixelBuffer,
    filtered: PixelBuffer,
    mode: ViewMode | str,
    theme: Theme | str = Theme.LIGHT,
) -> Composite:
    """Module-level shortcut for ``ViewCompositor().present``."""
    return _DEFAULT_COMPOSITOR.present(original, filtered, mode, theme)
