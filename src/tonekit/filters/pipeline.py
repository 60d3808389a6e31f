"""FilterPipeline: stateless adjustment pipeline over PixelBuffers.

Example:
    >>> pipeline = FilterPipeline()
    >>> filtered = pipeline.apply(original, FilterParameters(contrast=20, sepia=40))
    >>> filtered is original
    False
"""

from __future__ import annotations

import logging
import time

from tonekit.buffer import PixelBuffer
from tonekit.config.values import FilterParameters
from tonekit.filters.apply import BACKENDS, apply_filters
from tonekit.validators import validate_choices

logger = logging.getLogger(__name__)


class FilterPipeline:
    """Maps an original buffer and a parameter set to a new filtered buffer.

    Holds no per-image state: the same instance can serve any number of
    images and sessions. Always call it with the *original* buffer, never a
    previously filtered one, or errors compound.
    """

    __slots__ = ("backend",)

    @validate_choices(BACKENDS, "backend")
    def __init__(self, backend: str = "numba"):
        """
        :param backend: "numba" (compiled, default) or "numpy" (vectorized reference)
        """
        self.backend = backend

    def apply(
        self,
        original: PixelBuffer,
        params: FilterParameters,
        out: PixelBuffer | None = None,
    ) -> PixelBuffer:
        """Apply ``params`` to ``original``.

        :param original: Source pixels, never modified
        :param params: Slider values
        :param out: Optional destination buffer of the same dimensions
        :returns: Filtered buffer
        """
        start = time.perf_counter()
        result = apply_filters(original, params, out=out, backend=self.backend)
        logger.debug(
            "[FilterPipeline] %s applied in %.2fms (backend=%s) %r",
            original,
            (time.perf_counter() - start) * 1000.0,
            self.backend,
            params,
        )
        return result

    def __call__(
        self,
        original: PixelBuffer,
        params: FilterParameters,
        out: PixelBuffer | None = None,
    ) -> PixelBuffer:
        return self.apply(original, params, out=out)

    def warmup(self) -> None:
        """Trigger JIT compilation on a one-pixel buffer."""
        self.apply(PixelBuffer.empty(1, 1), FilterParameters(sepia=1.0))
        logger.debug("[FilterPipeline] Warmed up backend=%s", self.backend)

    def __repr__(self) -> str:
        return f"FilterPipeline(backend={self.backend!r})"
