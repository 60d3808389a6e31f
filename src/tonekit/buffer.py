"""RGBA pixel buffer.

A PixelBuffer wraps a C-contiguous ``uint8`` array of shape ``(height, width, 4)``.
The pipeline never mutates a buffer it is given; it allocates a new one or
writes into a caller-supplied destination.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from tonekit.constants import CHANNELS
from tonekit.errors import DimensionMismatchError, InvalidInputError


@dataclass(eq=False)
class PixelBuffer:
    """Width x height grid of 8-bit RGBA pixels.

    Attributes:
        width: Number of columns
        height: Number of rows
        data: ``uint8`` array of shape (height, width, 4)

    Example:
        >>> buf = PixelBuffer.empty(4, 2)
        >>> buf.data.shape
        (2, 4, 4)
    """

    width: int
    height: int
    data: NDArray[np.uint8]

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidInputError(
                f"PixelBuffer dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if not isinstance(self.data, np.ndarray):
            raise InvalidInputError(
                f"PixelBuffer data must be a numpy array, got {type(self.data).__name__}"
            )
        if self.data.dtype != np.uint8:
            raise InvalidInputError(f"PixelBuffer data must be uint8, got {self.data.dtype}")
        expected = (self.height, self.width, CHANNELS)
        if self.data.shape != expected:
            raise InvalidInputError(
                f"PixelBuffer data has shape {self.data.shape}, expected {expected}"
            )
        if not self.data.flags["C_CONTIGUOUS"]:
            self.data = np.ascontiguousarray(self.data)

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def empty(cls, width: int, height: int) -> PixelBuffer:
        """Create a fully transparent black buffer."""
        return cls(width, height, np.zeros((height, width, CHANNELS), dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray, copy: bool = True) -> PixelBuffer:
        """Create a buffer from an (H, W, 4) or (H, W, 3) array.

        RGB input gets an opaque alpha channel. Non-uint8 input is clipped
        to [0, 255] and rounded.

        :param array: Pixel array
        :param copy: If False and the array is already uint8 RGBA, wrap it without copying
        :returns: New PixelBuffer
        :raises InvalidInputError: If the array is not 3D with 3 or 4 channels
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, CHANNELS):
            raise InvalidInputError(
                f"Expected an (H, W, 4) or (H, W, 3) array, got shape {array.shape}"
            )
        if array.dtype != np.uint8:
            array = np.rint(np.clip(array, 0, 255)).astype(np.uint8)
            copy = False
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=2)
            copy = False
        data = np.array(array, dtype=np.uint8, order="C", copy=True) if copy else array
        height, width = data.shape[:2]
        return cls(width, height, data)

    @classmethod
    def from_bytes(cls, width: int, height: int, raw: bytes | bytearray | memoryview) -> PixelBuffer:
        """Create a buffer from a flat RGBA byte sequence of length W*H*4.

        :raises InvalidInputError: If the byte count does not match the dimensions
        """
        expected = width * height * CHANNELS
        if len(raw) != expected:
            raise InvalidInputError(
                f"Expected {expected} bytes for a {width}x{height} RGBA buffer, got {len(raw)}"
            )
        data = np.frombuffer(bytes(raw), dtype=np.uint8).reshape(height, width, CHANNELS).copy()
        return cls(width, height, data)

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def shape(self) -> tuple[int, int]:
        """(width, height)."""
        return (self.width, self.height)

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    @property
    def rgb(self) -> NDArray[np.uint8]:
        """View of the color channels, shape (H, W, 3)."""
        return self.data[..., :3]

    @property
    def alpha(self) -> NDArray[np.uint8]:
        """View of the alpha channel, shape (H, W)."""
        return self.data[..., 3]

    def is_empty(self) -> bool:
        return self.num_pixels == 0

    # ========================================================================
    # Utilities
    # ========================================================================

    def copy(self) -> PixelBuffer:
        return PixelBuffer(self.width, self.height, self.data.copy())

    def tobytes(self) -> bytes:
        """Flat RGBA bytes, row-major."""
        return self.data.tobytes()

    def same_dimensions(self, other: PixelBuffer) -> bool:
        return self.width == other.width and self.height == other.height

    def require_dimensions(self, other: PixelBuffer, what: str = "buffer") -> None:
        """Raise DimensionMismatchError unless ``other`` matches this buffer's size."""
        if not self.same_dimensions(other):
            raise DimensionMismatchError(self.shape, other.shape, what)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.same_dimensions(other) and np.array_equal(self.data, other.data)

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
