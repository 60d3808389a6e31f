"""Exception types raised by tonekit."""

from __future__ import annotations


class TonekitError(Exception):
    """Base class for all tonekit errors."""


class InvalidInputError(TonekitError, ValueError):
    """A required buffer or session is missing or malformed.

    This is a precondition violation on the caller's side: check that an
    image is loaded before calling into the pipeline or compositor.
    """


class DimensionMismatchError(TonekitError, ValueError):
    """Two buffers that must share dimensions do not."""

    def __init__(self, expected: tuple[int, int], actual: tuple[int, int], what: str = "buffer"):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{what} is {actual[0]}x{actual[1]}, expected {expected[0]}x{expected[1]}"
        )


class ImageDecodeError(TonekitError):
    """An image resource could not be decoded into a pixel buffer."""


class ImageEncodeError(TonekitError):
    """A pixel buffer could not be encoded to the requested format."""
