"""Image decode and export.

Thin Pillow wrappers around the core: decode any raster Pillow reads into an
RGBA PixelBuffer, and encode a PixelBuffer to PNG (lossless), JPEG or WEBP
(lossy, quality in [0, 1]).
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from tonekit.buffer import PixelBuffer
from tonekit.constants import DEFAULT_EXPORT_QUALITY
from tonekit.errors import ImageDecodeError, ImageEncodeError, InvalidInputError
from tonekit.validators import validate_choices, validate_range

logger = logging.getLogger(__name__)

# format name -> (Pillow format, lossy)
EXPORT_FORMATS: dict[str, tuple[str, bool]] = {
    "png": ("PNG", False),
    "jpeg": ("JPEG", True),
    "jpg": ("JPEG", True),
    "webp": ("WEBP", True),
}

MIME_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "webp": "image/webp",
}


def load_image(source: str | Path | bytes | BinaryIO) -> PixelBuffer:
    """Decode an image into an RGBA PixelBuffer.

    :param source: File path, encoded bytes, or a binary file object
    :returns: Decoded buffer (any mode is converted to RGBA)
    :raises ImageDecodeError: If the resource is missing, unreadable, not an image,
        or larger than Pillow's decompression-bomb limit
    """
    if isinstance(source, bytes | bytearray):
        source = io.BytesIO(source)
    try:
        with Image.open(source) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as err:
        raise ImageDecodeError(f"Could not decode image from {_describe(source)}: {err}") from err

    buffer = PixelBuffer.from_array(np.array(rgba, dtype=np.uint8), copy=False)
    logger.info("[io] Decoded %s from %s", buffer, _describe(source))
    return buffer


def to_pil(buffer: PixelBuffer) -> Image.Image:
    """Wrap a PixelBuffer as a Pillow RGBA image (copies the pixels)."""
    if buffer is None:
        raise InvalidInputError("No buffer to convert")
    return Image.fromarray(buffer.data.copy())


@validate_choices(EXPORT_FORMATS, "format")
@validate_range(0.0, 1.0, "quality", param_index=2)
def encode_image(
    buffer: PixelBuffer, format: str = "png", quality: float = DEFAULT_EXPORT_QUALITY
) -> bytes:
    """Encode a PixelBuffer.

    :param buffer: Pixels to encode
    :param format: "png", "jpeg"/"jpg" or "webp" (lowercase)
    :param quality: Lossy quality in [0, 1]; ignored for PNG
    :returns: Encoded bytes
    :raises InvalidInputError: If the buffer is missing or empty
    :raises ImageEncodeError: If Pillow fails to encode
    """
    if buffer is None or buffer.is_empty():
        raise InvalidInputError("Nothing to export: buffer is missing or empty")

    pil_format, lossy = EXPORT_FORMATS[format]
    img = to_pil(buffer)
    save_kwargs = {}
    if lossy:
        save_kwargs["quality"] = max(1, round(quality * 100))
    if pil_format == "JPEG":
        # JPEG has no alpha channel
        img = img.convert("RGB")

    out = io.BytesIO()
    try:
        img.save(out, format=pil_format, **save_kwargs)
    except (OSError, ValueError, KeyError) as err:
        raise ImageEncodeError(f"Could not encode {buffer} as {format}: {err}") from err

    data = out.getvalue()
    logger.debug("[io] Encoded %s as %s (%d bytes)", buffer, format, len(data))
    return data


def format_from_path(path: str | Path) -> str:
    """Export format implied by a file suffix.

    :raises ValueError: If the suffix is not a supported format
    """
    suffix = Path(path).suffix.lower().lstrip(".")
    if suffix not in EXPORT_FORMATS:
        raise ValueError(
            f'Cannot infer export format from "{path}". Use one of: {sorted(EXPORT_FORMATS)}'
        )
    return suffix


def save_image(
    buffer: PixelBuffer,
    path: str | Path,
    format: str | None = None,
    quality: float = DEFAULT_EXPORT_QUALITY,
) -> Path:
    """Encode ``buffer`` and write it to ``path``.

    :param buffer: Pixels to export
    :param path: Destination file
    :param format: Export format, inferred from the suffix when None
    :param quality: Lossy quality in [0, 1]
    :returns: Path written
    """
    path = Path(path)
    data = encode_image(buffer, format or format_from_path(path), quality)
    path.write_bytes(data)
    logger.info("[io] Exported %s to %s", buffer, path)
    return path


def _describe(source) -> str:
    if isinstance(source, str | Path):
        return str(source)
    return getattr(source, "name", None) or type(source).__name__
