"""Editing session and the controller that owns it.

The controller holds the one ImageSession for the loaded image and wires
the collaborators together:

- decode -> new session (sliders at identity, filtered = copy of original)
- slider change -> debounced FilterPipeline run against the *original*
- view mode / theme -> ViewCompositor

Results are last-write-wins: every apply snapshots a version number, and a
result whose version is no longer current (parameters changed again, new
image loaded, session cleared) is discarded.

Example:
    >>> editor = EditorController(theme_store=ThemeStore("theme.json"))
    >>> editor.load_image("photo.jpg")
    >>> editor.set_parameter("exposure", 30)
    >>> editor.flush()                      # or wait for the debounce window
    >>> editor.set_view_mode(ViewMode.SPLIT)
    >>> frame = editor.present().frame
    >>> editor.export("photo_edited.jpg")
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from tonekit.buffer import PixelBuffer
from tonekit.config.params import CONFIG
from tonekit.config.presets import get_preset
from tonekit.config.values import FilterParameters
from tonekit.constants import DEFAULT_DEBOUNCE_DELAY, DEFAULT_EXPORT_QUALITY
from tonekit.errors import ImageDecodeError, InvalidInputError
from tonekit.filters.pipeline import FilterPipeline
from tonekit.io import MIME_TYPES, encode_image, load_image, save_image
from tonekit.scheduling import Debouncer
from tonekit.theme import ThemeStore
from tonekit.view import Composite, Theme, ViewCompositor, ViewMode

logger = logging.getLogger(__name__)


@dataclass
class ImageSession:
    """Everything known about the currently loaded image.

    Attributes:
        original: Decoded pixels, never modified
        params: Current slider values
        filtered: Latest committed pipeline output
        view_mode: Active presentation mode
        source: Where the image came from, for logging and export names
    """

    original: PixelBuffer
    params: FilterParameters = field(default_factory=FilterParameters)
    filtered: PixelBuffer | None = None
    view_mode: ViewMode = ViewMode.FILTERED
    source: str | None = None

    def __post_init__(self):
        if self.original is None:
            raise InvalidInputError("ImageSession needs an original buffer")
        if self.filtered is None:
            self.filtered = self.original.copy()

    @property
    def width(self) -> int:
        return self.original.width

    @property
    def height(self) -> int:
        return self.original.height


class EditorController:
    """Owns the session and drives the pipeline and compositor.

    Thread-safe: the debounced apply runs on a timer thread while setters
    run on the caller's thread. Pixel work happens outside the lock.
    """

    def __init__(
        self,
        pipeline: FilterPipeline | None = None,
        compositor: ViewCompositor | None = None,
        theme_store: ThemeStore | None = None,
        debounce_delay: float = DEFAULT_DEBOUNCE_DELAY,
    ):
        self.pipeline = pipeline or FilterPipeline()
        self.compositor = compositor or ViewCompositor()
        self.theme_store = theme_store or ThemeStore()

        self._lock = threading.RLock()
        self._session: ImageSession | None = None
        self._version = 0
        self._view_mode = ViewMode.FILTERED
        self._debouncer = Debouncer(self.apply_now, debounce_delay)

    # ========================================================================
    # Session lifecycle
    # ========================================================================

    @property
    def session(self) -> ImageSession | None:
        return self._session

    @property
    def has_image(self) -> bool:
        return self._session is not None

    def load_image(self, source: str | Path | bytes | BinaryIO) -> ImageSession:
        """Decode ``source`` and start a new session.

        On decode failure the previous session is dropped too, so no stale
        image stays visible.

        :raises ImageDecodeError: If the image cannot be decoded
        """
        try:
            buffer = load_image(source)
        except ImageDecodeError:
            logger.error("[Editor] Image load failed, clearing session")
            self.clear()
            raise
        name = str(source) if isinstance(source, str | Path) else None
        return self.load_buffer(buffer, source=name)

    def load_buffer(self, buffer: PixelBuffer, source: str | None = None) -> ImageSession:
        """Start a new session from an already decoded buffer.

        Sliders start at identity; the view mode carries over from the
        previous session.

        :raises InvalidInputError: If ``buffer`` is None; the current session is left as is
        """
        if buffer is None:
            raise InvalidInputError("load_buffer() needs a decoded buffer")
        self._debouncer.cancel()
        with self._lock:
            self._version += 1
            self._session = ImageSession(
                original=buffer, view_mode=self._view_mode, source=source
            )
            logger.info("[Editor] Image loaded: %dx%d", buffer.width, buffer.height)
            return self._session

    def clear(self) -> None:
        """Drop the session and any pending or in-flight result."""
        self._debouncer.cancel()
        with self._lock:
            self._version += 1
            if self._session is not None:
                logger.info("[Editor] Session cleared")
            self._session = None

    def _require_session(self) -> ImageSession:
        if self._session is None:
            raise InvalidInputError("No image loaded")
        return self._session

    # ========================================================================
    # Parameters
    # ========================================================================

    @property
    def params(self) -> FilterParameters:
        return self._require_session().params

    def set_parameter(self, name: str, value: float) -> FilterParameters:
        """Set one slider and schedule a debounced re-filter.

        :raises InvalidInputError: If no image is loaded
        :raises ValueError: If ``name`` is unknown or ``value`` out of range
        """
        return self.update_parameters(**{name: value})

    def update_parameters(self, **values: float) -> FilterParameters:
        """Set several sliders at once and schedule a debounced re-filter."""
        checked = {name: CONFIG.get_spec(name).validate(v) for name, v in values.items()}
        with self._lock:
            session = self._require_session()
            session.params = session.params.replace(**checked)
            self._version += 1
            params = session.params
        self._debouncer()
        return params

    def set_parameters(self, params: FilterParameters) -> FilterParameters:
        """Replace all sliders and schedule a debounced re-filter."""
        params.validate()
        with self._lock:
            self._require_session().params = params
            self._version += 1
        self._debouncer()
        return params

    def load_preset(self, preset: str | FilterParameters) -> FilterParameters:
        """Apply a named preset (see ``tonekit.config.presets``) or a parameter set."""
        if isinstance(preset, str):
            preset = get_preset(preset)
        return self.set_parameters(preset)

    def reset_parameters(self) -> None:
        """Revert to the original: all sliders to identity, filtered = original."""
        self._debouncer.cancel()
        with self._lock:
            session = self._require_session()
            self._version += 1
            session.params = FilterParameters()
            session.filtered = session.original.copy()
        logger.info("[Editor] Filters reset to original")

    # ========================================================================
    # Filtering
    # ========================================================================

    def apply_now(self) -> PixelBuffer | None:
        """Run the pipeline for the current parameters and commit the result.

        :returns: The committed buffer, or None if the result went stale
            while computing (or no image is loaded)
        """
        with self._lock:
            session = self._session
            if session is None:
                logger.warning("[Editor] Apply requested but no image is loaded")
                return None
            version = self._version
            params = session.params

        result = self.pipeline.apply(session.original, params)

        with self._lock:
            if version != self._version or session is not self._session:
                logger.debug("[Editor] Discarding stale result for %r", params)
                return None
            session.filtered = result
            return result

    def flush(self) -> bool:
        """Run a pending debounced apply immediately.

        :returns: True if an apply was pending
        """
        return self._debouncer.flush()

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    # ========================================================================
    # Presentation
    # ========================================================================

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    def set_view_mode(self, mode: ViewMode | str) -> Composite | None:
        """Switch view mode and return the new presentation (None with no image)."""
        mode = ViewMode(mode)
        with self._lock:
            self._view_mode = mode
            if self._session is None:
                return None
            self._session.view_mode = mode
        return self.present()

    @property
    def theme(self) -> Theme:
        return self.theme_store.theme

    def toggle_theme(self) -> Theme:
        return self.theme_store.toggle()

    def present(self) -> Composite:
        """Compose the current view.

        :raises InvalidInputError: If no image is loaded
        """
        with self._lock:
            session = self._require_session()
            original, filtered, mode = session.original, session.filtered, session.view_mode
        return self.compositor.present(original, filtered, mode, self.theme_store.theme)

    # ========================================================================
    # Export
    # ========================================================================

    def export_bytes(
        self, format: str = "png", quality: float = DEFAULT_EXPORT_QUALITY
    ) -> tuple[bytes, str]:
        """Encode the filtered image.

        :returns: (encoded bytes, MIME type)
        """
        data = encode_image(self._require_session().filtered, format, quality)
        return data, MIME_TYPES[format]

    def export(
        self,
        path: str | Path,
        format: str | None = None,
        quality: float = DEFAULT_EXPORT_QUALITY,
    ) -> Path:
        """Write the filtered image to ``path`` (format from the suffix by default)."""
        return save_image(self._require_session().filtered, path, format, quality)

    def close(self) -> None:
        """Cancel any pending apply."""
        self._debouncer.cancel()

    def __repr__(self) -> str:
        session = self._session
        loaded = f"{session.width}x{session.height}" if session else "empty"
        return f"EditorController({loaded}, mode={self._view_mode.value})"
