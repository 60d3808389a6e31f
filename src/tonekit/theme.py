"""Persisted light/dark theme preference.

Stored as a small JSON document, e.g. ``{"theme": "dark"}``. A missing or
unreadable file means the default (light) theme.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tonekit.view import Theme

logger = logging.getLogger(__name__)

DEFAULT_THEME = Theme.LIGHT


class ThemeStore:
    """Reads and writes the user's theme choice.

    With ``path=None`` the choice is kept in memory only.

    Example:
        >>> store = ThemeStore("~/.config/tonekit/theme.json")
        >>> store.toggle()
        <Theme.DARK: 'dark'>
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path).expanduser() if path is not None else None
        self._theme = self._load()

    @property
    def theme(self) -> Theme:
        return self._theme

    def set(self, theme: Theme | str) -> Theme:
        """Apply and persist a theme.

        :raises ValueError: If ``theme`` is not "light" or "dark"
        """
        self._theme = Theme(theme)
        self._save()
        logger.info("[ThemeStore] Theme applied: %s", self._theme.value)
        return self._theme

    def toggle(self) -> Theme:
        """Switch between light and dark."""
        return self.set(Theme.LIGHT if self._theme is Theme.DARK else Theme.DARK)

    def _load(self) -> Theme:
        if self.path is None or not self.path.exists():
            return DEFAULT_THEME
        try:
            with open(self.path) as f:
                return Theme(json.load(f)["theme"])
        except (OSError, ValueError, KeyError, TypeError) as err:
            logger.warning(
                "[ThemeStore] Ignoring unreadable theme file %s (%s), using %s",
                self.path,
                err,
                DEFAULT_THEME.value,
            )
            return DEFAULT_THEME

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump({"theme": self._theme.value}, f, indent=2)

    def __repr__(self) -> str:
        return f"ThemeStore(theme={self._theme.value!r}, path={self.path})"
