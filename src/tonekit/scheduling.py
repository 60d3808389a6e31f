"""Debounce: coalesce bursts of calls into one call after a quiet period.

Example:
    >>> refresh = Debouncer(controller.apply_now, delay=0.15)
    >>> for value in range(100):   # slider drag
    ...     refresh()              # only the last call runs, 150 ms later
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from tonekit.constants import DEFAULT_DEBOUNCE_DELAY
from tonekit.validators import validate_range

logger = logging.getLogger(__name__)


class Debouncer:
    """Delays ``func`` until ``delay`` seconds pass without another call.

    Each call cancels the pending timer and starts a new one with the latest
    arguments. ``flush()`` runs a pending call immediately; ``cancel()``
    drops it. The callback runs on a timer thread.
    """

    @validate_range(0.0, 60.0, "delay", param_index=2)
    def __init__(self, func: Callable[..., Any], delay: float = DEFAULT_DEBOUNCE_DELAY):
        self.func = func
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: tuple[tuple, dict] | None = None

    def __call__(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.args = (self._timer,)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def _take(self, timer: threading.Timer | None = None) -> tuple[tuple, dict] | None:
        with self._lock:
            # A superseded timer that fired while losing the race for the lock
            if timer is not None and timer is not self._timer:
                return None
            call, self._pending = self._pending, None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            return call

    def _fire(self, timer: threading.Timer) -> None:
        call = self._take(timer)
        if call is None:
            return
        args, kwargs = call
        try:
            self.func(*args, **kwargs)
        except Exception:
            # Timer thread: there is no caller to raise to
            logger.exception("[Debouncer] Deferred call to %r failed", self.func)

    def flush(self) -> bool:
        """Run the pending call now on the calling thread.

        Errors propagate to the caller.

        :returns: True if a call was pending
        """
        call = self._take()
        if call is None:
            return False
        args, kwargs = call
        self.func(*args, **kwargs)
        return True

    def cancel(self) -> bool:
        """Drop the pending call.

        :returns: True if a call was pending
        """
        dropped = self._take() is not None
        if dropped:
            logger.debug("[Debouncer] Cancelled pending call to %r", self.func)
        return dropped


def debounce(delay: float = DEFAULT_DEBOUNCE_DELAY) -> Callable[[Callable[..., Any]], Debouncer]:
    """Decorator form of Debouncer.

    Example:
        >>> @debounce(0.2)
        ... def on_slider(value): ...
    """

    def decorator(func: Callable[..., Any]) -> Debouncer:
        return Debouncer(func, delay)

    return decorator
