"""Argument validation decorators.

Used on the parameter-source side of the editor (controller methods),
never inside the pixel pipeline, which is total over its inputs.

Example:
    >>> class Editor:
    ...     @validate_range(0.0, 1.0, "quality")
    ...     def export(self, quality: float = 0.92): ...
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from numbers import Real
from typing import Any

_RANGE_HINTS = {
    "quality": "Use 1.0 for best quality, 0.92 is the default.",
    "sepia": "Use 0 for no sepia, 100 for full sepia.",
    "delay": "Use 0 to apply immediately.",
}


def _lookup(args: tuple, kwargs: dict[str, Any], name: str, param_index: int) -> tuple[bool, Any]:
    if name in kwargs:
        return True, kwargs[name]
    if len(args) > param_index:
        return True, args[param_index]
    return False, None


def validate_range(
    min_val: float, max_val: float, name: str, param_index: int = 1
) -> Callable[[Callable], Callable]:
    """Reject numeric arguments outside [min_val, max_val].

    :param min_val: Smallest accepted value
    :param max_val: Largest accepted value
    :param name: Argument name (also looked up in kwargs)
    :param param_index: Positional index of the argument (1 skips ``self``)
    :raises TypeError: If the value is not a number
    :raises ValueError: If the value is outside the range
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _lookup(args, kwargs, name, param_index)
            if found:
                if isinstance(value, bool) or not isinstance(value, Real):
                    raise TypeError(f"{name} must be a number, got {type(value).__name__}")
                if not min_val <= value <= max_val:
                    message = f"{name}={value} is outside valid range [{min_val}, {max_val}]."
                    hint = _RANGE_HINTS.get(name)
                    if hint:
                        message = f"{message} {hint}"
                    raise ValueError(message)
            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_choices(
    choices: Iterable[str], name: str, param_index: int = 1
) -> Callable[[Callable], Callable]:
    """Reject string arguments that are not one of ``choices``.

    ``None`` passes through so optional arguments can keep a None default.

    :param choices: Accepted values
    :param name: Argument name (also looked up in kwargs)
    :param param_index: Positional index of the argument (1 skips ``self``)
    :raises ValueError: If the value is not an accepted choice
    """
    allowed = frozenset(choices)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _lookup(args, kwargs, name, param_index)
            if found and value is not None and value not in allowed:
                options = ", ".join(sorted(allowed))
                raise ValueError(f'{name}="{value}" is not valid. Choose one of: {options}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
