"""Adjustment parameter values.

FilterParameters holds the eight slider values in their user-facing units
and exposes the internal units the pipeline works in.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from tonekit.config.params import CONFIG


@dataclass(frozen=True)
class FilterParameters:
    """Slider values for one filter application.

    Every field defaults to 0, and the all-zero record is the identity:
    applying it reproduces the input exactly.

    Example:
        >>> params = FilterParameters(exposure=20, saturation=-100)
        >>> params.saturation_unit
        -1.0
        >>> params.is_neutral()
        False
    """

    exposure: float = 0.0  # -100 to 100, additive in 0-255 space
    contrast: float = 0.0  # -100 to 100
    highlights: float = 0.0  # -100 to 100
    shadows: float = 0.0  # -100 to 100
    saturation: float = 0.0  # -100 (grayscale) to 100
    temperature: float = 0.0  # -100 (cool) to 100 (warm)
    tint: float = 0.0  # -100 (green) to 100 (magenta)
    sepia: float = 0.0  # 0 to 100

    # ========================================================================
    # Internal units
    # ========================================================================

    @property
    def contrast_factor(self) -> float:
        """((contrast + 100) / 100) squared: 0 at -100, 1 at 0, 4 at 100."""
        factor = (self.contrast + 100.0) / 100.0
        return factor * factor

    @property
    def highlights_unit(self) -> float:
        return CONFIG.highlights.to_unit(self.highlights)

    @property
    def shadows_unit(self) -> float:
        return CONFIG.shadows.to_unit(self.shadows)

    @property
    def saturation_unit(self) -> float:
        return CONFIG.saturation.to_unit(self.saturation)

    @property
    def sepia_unit(self) -> float:
        return CONFIG.sepia.to_unit(self.sepia)

    # ========================================================================
    # Helpers
    # ========================================================================

    def is_neutral(self) -> bool:
        """Check if applying these values would have no effect."""
        return all(getattr(self, name) == 0.0 for name in CONFIG.get_all_specs())

    def clamp(self) -> FilterParameters:
        """Return a copy with every field clipped to its declared range."""
        return FilterParameters(
            **{name: spec.clamp(getattr(self, name)) for name, spec in CONFIG.get_all_specs().items()}
        )

    def validate(self) -> FilterParameters:
        """Check every field against its declared range.

        :returns: Self
        :raises TypeError: If a field is not a number
        :raises ValueError: If a field is out of range
        """
        for name, spec in CONFIG.get_all_specs().items():
            spec.validate(getattr(self, name))
        return self

    def replace(self, **changes: float) -> FilterParameters:
        """Return a copy with the given fields changed.

        :raises ValueError: If a name is not a control
        """
        for name in changes:
            CONFIG.get_spec(name)
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, float]:
        return {name: float(getattr(self, name)) for name in CONFIG.get_all_specs()}

    @classmethod
    def from_dict(cls, d: dict) -> FilterParameters:
        """Create FilterParameters from a dictionary, ignoring unknown keys.

        Example:
            >>> FilterParameters.from_dict({"exposure": 10, "comment": "ignored"})
            FilterParameters(exposure=10)
        """
        specs = CONFIG.get_all_specs()
        return cls(**{k: float(v) for k, v in d.items() if k in specs})

    def __repr__(self) -> str:
        changed = [f"{k}={v:g}" for k, v in self.to_dict().items() if v != 0.0]
        return f"FilterParameters({', '.join(changed)})"
