"""Control specifications for the adjustment parameters.

This module defines the ControlSpec dataclass that specifies the input
range, default and identity value of each adjustment control.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True)
class ControlSpec:
    """Specification for a single adjustment control.

    Attributes:
        name: Control name (e.g., "exposure", "sepia")
        min_value: Minimum accepted slider value
        max_value: Maximum accepted slider value
        default: Value a freshly loaded image starts at
        neutral: Value that causes no change (identity)
        unit_scale: Divisor mapping the slider value into the pipeline's internal unit
        description: Human-readable description
    """

    name: str
    min_value: float
    max_value: float
    default: float = 0.0
    neutral: float = 0.0
    unit_scale: float = 1.0
    description: str = ""

    def validate(self, value: float) -> float:
        """Check that value is a number inside the accepted range.

        :param value: Value to validate
        :returns: Value as float
        :raises TypeError: If value is not a number
        :raises ValueError: If value is outside [min_value, max_value]
        """
        if isinstance(value, bool) or not isinstance(value, Real):
            raise TypeError(f"{self.name}: expected number, got {type(value).__name__}")
        if not self.min_value <= value <= self.max_value:
            raise ValueError(
                f"{self.name}={value} is outside valid range "
                f"[{self.min_value:g}, {self.max_value:g}]"
            )
        return float(value)

    def clamp(self, value: float) -> float:
        """Clamp value to the accepted range."""
        return max(self.min_value, min(self.max_value, float(value)))

    def to_unit(self, value: float) -> float:
        """Map a slider value into the pipeline's internal unit."""
        return value / self.unit_scale

    def is_neutral(self, value: float, tolerance: float = 1e-9) -> bool:
        """Check if value is effectively neutral (no change)."""
        return abs(value - self.neutral) < tolerance

    def __repr__(self) -> str:
        return (
            f"ControlSpec({self.name}, "
            f"range=[{self.min_value:g}, {self.max_value:g}], "
            f"default={self.default:g}, neutral={self.neutral:g})"
        )
