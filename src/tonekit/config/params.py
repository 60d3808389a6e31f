"""Adjustment control configuration.

Defines the accepted range and identity value of all eight controls.
The parameter source validates user input against these; the pipeline
itself does not.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from tonekit.config.operations import ControlSpec
from tonekit.constants import PERCENT


@dataclass(frozen=True)
class ParamsConfig:
    """Specifications for every adjustment control, in pipeline order."""

    exposure: ControlSpec = ControlSpec(
        name="exposure",
        min_value=-100.0,
        max_value=100.0,
        description="Additive offset to all channels in 0-255 space",
    )

    contrast: ControlSpec = ControlSpec(
        name="contrast",
        min_value=-100.0,
        max_value=100.0,
        unit_scale=PERCENT,
        description="Factor ((v+100)/100)^2 around midpoint 128: -100=flat, 100=4x",
    )

    temperature: ControlSpec = ControlSpec(
        name="temperature",
        min_value=-100.0,
        max_value=100.0,
        description="Red/blue push: -100=cool, 100=warm",
    )

    tint: ControlSpec = ControlSpec(
        name="tint",
        min_value=-100.0,
        max_value=100.0,
        description="Green push: -100=green, 100=magenta",
    )

    saturation: ControlSpec = ControlSpec(
        name="saturation",
        min_value=-100.0,
        max_value=100.0,
        unit_scale=PERCENT,
        description="Blend around luma: -100=grayscale, 100=double saturation",
    )

    highlights: ControlSpec = ControlSpec(
        name="highlights",
        min_value=-100.0,
        max_value=100.0,
        unit_scale=PERCENT,
        description="Offset weighted by pixel brightness",
    )

    shadows: ControlSpec = ControlSpec(
        name="shadows",
        min_value=-100.0,
        max_value=100.0,
        unit_scale=PERCENT,
        description="Offset weighted by pixel darkness",
    )

    sepia: ControlSpec = ControlSpec(
        name="sepia",
        min_value=0.0,
        max_value=100.0,
        unit_scale=PERCENT,
        description="Blend toward the sepia matrix: 0=none, 100=full",
    )

    def get_spec(self, name: str) -> ControlSpec:
        """Get the specification for a control by name.

        :raises ValueError: If no control has that name
        """
        specs = self.get_all_specs()
        if name not in specs:
            raise ValueError(f'Unknown control "{name}". Valid controls: {sorted(specs)}')
        return specs[name]

    def get_all_specs(self) -> dict[str, ControlSpec]:
        """Get all control specs keyed by name, in pipeline order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


CONFIG = ParamsConfig()
